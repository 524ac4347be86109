"""远程调用元数据。

接口方法通过 ``@rpc_call`` 标记为远程调用，参数通过
``Annotated[T, rpc_param("q")]`` 覆盖编码目标名。

使用示例:
    class SearchService(ABC):
        @rpc_call("search.v2")
        @abstractmethod
        def search(self, term: Annotated[str, rpc_param("q")]) -> list[Item]:
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from aurimyth.rpc_kit.client.exceptions import ConfigurationError

F = TypeVar("F", bound=Callable[..., Any])

RPC_CALL_ATTRIBUTE = "__rpc_call__"


@dataclass(frozen=True)
class RpcCall:
    """方法级元数据。

    Attributes:
        name: 远程方法名覆盖，空字符串表示使用方法自身名称
    """

    name: str = ""


@dataclass(frozen=True)
class RpcParam:
    """参数级元数据。

    Attributes:
        name: 编码目标名覆盖，空字符串表示使用参数声明名称
    """

    name: str = ""


def _check_name(name: object) -> str:
    if not isinstance(name, str):
        raise ConfigurationError(f"远程名称必须是字符串: {name!r}")
    return name


@overload
def rpc_call(func: F) -> F: ...


@overload
def rpc_call(func: str = "", *, name: str = "") -> Callable[[F], F]: ...


def rpc_call(func: Any = "", *, name: str = "") -> Any:
    """标记方法为远程调用。

    可以直接作为装饰器使用：
        @rpc_call
        def ping(self) -> str: ...

    或指定远程方法名：
        @rpc_call("search.v2")
        @rpc_call(name="search.v2")

    Args:
        func: 被装饰的方法，或远程方法名
        name: 远程方法名（关键字形式）

    Returns:
        被装饰的方法或装饰器
    """
    if callable(func):
        setattr(func, RPC_CALL_ATTRIBUTE, RpcCall(_check_name(name)))
        return func

    if func and name and func != name:
        raise ConfigurationError(f"远程方法名冲突: {func!r} != {name!r}")
    metadata = RpcCall(_check_name(func or name))

    def decorator(method: F) -> F:
        setattr(method, RPC_CALL_ATTRIBUTE, metadata)
        return method

    return decorator


def rpc_param(name: str = "") -> RpcParam:
    """构建参数级元数据，用于 ``Annotated`` 注解。

    Args:
        name: 编码目标名

    Returns:
        RpcParam: 参数元数据
    """
    return RpcParam(_check_name(name))


def get_rpc_call(func: object) -> RpcCall | None:
    """获取方法上的远程调用元数据。

    Args:
        func: 方法

    Returns:
        RpcCall | None: 元数据，未标记时返回 None
    """
    metadata = getattr(func, RPC_CALL_ATTRIBUTE, None)
    if metadata is not None and not isinstance(metadata, RpcCall):
        raise ConfigurationError(f"{func!r} 上的远程调用元数据不合法: {metadata!r}")
    return metadata


__all__ = [
    "RpcCall",
    "RpcParam",
    "get_rpc_call",
    "rpc_call",
    "rpc_param",
]
