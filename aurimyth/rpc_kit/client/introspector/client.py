"""生成客户端。

为任意接口类在运行时生成子类，每个远程方法都转发到调度表中对应的
CallDescriptor。调度表在生成时构建，之后只读，可在多线程间共享。
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import functools
import inspect
import types
from typing import Any

from aurimyth.rpc_kit.client.connector import Connector
from aurimyth.rpc_kit.client.exceptions import UnsupportedOperationError
from aurimyth.rpc_kit.client.introspector.call import CallDescriptor

CLIENT_ATTRIBUTE = "__rpc_client__"


class Client:
    """远程调用调度器。

    持有连接器和只读调度表，按方法名精确查找调用描述并执行。
    """

    def __init__(self, connector: Connector, calls: Mapping[str, CallDescriptor]) -> None:
        """初始化调度器。

        Args:
            connector: 连接器
            calls: 方法名 -> 调用描述
        """
        self._connector = connector
        self._calls = types.MappingProxyType(dict(calls))

    @property
    def connector(self) -> Connector:
        """连接器。"""
        return self._connector

    @property
    def calls(self) -> Mapping[str, CallDescriptor]:
        """只读调度表。"""
        return self._calls

    def execute(self, method_name: str, arguments: Sequence[Any]) -> Any:
        """执行远程调用。

        Args:
            method_name: 接口方法名
            arguments: 按声明顺序排列的实参

        Returns:
            Any: 解码后的结果
        """
        return self._calls[method_name].execute(self._connector, arguments)

    def __repr__(self) -> str:
        return f"<Client calls={list(self._calls)}>"


def _make_remote_method(name: str, func: Callable[..., Any]) -> Callable[..., Any]:
    signature = inspect.signature(func)

    @functools.wraps(func)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        bound = signature.bind(self, *args, **kwargs)
        bound.apply_defaults()
        # 第一个是 self
        arguments = tuple(bound.arguments.values())[1:]
        return getattr(self, CLIENT_ATTRIBUTE).execute(name, arguments)

    # functools.wraps 会复制抽象标记
    method.__isabstractmethod__ = False
    return method


def _make_unsupported_member(interface: type, name: str, member: Any) -> Any:
    message = f"{interface.__name__}.{name} 不是远程调用方法，生成客户端未实现"

    def unsupported(self: Any, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedOperationError(message)

    if isinstance(member, property):
        return property(unsupported, doc=member.__doc__)

    wrapper = type(member) if isinstance(member, (staticmethod, classmethod)) else None
    func = member.__func__ if wrapper is not None else member
    if callable(func):
        unsupported = functools.wraps(func)(unsupported)
        unsupported.__isabstractmethod__ = False
    return wrapper(unsupported) if wrapper is not None else unsupported


def generate_client_class(interface: type, methods: Mapping[str, Callable[..., Any]]) -> type:
    """为接口生成客户端类。

    远程方法替换为转发函数；没有远程元数据的抽象成员替换为抛出
    UnsupportedOperationError 的实现；其余成员保持接口自身行为。

    Args:
        interface: 接口类
        methods: 方法名 -> 接口上的原始函数

    Returns:
        type: 接口的子类，构造参数为 Client
    """
    namespace: dict[str, Any] = {}

    abstract = getattr(interface, "__abstractmethods__", frozenset())
    for name in sorted(abstract):
        if name not in methods:
            namespace[name] = _make_unsupported_member(
                interface, name, inspect.getattr_static(interface, name)
            )

    for name, func in methods.items():
        namespace[name] = _make_remote_method(name, func)

    def __init__(self: Any, client: Client) -> None:
        setattr(self, CLIENT_ATTRIBUTE, client)

    def __repr__(self: Any) -> str:
        return f"<{type(self).__name__} calls={list(getattr(self, CLIENT_ATTRIBUTE).calls)}>"

    namespace["__init__"] = __init__
    namespace["__repr__"] = __repr__
    namespace["__module__"] = interface.__module__
    namespace["__doc__"] = interface.__doc__

    return types.new_class(
        f"{interface.__name__}RpcClient",
        (interface,),
        exec_body=lambda ns: ns.update(namespace),
    )


__all__ = [
    "CLIENT_ATTRIBUTE",
    "Client",
    "generate_client_class",
]
