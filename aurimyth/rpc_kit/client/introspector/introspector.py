"""客户端接口内省器。

扫描接口类上带 ``@rpc_call`` 元数据的方法，为每个方法构建 CallDescriptor，
并生成把这些方法映射为远程调用的客户端实例。
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import inspect
import sys
import types
from typing import TYPE_CHECKING, Annotated, Any, TypeVar, get_args, get_origin, get_type_hints

from aurimyth.rpc_kit.client.connector import Connector
from aurimyth.rpc_kit.client.exceptions import ConfigurationError
from aurimyth.rpc_kit.client.introspector.call import BoundEncoder, CallDescriptor
from aurimyth.rpc_kit.client.introspector.client import Client, generate_client_class
from aurimyth.rpc_kit.client.introspector.metadata import RpcParam, get_rpc_call
from aurimyth.rpc_kit.client.introspector.registry import (
    Decoder,
    Encoder,
    TypeRegistry,
    default_encoder,
    identity_decoder,
)
from aurimyth.rpc_kit.common.logging import LoggerMixin

if TYPE_CHECKING:
    from aurimyth.rpc_kit.client.modules import ModuleRegistry
    from aurimyth.rpc_kit.config import ModuleSettings

T = TypeVar("T")
H = TypeVar("H", Encoder, Decoder)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _resolve_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """解析函数的类型注解（保留 Annotated）。"""
    if sys.version_info >= (3, 11):
        return get_type_hints(func, include_extras=True)
    # 3.10 会为默认值为 None 的参数自动加上 Optional
    holder = types.SimpleNamespace(__annotations__=dict(getattr(func, "__annotations__", {})))
    return get_type_hints(holder, globalns=getattr(func, "__globals__", {}), include_extras=True)


def _split_annotation(hint: Any) -> tuple[Any, list[Any]]:
    """拆分 Annotated[T, ...] 为 (T, 元数据列表)。"""
    if get_origin(hint) is Annotated:
        base, *metadata = get_args(hint)
        return base, metadata
    return hint, []


class Introspector(LoggerMixin):
    """接口内省器。

    职责：
    1. 管理参数编码器、结果解码器注册表
    2. 为接口方法构建调用描述
    3. 生成客户端实例

    注册表可以在任何时候扩展，但只影响之后生成的客户端，
    已生成客户端的调用描述保持不变。

    使用示例:
        introspector = Introspector.create_default()
        introspector.register_result_decoder(list[Item], lambda raw: [Item(**r) for r in raw])

        service = introspector.create_client(SearchService, connector)
        items = service.search("cat")
    """

    def __init__(self) -> None:
        """初始化内省器。"""
        self._encoders: TypeRegistry[Encoder] = TypeRegistry(default_encoder)
        self._decoders: TypeRegistry[Decoder] = TypeRegistry(identity_decoder)

    @property
    def encoders(self) -> TypeRegistry[Encoder]:
        """参数编码器注册表。"""
        return self._encoders

    @property
    def decoders(self) -> TypeRegistry[Decoder]:
        """结果解码器注册表。"""
        return self._decoders

    def register_parameter_encoder(
        self,
        type_: Any,
        encoder: Encoder | None = None,
    ) -> Encoder | Callable[[Encoder], Encoder]:
        """注册参数编码器。

        可以作为装饰器使用：
            @introspector.register_parameter_encoder(datetime)
            def encode_datetime(name, value, params):
                params[name] = value.isoformat()

        或直接调用：
            introspector.register_parameter_encoder(datetime, encode_datetime)

        Args:
            type_: 参数声明类型（精确匹配）
            encoder: 编码器 ``(name, value, params) -> None``

        Returns:
            Encoder | Callable: 编码器或装饰器
        """
        return self._register(self._encoders, "参数编码器", type_, encoder)

    def register_result_decoder(
        self,
        type_: Any,
        decoder: Decoder | None = None,
    ) -> Decoder | Callable[[Decoder], Decoder]:
        """注册结果解码器。

        用法同 register_parameter_encoder。

        Args:
            type_: 返回值声明类型（精确匹配）
            decoder: 解码器 ``(raw) -> value``

        Returns:
            Decoder | Callable: 解码器或装饰器
        """
        return self._register(self._decoders, "结果解码器", type_, decoder)

    def _register(
        self,
        registry: TypeRegistry[H],
        kind: str,
        type_: Any,
        handler: H | None,
    ) -> H | Callable[[H], H]:
        def decorator(func: H) -> H:
            registry.register(type_, func)
            self.logger.debug(f"注册{kind}: {type_!r} -> {getattr(func, '__qualname__', func)!r}")
            return func

        if handler is None:
            return decorator
        return decorator(handler)

    def create_client(self, interface: type[T], connector: Connector) -> T:
        """生成接口的客户端实例。

        Args:
            interface: 接口类
            connector: 连接器

        Returns:
            接口子类的实例，所有远程方法调用都经由连接器执行

        Raises:
            ConfigurationError: 接口定义不合法
        """
        methods = self.get_remote_methods(interface)
        client = Client(connector, self._build_calls(interface, methods))
        client_class = generate_client_class(interface, methods)
        self.logger.debug(f"已生成客户端: {interface.__qualname__}, 远程方法 {len(methods)} 个")
        return client_class(client)

    def build_descriptors(self, interface: type) -> Mapping[str, CallDescriptor]:
        """构建接口的调度表。

        Args:
            interface: 接口类

        Returns:
            Mapping[str, CallDescriptor]: 只读调度表，方法名 -> 调用描述

        Raises:
            ConfigurationError: 接口定义不合法
        """
        return types.MappingProxyType(
            self._build_calls(interface, self.get_remote_methods(interface))
        )

    def _build_calls(
        self,
        interface: type,
        methods: Mapping[str, Callable[..., Any]],
    ) -> dict[str, CallDescriptor]:
        return {name: self.build_call(interface, name, func) for name, func in methods.items()}

    def get_remote_methods(self, interface: type) -> dict[str, Callable[..., Any]]:
        """查找接口上所有带远程调用元数据的方法（包含继承的方法）。

        Args:
            interface: 接口类

        Returns:
            dict[str, Callable]: 方法名 -> 原始函数

        Raises:
            ConfigurationError: 接口不是类，或元数据标记在静态方法/类方法上
        """
        if not isinstance(interface, type):
            raise ConfigurationError(f"接口必须是类: {interface!r}")

        methods: dict[str, Callable[..., Any]] = {}
        for name in dir(interface):
            member = inspect.getattr_static(interface, name, None)
            if isinstance(member, (staticmethod, classmethod)):
                if get_rpc_call(member.__func__) is not None:
                    raise ConfigurationError(
                        f"{interface.__qualname__}.{name} 是静态方法或类方法，不能作为远程调用"
                    )
                continue
            if inspect.isfunction(member) and get_rpc_call(member) is not None:
                self.logger.debug(f"发现 {interface.__qualname__}.{name} 方法作为远程调用")
                methods[name] = member
        return methods

    def build_call(self, interface: type, name: str, func: Callable[..., Any]) -> CallDescriptor:
        """为单个方法构建调用描述。

        步骤：
        1. 远程方法名：元数据中的覆盖名（非空），否则为方法名
        2. 按声明顺序为每个参数确定目标名、查找编码器并绑定
        3. 按返回值声明类型查找解码器

        Args:
            interface: 接口类（用于错误信息）
            name: 方法名
            func: 原始函数

        Returns:
            CallDescriptor: 调用描述

        Raises:
            ConfigurationError: 元数据冲突或注解无法解析
        """
        qualname = f"{interface.__qualname__}.{name}"
        metadata = get_rpc_call(func)
        if metadata is None:
            raise ConfigurationError(f"{qualname} 没有远程调用元数据")

        try:
            hints = _resolve_hints(func)
        except Exception as exc:
            raise ConfigurationError(f"{qualname} 的类型注解无法解析: {exc}") from exc

        parameters = list(inspect.signature(func).parameters.values())[1:]
        encoders: list[BoundEncoder] = []
        for parameter in parameters:
            if parameter.kind in _VARIADIC:
                raise ConfigurationError(f"{qualname} 不支持可变参数: {parameter}")
            encoders.append(self._create_parameter_encoder(qualname, parameter, hints))

        return_type, _ = _split_annotation(hints.get("return", Any))
        decoder = self._lookup(self._decoders, qualname, return_type)

        return CallDescriptor(
            name=metadata.name or name,
            encoders=tuple(encoders),
            decoder=decoder,
        )

    def _create_parameter_encoder(
        self,
        qualname: str,
        parameter: inspect.Parameter,
        hints: dict[str, Any],
    ) -> BoundEncoder:
        type_, extras = _split_annotation(hints.get(parameter.name, Any))
        markers = [extra for extra in extras if isinstance(extra, RpcParam)]
        if len(markers) > 1:
            raise ConfigurationError(f"{qualname} 的参数 {parameter.name} 声明了多个 rpc_param")

        target = parameter.name
        if markers and markers[0].name:
            target = markers[0].name

        return BoundEncoder(self._lookup(self._encoders, qualname, type_), target)

    @staticmethod
    def _lookup(registry: TypeRegistry[H], qualname: str, type_: Any) -> H:
        try:
            return registry.lookup(type_)
        except TypeError as exc:
            raise ConfigurationError(f"{qualname} 的类型 {type_!r} 无法作为注册表键") from exc

    @classmethod
    def create_default(
        cls,
        settings: ModuleSettings | None = None,
        registry: ModuleRegistry | None = None,
    ) -> Introspector:
        """创建由扩展模块初始化的内省器。

        Args:
            settings: 扩展模块配置（默认从环境变量加载）
            registry: 扩展模块注册中心（默认使用全局注册中心）

        Returns:
            Introspector: 新的内省器实例
        """
        from aurimyth.rpc_kit.client.modules import create_default

        return create_default(settings=settings, registry=registry, factory=cls)


__all__ = [
    "Introspector",
]
