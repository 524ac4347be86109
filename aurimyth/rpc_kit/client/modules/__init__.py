"""扩展模块。

扩展模块在生成客户端之前向内省器注册编码器/解码器。
通过入口点（entry points）发现，分组默认为 ``aurimyth.rpc_kit.client_modules``：

    [project.entry-points."aurimyth.rpc_kit.client_modules"]
    money = "my_package.rpc:MoneyModule"

入口点可以指向类（无参实例化）、模块或实例，只要提供
``initialize_introspector(introspector)`` 即可。
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from aurimyth.rpc_kit.client.exceptions import ExtensionModuleError
from aurimyth.rpc_kit.common.logging import logger
from aurimyth.rpc_kit.config import DEFAULT_ENTRY_POINT_GROUP, BaseConfig, ModuleSettings

if TYPE_CHECKING:
    from aurimyth.rpc_kit.client.introspector import Introspector


@runtime_checkable
class ClientModule(Protocol):
    """客户端扩展模块协议。"""

    def initialize_introspector(self, introspector: Introspector) -> None:
        """向内省器注册编码器/解码器。"""
        ...


def _module_name(module: object) -> str:
    return getattr(module, "__name__", None) or type(module).__qualname__


class ModuleRegistry:
    """扩展模块注册中心。

    按对象身份去重，保持注册顺序。入口点只扫描一次，之后只读。
    """

    def __init__(self) -> None:
        """初始化扩展模块注册中心。"""
        self._modules: list[ClientModule] = []
        self._discovered = False

    @property
    def discovered(self) -> bool:
        """是否已扫描入口点。"""
        return self._discovered

    def add(self, module: object) -> None:
        """注册扩展模块。

        Args:
            module: 扩展模块

        Raises:
            ExtensionModuleError: 模块未提供 initialize_introspector
        """
        if not isinstance(module, ClientModule):
            raise ExtensionModuleError(
                f"扩展模块缺少 initialize_introspector: {module!r}",
                module=module,
            )

        if any(existing is module for existing in self._modules):
            return

        self._modules.append(module)
        logger.info(f"注册扩展模块: {_module_name(module)}")

    def discover(
        self,
        group: str = DEFAULT_ENTRY_POINT_GROUP,
        disabled: Iterable[str] = (),
        strict: bool = True,
    ) -> None:
        """扫描入口点并注册扩展模块（只执行一次）。

        Args:
            group: 入口点分组
            disabled: 跳过的入口点名称
            strict: 加载失败时是否抛出异常（否则记录警告并跳过）

        Raises:
            ExtensionModuleError: strict 模式下入口点加载失败
        """
        if self._discovered:
            return

        skipped = set(disabled)
        # 全部加载成功后才注册
        loaded_modules: list[ClientModule] = []
        for entry_point in entry_points(group=group):
            if entry_point.name in skipped:
                logger.info(f"扩展模块已禁用: {entry_point.name}")
                continue

            try:
                loaded = entry_point.load()
                module = loaded() if isinstance(loaded, type) else loaded
                if not isinstance(module, ClientModule):
                    raise ExtensionModuleError(
                        f"扩展模块缺少 initialize_introspector: {module!r}",
                        module=module,
                    )
                loaded_modules.append(module)
            except Exception as exc:
                if strict:
                    logger.error(f"扩展模块加载失败: {entry_point.name} ({entry_point.value}), error={exc}")
                    if isinstance(exc, ExtensionModuleError):
                        raise
                    raise ExtensionModuleError(
                        f"扩展模块加载失败: {entry_point.name}: {exc}",
                        module=entry_point.name,
                    ) from exc
                logger.opt(exception=exc).warning(f"扩展模块加载失败，已跳过: {entry_point.name}")

        for module in loaded_modules:
            self.add(module)
        self._discovered = True
        logger.debug(f"扩展模块扫描完成: {group}, 共 {len(self._modules)} 个")

    def __iter__(self) -> Iterator[ClientModule]:
        return iter(tuple(self._modules))

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module: object) -> bool:
        return any(existing is module for existing in self._modules)


# 全局扩展模块注册中心实例
_module_registry = ModuleRegistry()


def get_module_registry() -> ModuleRegistry:
    """获取全局扩展模块注册中心实例。"""
    return _module_registry


def initialize_modules(
    introspector: Introspector,
    modules: Iterable[ClientModule],
    strict: bool = True,
) -> None:
    """依次用扩展模块初始化内省器，每个模块调用一次。

    Args:
        introspector: 内省器
        modules: 扩展模块
        strict: 初始化失败时是否抛出异常（否则记录警告并跳过）

    Raises:
        ExtensionModuleError: strict 模式下模块初始化失败
    """
    for module in modules:
        name = _module_name(module)
        try:
            module.initialize_introspector(introspector)
        except Exception as exc:
            if strict:
                logger.error(f"扩展模块初始化失败: {name}, error={exc}")
                raise ExtensionModuleError(f"扩展模块初始化失败: {name}: {exc}", module=module) from exc
            logger.opt(exception=exc).warning(f"扩展模块初始化失败，已跳过: {name}")
        else:
            logger.debug(f"扩展模块已初始化: {name}")


def create_default(
    settings: ModuleSettings | None = None,
    registry: ModuleRegistry | None = None,
    factory: Callable[[], Introspector] | None = None,
) -> Introspector:
    """创建由扩展模块初始化的内省器。

    首次调用时扫描入口点；每次调用都返回新的内省器实例，
    各实例的注册表互不共享。

    Args:
        settings: 扩展模块配置（默认从环境变量和 .env 加载）
        registry: 扩展模块注册中心（默认使用全局注册中心）
        factory: 内省器工厂（默认 Introspector）

    Returns:
        Introspector: 内省器
    """
    if settings is None:
        settings = BaseConfig().modules
    if registry is None:
        registry = get_module_registry()
    if factory is None:
        from aurimyth.rpc_kit.client.introspector import Introspector

        factory = Introspector

    registry.discover(
        group=settings.entry_point_group,
        disabled=settings.disabled,
        strict=settings.strict,
    )

    introspector = factory()
    initialize_modules(introspector, registry, strict=settings.strict)
    return introspector


__all__ = [
    "ClientModule",
    "ModuleRegistry",
    "create_default",
    "get_module_registry",
    "initialize_modules",
]
