"""类型索引注册表。

参数编码器、结果解码器都按声明类型精确匹配，不做父类回退：
为 int 注册的编码器不会用于 bool 参数。
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

Encoder = Callable[[str, Any, dict[str, Any]], None]
Decoder = Callable[[Any], Any]

H = TypeVar("H")


def default_encoder(name: str, value: Any, params: dict[str, Any]) -> None:
    """默认参数编码器：原样写入参数集合。"""
    params[name] = value


def identity_decoder(raw: Any) -> Any:
    """默认结果解码器：不做转换。"""
    return raw


class TypeRegistry(Generic[H]):
    """按类型标识索引的处理器注册表。

    键可以是类、泛型别名（如 ``list[Item]``）或 ``typing.Any``，
    以键对象相等判断是否命中。注册表只增不减。

    注意：注册与查询并发不安全，注册应在生成客户端之前的单线程阶段完成。
    """

    def __init__(self, default: H) -> None:
        """初始化注册表。

        Args:
            default: 未注册类型使用的默认处理器
        """
        self._default = default
        self._handlers: dict[Any, H] = {}

    @property
    def default(self) -> H:
        """默认处理器。"""
        return self._default

    def register(self, type_: Any, handler: H) -> None:
        """注册处理器，覆盖同一类型的已有注册。

        Args:
            type_: 声明类型
            handler: 处理器
        """
        self._handlers[type_] = handler

    def lookup(self, type_: Any) -> H:
        """查询处理器，未注册时返回默认处理器。

        Args:
            type_: 声明类型

        Returns:
            处理器

        Raises:
            TypeError: 类型标识不可哈希
        """
        return self._handlers.get(type_, self._default)

    def copy(self) -> TypeRegistry[H]:
        """复制注册表（浅拷贝）。"""
        clone: TypeRegistry[H] = TypeRegistry(self._default)
        clone._handlers.update(self._handlers)
        return clone

    def __contains__(self, type_: object) -> bool:
        return type_ in self._handlers

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._handlers))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"<TypeRegistry types={len(self._handlers)}>"


__all__ = [
    "Decoder",
    "Encoder",
    "TypeRegistry",
    "default_encoder",
    "identity_decoder",
]
