"""内置扩展模块。

把标准库中常见的非 JSON 原生类型编码为字符串：
- datetime / date / time: ISO 8601
- UUID: 标准十六进制形式
- Decimal: 十进制字符串（不经过 float，避免精度丢失）
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from aurimyth.rpc_kit.client.introspector import Introspector


def encode_isoformat(name: str, value: Any, params: dict[str, Any]) -> None:
    """以 ISO 8601 格式写入日期时间参数。"""
    params[name] = value.isoformat()


def encode_str(name: str, value: Any, params: dict[str, Any]) -> None:
    """以字符串形式写入参数。"""
    params[name] = str(value)


class BuiltinModule:
    """内置扩展模块。"""

    def initialize_introspector(self, introspector: Introspector) -> None:
        for type_ in (datetime, date, time):
            introspector.register_parameter_encoder(type_, encode_isoformat)
        introspector.register_parameter_encoder(UUID, encode_str)
        introspector.register_parameter_encoder(Decimal, encode_str)


__all__ = [
    "BuiltinModule",
    "encode_isoformat",
    "encode_str",
]
