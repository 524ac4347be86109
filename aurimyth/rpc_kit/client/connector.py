"""连接器协议。

连接器负责真正发送远程调用，本库只消费该协议，不提供实现。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connector(Protocol):
    """远程调用连接器。

    两种调用形式在线路上可能不同，必须区分：
        connector.execute("ping")                  # 无参数调用
        connector.execute("find", {"page": 1})     # 带命名参数调用

    传输层/协议层错误由实现方抛出，原样传播给调用方。
    """

    def execute(self, method: str, params: Mapping[str, Any] | None = None) -> Any:
        """执行远程调用。

        Args:
            method: 远程方法名
            params: 命名参数；无参数调用时不传

        Returns:
            Any: 原始调用结果
        """
        ...


__all__ = [
    "Connector",
]
