"""异常基类定义。

所有 rpc_kit 异常的最顶层基类。
"""

from __future__ import annotations


class FoundationError(Exception):
    """基础异常类。

    所有自定义异常都应继承此类，统一携带 message 属性。

    Attributes:
        message: 错误消息
    """

    def __init__(self, message: str = "", *args: object) -> None:
        """初始化异常。

        Args:
            message: 错误消息
            *args: 其他参数
        """
        super().__init__(message, *args)
        self.message = message

    def __str__(self) -> str:
        """返回异常字符串表示。"""
        return self.message


__all__ = [
    "FoundationError",
]
