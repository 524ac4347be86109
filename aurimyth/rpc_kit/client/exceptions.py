"""客户端生成异常定义。

只覆盖生成阶段与扩展模块加载阶段的错误。
连接器抛出的传输错误、解码器抛出的类型错误原样向上传播，不做包装。
"""

from __future__ import annotations

from enum import Enum

from aurimyth.rpc_kit.common.exceptions import FoundationError


class ErrorCode(str, Enum):
    """错误代码枚举。"""

    UNKNOWN_ERROR = "1000"

    # 生成阶段错误 (2xxx)
    CONFIGURATION_ERROR = "2000"
    UNSUPPORTED_OPERATION = "2001"

    # 扩展模块错误 (3xxx)
    EXTENSION_MODULE_ERROR = "3000"


class RpcKitError(FoundationError):
    """rpc_kit 异常基类。

    Attributes:
        message: 错误消息
        code: 错误代码
    """

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __repr__(self) -> str:
        """字符串表示。"""
        return f"<{self.__class__.__name__} code={self.code.value} message={self.message}>"


class ConfigurationError(RpcKitError):
    """接口定义不合法（元数据冲突、注解无法解析等）。

    在生成客户端时抛出，不会生成部分客户端。
    """

    code = ErrorCode.CONFIGURATION_ERROR


class UnsupportedOperationError(RpcKitError, NotImplementedError):
    """调用了生成客户端上未实现的抽象方法。"""

    code = ErrorCode.UNSUPPORTED_OPERATION


class ExtensionModuleError(RpcKitError):
    """扩展模块加载或初始化失败。

    Attributes:
        module: 出错的模块（或入口点名称）
    """

    code = ErrorCode.EXTENSION_MODULE_ERROR

    def __init__(self, message: str, module: object = None) -> None:
        super().__init__(message)
        self.module = module


__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "ExtensionModuleError",
    "RpcKitError",
    "UnsupportedOperationError",
]
