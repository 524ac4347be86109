"""RPC 客户端生成。

根据接口类上的元数据自动生成远程调用客户端。
"""

from .connector import Connector
from .exceptions import (
    ConfigurationError,
    ErrorCode,
    ExtensionModuleError,
    RpcKitError,
    UnsupportedOperationError,
)
from .introspector import Introspector, rpc_call, rpc_param
from .modules import ClientModule, ModuleRegistry, create_default, get_module_registry

__all__ = [
    "ClientModule",
    "ConfigurationError",
    "Connector",
    "ErrorCode",
    "ExtensionModuleError",
    "Introspector",
    "ModuleRegistry",
    "RpcKitError",
    "UnsupportedOperationError",
    "create_default",
    "get_module_registry",
    "rpc_call",
    "rpc_param",
]
