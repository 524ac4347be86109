"""AuriMyth RPC Kit - 客户端 RPC 绑定生成工具包。

根据接口类上的元数据，自动生成把方法调用映射为远程调用的客户端实现。

模块结构：
- common: 最基础层（异常基类、日志系统）
- config: 配置管理（pydantic-settings）
- client: 客户端生成（元数据、编码器/解码器注册表、调用描述、扩展模块）
- json: Pydantic 转换工具
- testing: 测试工具（记录调用的连接器）
"""

from . import client, common, config, json, testing
from .client import (
    Connector,
    Introspector,
    create_default,
    rpc_call,
    rpc_param,
)

__version__ = "0.1.0"
__all__ = [
    "Connector",
    "Introspector",
    "client",
    "common",
    "config",
    "create_default",
    "json",
    "rpc_call",
    "rpc_param",
    "testing",
]
