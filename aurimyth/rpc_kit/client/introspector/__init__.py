"""客户端接口内省。

提供：
- 远程调用元数据（rpc_call / rpc_param）
- 参数编码器、结果解码器注册表
- 调用描述与客户端生成
"""

from .call import BoundEncoder, CallDescriptor
from .client import Client, generate_client_class
from .introspector import Introspector
from .metadata import RpcCall, RpcParam, get_rpc_call, rpc_call, rpc_param
from .registry import Decoder, Encoder, TypeRegistry, default_encoder, identity_decoder

__all__ = [
    "BoundEncoder",
    "CallDescriptor",
    "Client",
    "Decoder",
    "Encoder",
    "Introspector",
    "RpcCall",
    "RpcParam",
    "TypeRegistry",
    "default_encoder",
    "generate_client_class",
    "get_rpc_call",
    "identity_decoder",
    "rpc_call",
    "rpc_param",
]
