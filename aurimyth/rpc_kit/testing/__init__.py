"""测试工具模块。

提供记录调用的连接器替身，便于在不访问网络的情况下验证生成的客户端。
"""

from .connector import RecordedCall, RecordingConnector

__all__ = [
    "RecordedCall",
    "RecordingConnector",
]
