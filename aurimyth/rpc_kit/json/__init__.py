"""JSON 数据转换工具。"""

from .adapters import model_decoder, model_encoder, register_model

__all__ = [
    "model_decoder",
    "model_encoder",
    "register_model",
]
