"""Pydantic 转换工具。

把远程调用的原始结果校验/转换为声明类型，以及把模型参数转换为可序列化的字典。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, TypeAdapter

from aurimyth.rpc_kit.client.introspector.registry import Decoder

if TYPE_CHECKING:
    from aurimyth.rpc_kit.client.introspector import Introspector


def model_decoder(type_: Any) -> Decoder:
    """构建基于 TypeAdapter 的结果解码器。

    支持模型、``list[Item]``、``dict[str, Item]`` 等任意 pydantic 可校验的类型。
    原始结果不匹配时抛出 ``pydantic.ValidationError``，不做恢复。

    Args:
        type_: 目标类型

    Returns:
        Decoder: 结果解码器
    """
    adapter = TypeAdapter(type_)
    return adapter.validate_python


def model_encoder(name: str, value: BaseModel, params: dict[str, Any]) -> None:
    """把模型参数写为 JSON 兼容的字典。"""
    params[name] = value.model_dump(mode="json")


def register_model(introspector: Introspector, model: type[BaseModel]) -> None:
    """为模型注册参数编码器，以及模型和模型列表的结果解码器。

    Args:
        introspector: 内省器
        model: 模型类
    """
    introspector.register_parameter_encoder(model, model_encoder)
    introspector.register_result_decoder(model, model_decoder(model))
    introspector.register_result_decoder(list[model], model_decoder(list[model]))


__all__ = [
    "model_decoder",
    "model_encoder",
    "register_model",
]
