"""远程调用描述。

每个远程方法在生成客户端时构建一次 CallDescriptor，之后不再修改。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from aurimyth.rpc_kit.client.connector import Connector
from aurimyth.rpc_kit.client.introspector.registry import Decoder, Encoder
from aurimyth.rpc_kit.common.logging import logger


@dataclass(frozen=True)
class BoundEncoder:
    """绑定了目标参数名的编码器。

    Attributes:
        encoder: 参数编码器
        name: 编码目标名
    """

    encoder: Encoder
    name: str

    def __call__(self, value: Any, params: dict[str, Any]) -> None:
        self.encoder(self.name, value, params)


@dataclass(frozen=True)
class CallDescriptor:
    """远程调用描述。

    encoders 与方法参数一一对应，顺序与声明顺序一致；
    调用时按位置与实参配对，而不是按名称。

    Attributes:
        name: 远程方法名
        encoders: 按参数声明顺序排列的绑定编码器
        decoder: 结果解码器
    """

    name: str
    encoders: tuple[BoundEncoder, ...]
    decoder: Decoder

    def execute(self, connector: Connector, arguments: Sequence[Any]) -> Any:
        """在连接器上执行调用。

        参数集合为空时使用无参数调用形式，否则使用带参数形式。
        连接器与解码器抛出的异常原样传播。

        Args:
            connector: 连接器
            arguments: 按声明顺序排列的实参

        Returns:
            Any: 解码后的结果

        Raises:
            TypeError: 实参个数与参数个数不一致
        """
        if len(arguments) != len(self.encoders):
            raise TypeError(
                f"{self.name}() 需要 {len(self.encoders)} 个参数，实际传入 {len(arguments)} 个"
            )

        params: dict[str, Any] = {}
        for encoder, value in zip(self.encoders, arguments):
            encoder(value, params)

        logger.debug(f"RPC调用: {self.name} 参数: {list(params)}")
        if params:
            raw = connector.execute(self.name, params)
        else:
            raw = connector.execute(self.name)

        return self.decoder(raw)

    @property
    def param_names(self) -> tuple[str, ...]:
        """编码目标名列表。"""
        return tuple(encoder.name for encoder in self.encoders)


__all__ = [
    "BoundEncoder",
    "CallDescriptor",
]
