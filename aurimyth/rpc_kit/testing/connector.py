"""记录调用的连接器。"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_NO_PARAMS = object()


@dataclass(frozen=True)
class RecordedCall:
    """一次连接器调用。

    Attributes:
        method: 远程方法名
        params: 命名参数；无参数调用形式为 None
        has_params: 是否使用带参数的调用形式（显式传入 None 也算）；
            未指定时按 params 是否为 None 推断
    """

    method: str
    params: dict[str, Any] | None = None
    has_params: bool | None = None

    def __post_init__(self) -> None:
        if self.has_params is None:
            object.__setattr__(self, "has_params", self.params is not None)


class RecordingConnector:
    """记录每次调用并返回预设结果的连接器。

    使用示例:
        connector = RecordingConnector({"search.v2": [{"id": 1}]})
        service = introspector.create_client(SearchService, connector)
        service.search("cat")

        assert connector.calls == [RecordedCall("search.v2", {"term": "cat"})]

    结果可以是固定值、可调用对象 ``(method, params) -> Any``，
    或异常实例（调用时抛出，模拟传输错误）。
    """

    def __init__(self, results: Mapping[str, Any] | None = None, default: Any = None) -> None:
        """初始化连接器。

        Args:
            results: 远程方法名 -> 结果
            default: 未预设方法的结果
        """
        self.results: dict[str, Any] = dict(results or {})
        self.default = default
        self.calls: list[RecordedCall] = []

    def execute(self, method: str, params: Mapping[str, Any] | None = _NO_PARAMS) -> Any:  # type: ignore[assignment]
        if params is _NO_PARAMS:
            recorded = RecordedCall(method)
        else:
            recorded = RecordedCall(
                method,
                dict(params) if params is not None else None,
                has_params=True,
            )
        self.calls.append(recorded)

        result = self.results.get(method, self.default)
        if isinstance(result, BaseException):
            raise result
        if callable(result):
            return result(recorded.method, recorded.params)
        return result

    @property
    def last_call(self) -> RecordedCall:
        """最后一次调用。"""
        return self.calls[-1]

    def reset(self) -> None:
        """清空调用记录。"""
        self.calls.clear()


__all__ = [
    "RecordedCall",
    "RecordingConnector",
]
