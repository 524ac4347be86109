from dataclasses import dataclass, field
from typing import Any

import pytest

from aurimyth.rpc_kit.client.introspector import Introspector
from aurimyth.rpc_kit.client.modules import ModuleRegistry
from aurimyth.rpc_kit.testing import RecordingConnector


@dataclass
class FakeEntryPoint:
    """Stands in for importlib.metadata.EntryPoint."""

    name: str
    target: Any
    value: str = "tests:fake"
    loads: int = field(default=0)

    def load(self) -> Any:
        self.loads += 1
        if isinstance(self.target, BaseException):
            raise self.target
        return self.target


@pytest.fixture
def introspector() -> Introspector:
    return Introspector()


@pytest.fixture
def connector() -> RecordingConnector:
    return RecordingConnector()


@pytest.fixture
def module_registry() -> ModuleRegistry:
    return ModuleRegistry()


class FakeEntryPoints:
    def __init__(self) -> None:
        self.points: list[FakeEntryPoint] = []
        self.groups: list[str] = []

    def add(self, name: str, target: Any) -> FakeEntryPoint:
        point = FakeEntryPoint(name, target)
        self.points.append(point)
        return point

    def __call__(self, group: str) -> list[FakeEntryPoint]:
        self.groups.append(group)
        return list(self.points)


@pytest.fixture
def fake_entry_points(monkeypatch) -> FakeEntryPoints:
    """Replace entry point lookup used by module discovery."""
    fake = FakeEntryPoints()
    monkeypatch.setattr("aurimyth.rpc_kit.client.modules.entry_points", fake)
    return fake
