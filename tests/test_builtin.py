from datetime import date, datetime, time, timezone
from decimal import Decimal
from uuid import UUID

from aurimyth.rpc_kit.client.introspector import rpc_call
from aurimyth.rpc_kit.client.modules import ModuleRegistry, create_default
from aurimyth.rpc_kit.client.modules.builtin import BuiltinModule
from aurimyth.rpc_kit.config import ModuleSettings


class ScheduleService:
    @rpc_call("schedule.book")
    def book(self, start: datetime, day: date, at: time, ref: UUID, price: Decimal, note: str) -> None:
        ...


def test_builtin_encoders(introspector, connector):
    BuiltinModule().initialize_introspector(introspector)
    service = introspector.create_client(ScheduleService, connector)

    service.book(
        datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
        date(2024, 5, 1),
        time(8, 15),
        UUID("12345678-1234-5678-1234-567812345678"),
        Decimal("10.10"),
        "window seat",
    )

    assert connector.last_call.params == {
        "start": "2024-05-01T12:30:00+00:00",
        "day": "2024-05-01",
        "at": "08:15:00",
        "ref": "12345678-1234-5678-1234-567812345678",
        "price": "10.10",
        "note": "window seat",
    }


def test_builtin_module_is_registered_as_entry_point():
    registry = ModuleRegistry()

    introspector = create_default(settings=ModuleSettings(), registry=registry)

    assert any(isinstance(module, BuiltinModule) for module in registry)
    assert datetime in introspector.encoders


def test_builtin_module_can_be_disabled():
    registry = ModuleRegistry()

    introspector = create_default(settings=ModuleSettings(disabled=["builtin"]), registry=registry)

    assert not any(isinstance(module, BuiltinModule) for module in registry)
    assert datetime not in introspector.encoders
