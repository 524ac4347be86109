from abc import ABC, abstractmethod
from datetime import datetime
from typing import Annotated

import pytest

from aurimyth.rpc_kit.client.exceptions import ConfigurationError
from aurimyth.rpc_kit.client.introspector import (
    RpcCall,
    default_encoder,
    get_rpc_call,
    identity_decoder,
    rpc_call,
    rpc_param,
)


class CatalogService(ABC):
    @rpc_call
    @abstractmethod
    def find(self, keyword: str, page: int) -> list:
        ...

    @rpc_call("catalog.count")
    def count(self) -> int:
        ...

    @rpc_call(name="")
    def lookup(self, query: Annotated[str, rpc_param("q")], since: Annotated[datetime, rpc_param()]) -> dict:
        ...

    def local_helper(self) -> str:
        return "local"


class ExtendedCatalogService(CatalogService):
    @rpc_call
    def untyped(self, value):
        ...


def test_rpc_call_metadata_forms():
    @rpc_call
    def bare(self): ...

    @rpc_call("named")
    def positional(self): ...

    @rpc_call(name="keyword")
    def keyword(self): ...

    assert get_rpc_call(bare) == RpcCall("")
    assert get_rpc_call(positional) == RpcCall("named")
    assert get_rpc_call(keyword) == RpcCall("keyword")
    assert get_rpc_call(lambda: None) is None


def test_rpc_call_rejects_bad_names():
    with pytest.raises(ConfigurationError):
        rpc_call(name=123)

    with pytest.raises(ConfigurationError):
        rpc_call("a", name="b")

    with pytest.raises(ConfigurationError):
        rpc_param(42)


def test_only_annotated_methods_are_collected(introspector):
    methods = introspector.get_remote_methods(CatalogService)

    assert sorted(methods) == ["count", "find", "lookup"]


def test_inherited_methods_are_collected(introspector):
    methods = introspector.get_remote_methods(ExtendedCatalogService)

    assert sorted(methods) == ["count", "find", "lookup", "untyped"]


def test_operation_name_defaults_to_method_name(introspector):
    calls = introspector.build_descriptors(CatalogService)

    assert calls["find"].name == "find"
    assert calls["count"].name == "catalog.count"
    # empty override means no override
    assert calls["lookup"].name == "lookup"


def test_parameter_names_follow_declaration_order(introspector):
    calls = introspector.build_descriptors(CatalogService)

    assert calls["find"].param_names == ("keyword", "page")
    assert calls["count"].param_names == ()
    assert len(calls["find"].encoders) == 2


def test_parameter_override_names(introspector):
    calls = introspector.build_descriptors(CatalogService)

    assert calls["lookup"].param_names == ("q", "since")


def test_none_default_keeps_declared_type(introspector):
    class LimitedService:
        @rpc_call
        def top(self, limit: int = None) -> list:
            ...

    def encode_int(name, value, params):
        params[name] = str(value)

    introspector.register_parameter_encoder(int, encode_int)
    calls = introspector.build_descriptors(LimitedService)

    assert calls["top"].encoders[0].encoder is encode_int


def test_encoder_lookup_uses_declared_type(introspector):
    def encode_datetime(name, value, params):
        params[name] = value.isoformat()

    introspector.register_parameter_encoder(datetime, encode_datetime)
    calls = introspector.build_descriptors(CatalogService)

    query, since = calls["lookup"].encoders
    assert query.encoder is default_encoder
    assert since.encoder is encode_datetime


def test_decoder_lookup_uses_return_type(introspector):
    introspector.register_result_decoder(int, int)
    calls = introspector.build_descriptors(CatalogService)

    assert calls["count"].decoder is int
    assert calls["find"].decoder is identity_decoder


def test_unannotated_parameters_use_defaults(introspector):
    calls = introspector.build_descriptors(ExtendedCatalogService)

    assert calls["untyped"].param_names == ("value",)
    assert calls["untyped"].encoders[0].encoder is default_encoder
    assert calls["untyped"].decoder is identity_decoder


def test_register_as_decorator(introspector):
    @introspector.register_result_decoder(dict)
    def decode(raw):
        return dict(raw)

    @introspector.register_parameter_encoder(str)
    def encode(name, value, params):
        params[name] = value.upper()

    assert introspector.decoders.lookup(dict) is decode
    assert introspector.encoders.lookup(str) is encode


def test_dispatch_table_is_read_only(introspector):
    calls = introspector.build_descriptors(CatalogService)

    with pytest.raises(TypeError):
        calls["find"] = calls["count"]


def test_variadic_parameters_are_rejected(introspector):
    class Variadic:
        @rpc_call
        def call(self, *args): ...

    with pytest.raises(ConfigurationError):
        introspector.build_descriptors(Variadic)


def test_unresolvable_annotation_is_rejected(introspector):
    class Broken:
        @rpc_call
        def call(self, value: "MissingType") -> None: ...  # noqa: F821

    with pytest.raises(ConfigurationError):
        introspector.build_descriptors(Broken)


def test_conflicting_parameter_metadata_is_rejected(introspector):
    class Conflicting:
        @rpc_call
        def call(self, value: Annotated[str, rpc_param("a"), rpc_param("b")]): ...

    with pytest.raises(ConfigurationError):
        introspector.build_descriptors(Conflicting)


def test_static_methods_cannot_be_remote(introspector):
    class Static:
        @staticmethod
        @rpc_call
        def call(): ...

    with pytest.raises(ConfigurationError):
        introspector.build_descriptors(Static)


def test_interface_must_be_a_class(introspector, connector):
    with pytest.raises(ConfigurationError):
        introspector.create_client(object(), connector)
