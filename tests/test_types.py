import logging

import pytest

from vocab_codegen.core.generator import UnresolvedTypeError
from vocab_codegen.core.schema import ScalarKind, TypeReference
from vocab_codegen.languages.dotnet.types import (
    DOTNET_SCALAR_TYPES,
    DotNetType,
    DotNetTypeMapper,
    TypeKind,
)


@pytest.fixture
def mapper(tables, config):
    return DotNetTypeMapper(tables, config)


def resolve(mapper, raw, is_extension=False):
    return mapper.resolve_type(TypeReference.parse(raw), is_extension)


def test_scalar_table_covers_every_kind():
    assert set(DOTNET_SCALAR_TYPES) == set(ScalarKind)


@pytest.mark.parametrize(
    "short_name, expected",
    [
        ("Boolean", "bool?"),
        ("DateTime", "DateTimeOffset?"),
        ("Time", "DateTimeOffset?"),
        ("Integer", "int?"),
        ("Float", "decimal?"),
        ("Number", "decimal?"),
        ("Date", "string"),
        ("Text", "string"),
        ("Duration", "TimeSpan?"),
        ("URL", "Uri"),
        ("Property", "Uri"),
    ],
)
def test_scalar_mapping(mapper, short_name, expected):
    assert resolve(mapper, f"https://schema.org/{short_name}").render() == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ArrayOf#https://schema.org/Boolean", "List<bool>"),
        ("ArrayOf#https://schema.org/Text", "List<string>"),
        ("ArrayOf#https://schema.org/Duration", "List<TimeSpan>"),
        ("ArrayOf#Offer", "List<Offer>"),
        ("ArrayOf#https://schema.org/Place", "List<Schema.NET.Place>"),
    ],
)
def test_array_elements_are_never_nullable(mapper, raw, expected):
    resolved = resolve(mapper, raw)
    assert resolved.render() == expected
    assert resolved.kind == TypeKind.LIST
    assert not resolved.render().endswith("?>")


def test_array_of_same_type_differs_only_by_wrapper(mapper):
    single = resolve(mapper, "https://schema.org/Integer")
    array = resolve(mapper, "ArrayOf#https://schema.org/Integer")
    assert array.arguments == (single.as_non_nullable(),)


def test_local_enum(mapper):
    resolved = resolve(mapper, "https://openactive.io/RequiredStatusType")
    assert resolved.render() == "RequiredStatusType?"
    assert resolved.kind == TypeKind.ENUM


def test_external_enum_is_foundation_namespaced(mapper):
    resolved = resolve(mapper, "https://schema.org/EventStatusType")
    assert resolved.render() == "Schema.NET.EventStatusType?"
    assert resolved.kind == TypeKind.ENUM


def test_local_model(mapper):
    resolved = resolve(mapper, "#Offer")
    assert resolved.render() == "Offer"
    assert resolved.kind == TypeKind.MODEL


def test_foundation_type(mapper):
    resolved = resolve(mapper, "https://schema.org/Place")
    assert resolved.render() == "Schema.NET.Place?"
    assert resolved.kind == TypeKind.FOUNDATION


def test_scalar_wins_over_everything(mapper):
    # Even a local reference with a scalar short name is the built-in type
    assert resolve(mapper, "#Text").render() == "string"


def test_unresolved_type_raises(mapper):
    with pytest.raises(UnresolvedTypeError) as exc_info:
        resolve(mapper, "https://openactive.io/Nonexistent")

    error = exc_info.value
    assert error.short_name == "Nonexistent"
    assert error.compact_key == "oa:Nonexistent"
    assert "Unrecognised type or enum referenced: Nonexistent, oa:Nonexistent" in str(
        error
    )


def test_extension_fallback_guesses_foundation_type(mapper, caplog):
    with caplog.at_level(logging.WARNING, logger="vocab_codegen"):
        resolved = resolve(mapper, "https://openactive.io/Nonexistent", is_extension=True)

    assert resolved.render() == "Schema.NET.Nonexistent"
    assert len(resolved.notices) == 1
    assert "Nonexistent" in resolved.notices[0]
    assert "Nonexistent" in caplog.text


def test_notices_do_not_affect_equality():
    plain = DotNetType("Event", namespace="Schema.NET", kind=TypeKind.FOUNDATION)
    assert plain.with_notice("guessed") == plain


def test_all_notices_include_arguments(mapper):
    resolved = resolve(mapper, "ArrayOf#https://openactive.io/Missing", is_extension=True)
    assert resolved.render() == "List<Schema.NET.Missing>"
    assert len(resolved.all_notices) == 1


def test_custom_container_and_namespace_names(tables, config):
    config.list_type = "IList"
    config.foundation_namespace = "Vocab"
    mapper = DotNetTypeMapper(tables, config)

    assert resolve(mapper, "ArrayOf#https://schema.org/Place").render() == "IList<Vocab.Place>"
