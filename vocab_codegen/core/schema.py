"""
Core schema representation for code generation.

Converts the schema document (models and enums of a data model vocabulary)
into a normalized internal format that generators can work with
consistently, and builds the run-scoped lookup tables used during type
resolution.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from .vocabulary import ARRAY_PREFIX, Vocabulary, get_short_name, strip_array_marker
from ..logging_config import get_logger

logger = get_logger(__name__)


class SchemaError(Exception):
    """Exception raised for malformed schema documents."""

    pass


class ScalarKind(Enum):
    """Built-in scalar types, keyed by their short name in the vocabulary."""

    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    TIME = "Time"
    INTEGER = "Integer"
    FLOAT = "Float"
    NUMBER = "Number"
    DATE = "Date"
    TEXT = "Text"
    DURATION = "Duration"
    URL = "URL"
    PROPERTY = "Property"

    @classmethod
    def from_short_name(cls, short_name: str) -> Optional["ScalarKind"]:
        """Return the scalar kind for a short name, or None for anything else."""
        try:
            return cls(short_name)
        except ValueError:
            return None


@dataclass(frozen=True)
class TypeReference:
    """A fully-qualified type identifier plus an array flag."""

    uri: str
    is_array: bool = False

    @classmethod
    def parse(cls, raw: str) -> "TypeReference":
        """Parse the schema's string form (``ArrayOf#https://schema.org/Text``)."""
        if not isinstance(raw, str) or not raw:
            raise SchemaError(f"Invalid type reference: {raw!r}")
        return cls(uri=strip_array_marker(raw), is_array=raw.startswith(ARRAY_PREFIX))

    @property
    def short_name(self) -> str:
        return get_short_name(self.uri)

    def __str__(self) -> str:
        if self.is_array:
            separator = "" if self.uri.startswith("#") else "#"
            return f"{ARRAY_PREFIX}{separator}{self.uri}"
        return self.uri


@dataclass(frozen=True)
class Field:
    """Represents a single field of a model, as declared in the schema."""

    field_name: str
    order: int
    required_type: Optional[TypeReference] = None
    alternative_types: Tuple[TypeReference, ...] = ()
    model: Optional[TypeReference] = None
    alternative_models: Tuple[TypeReference, ...] = ()
    member_name: Optional[str] = None

    # Vocabulary extension this field comes from (e.g. "beta")
    extension_prefix: Optional[str] = None

    obsolete: bool = False
    override: bool = False
    derived_from_schema: bool = False

    # Documentation, passed through untouched
    description: Tuple[str, ...] = ()
    example: Any = None

    @property
    def is_extension(self) -> bool:
        return bool(self.extension_prefix)

    @property
    def wire_name(self) -> str:
        return self.member_name or self.field_name


@dataclass(frozen=True)
class Model:
    """A named record of the vocabulary."""

    type: str
    fields: Tuple[Field, ...] = ()
    subclass_of: Optional[str] = None
    derived_from: Optional[str] = None
    description: Tuple[str, ...] = ()

    @property
    def short_name(self) -> str:
        return get_short_name(self.type)

    def get_field(self, name: str) -> Optional[Field]:
        """Get field by name."""
        for model_field in self.fields:
            if model_field.field_name == name:
                return model_field
        return None


@dataclass(frozen=True)
class EnumDefinition:
    """An enumeration of the vocabulary."""

    type: str
    namespace: str
    values: Tuple[str, ...] = ()
    comment: Tuple[str, ...] = ()
    extension_prefix: Optional[str] = None

    @property
    def short_name(self) -> str:
        return get_short_name(self.type)

    @property
    def uri(self) -> str:
        return f"{self.namespace}{self.short_name}"


@dataclass(frozen=True)
class EnumEntry:
    """Lookup metadata for an enum."""

    namespace: str
    is_external: bool


@dataclass
class SchemaSet:
    """All models and enums of one compilation run."""

    models: List[Model] = field(default_factory=list)
    enums: List[EnumDefinition] = field(default_factory=list)

    def get_model(self, name: str) -> Optional[Model]:
        """Get model by short name."""
        for model in self.models:
            if model.short_name == name:
                return model
        return None


@dataclass(frozen=True)
class LookupTables:
    """
    Read-only lookup tables built once per run from the whole schema.

    ``enums`` is keyed by compact key, ``models`` holds model short names.
    """

    enums: Mapping[str, EnumEntry]
    models: FrozenSet[str]
    vocabulary: Vocabulary

    @classmethod
    def build(
        cls,
        models: Iterable[Model],
        enums: Iterable[EnumDefinition],
        vocabulary: Optional[Vocabulary] = None,
    ) -> "LookupTables":
        vocabulary = vocabulary or Vocabulary()

        enum_map: Dict[str, EnumEntry] = {}
        for enum in enums:
            key = vocabulary.compact(enum.uri)
            enum_map[key] = EnumEntry(
                namespace=enum.namespace,
                is_external=vocabulary.is_foundation_namespace(enum.namespace),
            )

        model_names = frozenset(model.short_name for model in models)

        logger.debug(
            "Built lookup tables: %d enums, %d models", len(enum_map), len(model_names)
        )
        return cls(
            enums=MappingProxyType(enum_map),
            models=model_names,
            vocabulary=vocabulary,
        )

    @classmethod
    def from_schema_set(
        cls, schema_set: SchemaSet, vocabulary: Optional[Vocabulary] = None
    ) -> "LookupTables":
        return cls.build(schema_set.models, schema_set.enums, vocabulary)


def _as_lines(value: Any) -> Tuple[str, ...]:
    """Normalize a description (string, list of strings or None) to lines."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(line) for line in value)
    raise SchemaError(f"Invalid description: {value!r}")


def _parse_reference(value: Any) -> Optional[TypeReference]:
    if value is None:
        return None
    return TypeReference.parse(value)


def _parse_references(value: Any) -> Tuple[TypeReference, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (TypeReference.parse(value),)
    return tuple(TypeReference.parse(item) for item in value)


def parse_field(data: Dict[str, Any], field_name: Optional[str] = None) -> Field:
    """
    Convert a schema field object into a Field.

    Args:
        data: Field object from the schema document
        field_name: Name to use when the object has no ``fieldName``

    Returns:
        Field: Normalized field
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Field {field_name!r} must be an object")

    name = data.get("fieldName") or field_name
    if not name:
        raise SchemaError("Field without a fieldName")

    order = data.get("order", 0)
    if not isinstance(order, int) or isinstance(order, bool):
        raise SchemaError(f"Field {name!r} has a non-integer order: {order!r}")

    return Field(
        field_name=name,
        order=order,
        required_type=_parse_reference(data.get("requiredType")),
        alternative_types=_parse_references(data.get("alternativeTypes")),
        model=_parse_reference(data.get("model")),
        alternative_models=_parse_references(data.get("alternativeModels")),
        member_name=data.get("memberName"),
        extension_prefix=data.get("extensionPrefix"),
        obsolete=bool(data.get("obsolete", False)),
        override=bool(data.get("override", False)),
        derived_from_schema=bool(data.get("derivedFromSchema", False)),
        description=_as_lines(data.get("description")),
        example=data.get("example"),
    )


def parse_model(data: Dict[str, Any], type_name: Optional[str] = None) -> Model:
    """Convert a schema model object into a Model."""
    if not isinstance(data, dict):
        raise SchemaError(f"Model {type_name!r} must be an object")

    model_type = data.get("type") or type_name
    if not model_type:
        raise SchemaError("Model without a type")

    raw_fields = data.get("fields", {})
    if isinstance(raw_fields, dict):
        fields = tuple(
            parse_field(field_data, name) for name, field_data in raw_fields.items()
        )
    elif isinstance(raw_fields, list):
        fields = tuple(parse_field(field_data) for field_data in raw_fields)
    else:
        raise SchemaError(f"Model {model_type!r} has invalid fields")

    return Model(
        type=model_type,
        fields=fields,
        subclass_of=data.get("subClassOf"),
        derived_from=data.get("derivedFrom"),
        description=_as_lines(data.get("description")),
    )


def parse_enum(data: Dict[str, Any], type_name: Optional[str] = None) -> EnumDefinition:
    """Convert a schema enum object into an EnumDefinition."""
    if not isinstance(data, dict):
        raise SchemaError(f"Enum {type_name!r} must be an object")

    enum_type = data.get("type") or type_name
    if not enum_type:
        raise SchemaError("Enum without a type")

    namespace = data.get("namespace")
    if not namespace:
        raise SchemaError(f"Enum {enum_type!r} has no namespace")

    return EnumDefinition(
        type=enum_type,
        namespace=namespace,
        values=tuple(data.get("values", ())),
        comment=_as_lines(data.get("comment")),
        extension_prefix=data.get("extensionPrefix"),
    )


def _parse_collection(raw: Any, parser, kind: str) -> list:
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [parser(item, name) for name, item in raw.items()]
    if isinstance(raw, list):
        return [parser(item) for item in raw]
    raise SchemaError(f"'{kind}' must be an object or a list")


def parse_schema(document: Dict[str, Any]) -> SchemaSet:
    """
    Convert a schema document to the internal SchemaSet representation.

    Args:
        document: ``{"models": ..., "enums": ...}``; each collection is either
            a mapping keyed by type name or a list of objects carrying ``type``

    Returns:
        SchemaSet with every model and enum of the document
    """
    if not isinstance(document, dict):
        raise SchemaError("Schema document must be a JSON object")

    if "models" not in document:
        raise SchemaError("Schema document has no 'models'")

    schema_set = SchemaSet(
        models=_parse_collection(document.get("models"), parse_model, "models"),
        enums=_parse_collection(document.get("enums"), parse_enum, "enums"),
    )

    logger.info(
        "Parsed schema: %d models, %d enums",
        len(schema_set.models),
        len(schema_set.enums),
    )
    return schema_set
