"""
.NET-specific type system for code generation.

Maps abstract type references to C# type expressions: built-in scalars,
enums, local models, foundation vocabulary types, lists and tagged unions.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ...core.config import GeneratorConfig
from ...core.generator import EmptyUnionError, UnresolvedTypeError
from ...core.schema import Field, LookupTables, ScalarKind, TypeReference
from ...logging_config import get_logger
from .naming import to_type_name

logger = get_logger(__name__)


class TypeKind(Enum):
    """What a resolved type expression refers to."""

    SCALAR = "scalar"
    ENUM = "enum"
    MODEL = "model"
    FOUNDATION = "foundation"
    LIST = "list"
    UNION = "union"


@dataclass(frozen=True)
class DotNetType:
    """
    Immutable representation of a C# type expression.

    Kept as structured tokens (name, namespace, nullability, generic
    arguments) and only turned into text by ``render``.
    """

    name: str  # Unqualified type name (e.g. "Event", "List")
    namespace: Optional[str] = None  # e.g. "Schema.NET"
    nullable: bool = False  # Trailing "?"
    kind: TypeKind = TypeKind.SCALAR
    arguments: Tuple["DotNetType", ...] = ()  # Generic arguments

    # Non-fatal diagnostics picked up while resolving
    notices: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    def render(self) -> str:
        """Return the C# source text of this type."""
        text = self.qualified_name
        if self.arguments:
            text += "<" + ", ".join(arg.render() for arg in self.arguments) + ">"
        if self.nullable:
            text += "?"
        return text

    def __str__(self) -> str:
        return self.render()

    @property
    def is_union(self) -> bool:
        return self.kind == TypeKind.UNION

    @property
    def all_notices(self) -> Tuple[str, ...]:
        """Notices of this type and every type argument."""
        collected = list(self.notices)
        for arg in self.arguments:
            collected.extend(arg.all_notices)
        return tuple(collected)

    def as_non_nullable(self) -> "DotNetType":
        """Return a version of this type without the nullable marker."""
        if not self.nullable:
            return self
        return replace(self, nullable=False)

    def with_notice(self, notice: str) -> "DotNetType":
        return replace(self, notices=self.notices + (notice,))


# Built-in scalar table. Every ScalarKind must have an entry.
DOTNET_SCALAR_TYPES: Dict[ScalarKind, DotNetType] = {
    ScalarKind.BOOLEAN: DotNetType("bool", nullable=True),
    ScalarKind.DATETIME: DotNetType("DateTimeOffset", nullable=True),
    ScalarKind.TIME: DotNetType("DateTimeOffset", nullable=True),
    ScalarKind.INTEGER: DotNetType("int", nullable=True),
    ScalarKind.FLOAT: DotNetType("decimal", nullable=True),
    ScalarKind.NUMBER: DotNetType("decimal", nullable=True),
    ScalarKind.DATE: DotNetType("string"),
    ScalarKind.TEXT: DotNetType("string"),
    ScalarKind.DURATION: DotNetType("TimeSpan", nullable=True),
    ScalarKind.URL: DotNetType("Uri"),
    ScalarKind.PROPERTY: DotNetType("Uri"),
}

DURATION_TYPE = DOTNET_SCALAR_TYPES[ScalarKind.DURATION]


class DotNetTypeMapper:
    """
    Resolves type references and fields to C# type expressions.

    The lookup tables are built once per run and never mutated, so one
    mapper can be shared by every model of the run.
    """

    def __init__(self, tables: LookupTables, config: Optional[GeneratorConfig] = None):
        """Initialize with the run's lookup tables and generator configuration."""
        self.tables = tables
        self.vocabulary = tables.vocabulary
        self.config = config or GeneratorConfig()
        self._scalar_types = dict(DOTNET_SCALAR_TYPES)

    def foundation_type(
        self,
        short_name: str,
        nullable: bool = False,
        kind: TypeKind = TypeKind.FOUNDATION,
    ) -> DotNetType:
        """A type inside the foundation vocabulary namespace."""
        return DotNetType(
            name=to_type_name(short_name),
            namespace=self.config.foundation_namespace,
            nullable=nullable,
            kind=kind,
        )

    def list_of(self, element: DotNetType) -> DotNetType:
        """Wrap a type in the list container; lists hold non-nullable elements."""
        return DotNetType(
            name=self.config.list_type,
            kind=TypeKind.LIST,
            arguments=(element.as_non_nullable(),),
        )

    def union_of(self, members: List[DotNetType]) -> DotNetType:
        """Wrap types, in the given order, in the tagged-union container."""
        return DotNetType(
            name=self.config.union_type,
            kind=TypeKind.UNION,
            arguments=tuple(members),
        )

    def resolve_type(self, ref: TypeReference, is_extension: bool = False) -> DotNetType:
        """
        Map a single type reference to a C# type.

        Args:
            ref: The reference to resolve
            is_extension: Whether the reference comes from a vocabulary extension

        Returns:
            The resolved type, list-wrapped when the reference is an array

        Raises:
            UnresolvedTypeError: If nothing matches and the context is not an extension
        """
        base_type = self._resolve_base_type(ref, is_extension)
        if ref.is_array:
            return self.list_of(base_type)
        return base_type

    def _resolve_base_type(self, ref: TypeReference, is_extension: bool) -> DotNetType:
        """Resolve the reference without considering array-ness."""
        short_name = ref.short_name
        compact_key = self.vocabulary.compact(ref.uri)

        scalar_kind = ScalarKind.from_short_name(short_name)
        if scalar_kind is not None:
            return self._scalar_types[scalar_kind]

        enum_entry = self.tables.enums.get(compact_key)
        if enum_entry is not None:
            if enum_entry.is_external:
                return self.foundation_type(short_name, nullable=True, kind=TypeKind.ENUM)
            return DotNetType(to_type_name(short_name), nullable=True, kind=TypeKind.ENUM)

        if short_name in self.tables.models:
            return DotNetType(to_type_name(short_name), kind=TypeKind.MODEL)

        if self.vocabulary.is_foundation(compact_key):
            return self.foundation_type(short_name, nullable=True)

        if is_extension:
            # Extensions may reference foundation vocabulary we cannot verify here
            notice = (
                f"Extension referenced unverified {self.config.foundation_namespace} "
                f"type: {short_name} ({compact_key})"
            )
            logger.warning(notice)
            return self.foundation_type(short_name).with_notice(notice)

        raise UnresolvedTypeError(short_name, compact_key)

    def collect_type_references(self, field: Field) -> List[TypeReference]:
        """
        List every admissible type of a field in union argument order:
        alternative types, required type, alternative models, model.
        """
        references: List[Optional[TypeReference]] = []
        references.extend(field.alternative_types)
        references.append(field.required_type)
        references.extend(field.alternative_models)
        references.append(field.model)
        return [ref for ref in references if ref is not None]

    def compose_type(self, field: Field, is_extension: Optional[bool] = None) -> DotNetType:
        """
        Map a field to one C# type.

        A single admissible type is returned as-is; several are combined into
        the tagged-union container. Distinct member types within one union
        are assumed, not checked.

        Raises:
            EmptyUnionError: If the field declares no type at all
            UnresolvedTypeError: If any of its types cannot be resolved
        """
        if is_extension is None:
            is_extension = field.is_extension

        references = self.collect_type_references(field)
        if not references:
            raise EmptyUnionError(field.field_name)

        types = [self.resolve_type(ref, is_extension) for ref in references]

        if len(types) == 1:
            return types[0]
        return self.union_of(types)
