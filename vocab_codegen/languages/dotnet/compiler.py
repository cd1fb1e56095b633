"""
Compiles schema models into resolved .NET class definitions.

A resolved model is plain data: the base class and one resolved field per
schema field, in declaration order. Rendering it to C# text is left to the
generator and its templates.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ...core.config import GeneratorConfig
from ...core.generator import CompilationResult, ResolutionError
from ...core.naming import NamingCase
from ...core.schema import (
    EnumDefinition,
    Field,
    LookupTables,
    Model,
    SchemaSet,
    ScalarKind,
)
from ...core.vocabulary import get_short_name
from ...logging_config import get_logger
from .inheritance import has_base_class, resolve_base
from .naming import create_csharp_sanitizer, to_type_name
from .types import DURATION_TYPE, DotNetType, DotNetTypeMapper

logger = get_logger(__name__)

# Extension members sort after every core member
EXTENSION_ORDER_OFFSET = 1000


class ConverterHint(Enum):
    """Serialization converter attached to a property."""

    NONE = "none"
    DURATION = "duration"
    TIME = "time"
    TAGGED_UNION = "tagged_union"


class Shadowing(Enum):
    """Keyword used when a property hides an inherited member."""

    NONE = ""
    NEW = "new"
    OVERRIDE = "override"


@dataclass(frozen=True)
class ResolvedField:
    """A field compiled to its final C# member."""

    field_name: str
    property_name: str
    type: DotNetType
    wire_name: Optional[str]  # None on a disinheritance stub
    order: Optional[int]  # None on a disinheritance stub
    shadowing: Shadowing = Shadowing.NONE
    disinherited: bool = False
    converter: ConverterHint = ConverterHint.NONE
    is_extension: bool = False
    description: Tuple[str, ...] = ()
    example: Any = None
    required_type: Optional[str] = None
    notices: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedModel:
    """A model compiled to a class definition."""

    type: str
    class_name: str
    base: DotNetType
    fields: Tuple[ResolvedField, ...]
    has_base_class: bool = True
    description: Tuple[str, ...] = ()

    @property
    def notices(self) -> Tuple[str, ...]:
        collected: List[str] = []
        for resolved_field in self.fields:
            collected.extend(resolved_field.notices)
        return tuple(collected)


@dataclass(frozen=True)
class EnumMember:
    member_name: str
    value: str


@dataclass(frozen=True)
class ResolvedEnum:
    """An enum compiled to a C# enum definition."""

    type: str
    enum_name: str
    namespace: str
    members: Tuple[EnumMember, ...]
    description: Tuple[str, ...] = ()
    is_external: bool = False


class ModelCompiler:
    """Turns models and enums into resolved definitions for one run."""

    def __init__(self, tables: LookupTables, config: Optional[GeneratorConfig] = None):
        self.tables = tables
        self.config = config or GeneratorConfig()
        self.type_mapper = DotNetTypeMapper(tables, self.config)

    def _converter_for(self, field: Field, property_type: DotNetType) -> ConverterHint:
        if property_type == DURATION_TYPE:
            return ConverterHint.DURATION

        required = field.required_type
        if (
            required is not None
            and not required.is_array
            and ScalarKind.from_short_name(required.short_name) == ScalarKind.TIME
            and self.tables.vocabulary.is_foundation_namespace(required.uri)
        ):
            return ConverterHint.TIME

        if property_type.is_union:
            return ConverterHint.TAGGED_UNION

        return ConverterHint.NONE

    def _shadowing_for(self, field: Field, has_base: bool) -> Shadowing:
        # Extension names are namespaced, so they never hide an inherited member
        if (
            not field.is_extension
            and has_base
            and (field.derived_from_schema or field.override)
        ):
            return Shadowing.NEW
        return Shadowing.NONE

    def compile_field(
        self, field: Field, has_base: bool, property_name: Optional[str] = None
    ) -> ResolvedField:
        """
        Compile one field to its final member.

        ``property_name`` is the member name chosen by ``compile_model``; on its
        own a field is named after its upper camel cased field name.

        Raises:
            ResolutionError: located at the field when its type cannot be resolved
        """
        try:
            property_type = self.type_mapper.compose_type(field, field.is_extension)
        except ResolutionError as e:
            raise e.located(field_name=field.field_name)

        property_name = property_name or to_type_name(field.field_name)
        required_type = str(field.required_type) if field.required_type else None

        if field.obsolete:
            return ResolvedField(
                field_name=field.field_name,
                property_name=property_name,
                type=property_type,
                wire_name=None,
                order=None,
                shadowing=Shadowing.OVERRIDE,
                disinherited=True,
                is_extension=field.is_extension,
                description=field.description,
                example=field.example,
                required_type=required_type,
                notices=property_type.all_notices,
            )

        order = field.order
        if field.is_extension:
            order += EXTENSION_ORDER_OFFSET

        return ResolvedField(
            field_name=field.field_name,
            property_name=property_name,
            type=property_type,
            wire_name=field.wire_name,
            order=order,
            shadowing=self._shadowing_for(field, has_base),
            converter=self._converter_for(field, property_type),
            is_extension=field.is_extension,
            description=field.description,
            example=field.example,
            required_type=required_type,
            notices=property_type.all_notices,
        )

    def member_names(self, model: Model, class_name: str) -> Dict[str, str]:
        """
        Final C# member name of every field of a model, keyed by field name.

        Disinheritance stubs keep their plain name so their ``override``
        matches the inherited member; every other member is made unique
        against the stubs, the class name and the members before it.
        """
        sanitizer = create_csharp_sanitizer()
        sanitizer.add_used_name(class_name)
        names: Dict[str, str] = {}

        for field in model.fields:
            if field.obsolete:
                names[field.field_name] = to_type_name(field.field_name)
                sanitizer.add_used_name(names[field.field_name])

        for field in model.fields:
            if not field.obsolete:
                names[field.field_name] = sanitizer.sanitize_name(
                    field.field_name, NamingCase.UPPER_CAMEL
                )

        return names

    def compile_model(self, model: Model) -> ResolvedModel:
        """
        Compile a model: resolve its base once, then every field in order.

        Raises:
            ResolutionError: located at the model (and field, if any)
        """
        try:
            base = resolve_base(
                model.subclass_of,
                model.derived_from,
                model,
                self.tables.vocabulary,
                self.config,
            )
            has_base = has_base_class(base, self.config)
            class_name = to_type_name(model.short_name)
            names = self.member_names(model, class_name)
            fields = tuple(
                self.compile_field(f, has_base, names[f.field_name])
                for f in model.fields
            )
        except ResolutionError as e:
            raise e.located(model_type=model.type)

        logger.debug(
            "Compiled model %s: base %s, %d fields", model.type, base, len(fields)
        )
        return ResolvedModel(
            type=model.type,
            class_name=class_name,
            base=base,
            fields=fields,
            has_base_class=has_base,
            description=model.description,
        )

    def compile_enum(self, enum: EnumDefinition) -> ResolvedEnum:
        members = tuple(
            EnumMember(member_name=to_type_name(get_short_name(value)), value=value)
            for value in enum.values
        )
        return ResolvedEnum(
            type=enum.type,
            enum_name=to_type_name(enum.short_name),
            namespace=enum.namespace,
            members=members,
            description=enum.comment,
            is_external=self.tables.vocabulary.is_foundation_namespace(enum.namespace),
        )


def _compile_one(compiler: ModelCompiler, model: Model) -> CompilationResult:
    try:
        resolved = compiler.compile_model(model)
    except ResolutionError as e:
        return CompilationResult.failure(model.type, e)
    return CompilationResult(model.type, resolved, notices=list(resolved.notices))


def compile_schema(
    schema_set: SchemaSet,
    compiler: ModelCompiler,
    max_workers: Optional[int] = None,
) -> List[CompilationResult]:
    """
    Compile every model and enum of a schema set independently.

    Models share nothing but the read-only lookup tables, so they may be
    compiled on a thread pool. Results keep the schema's order: enums first,
    then models. A failed model never affects the others.
    """
    results = [
        CompilationResult(enum.type, compiler.compile_enum(enum))
        for enum in schema_set.enums
    ]

    if max_workers and max_workers > 1 and len(schema_set.models) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results.extend(
                executor.map(lambda m: _compile_one(compiler, m), schema_set.models)
            )
    else:
        results.extend(_compile_one(compiler, model) for model in schema_set.models)

    failed = sum(1 for result in results if not result.success)
    logger.info("Compiled %d definition(s), %d failed", len(results), failed)
    return results
