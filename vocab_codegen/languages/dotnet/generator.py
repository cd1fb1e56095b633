"""
.NET code generator implementation.

Generates C# data contract classes and enums from resolved models.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.generator import CodeGenerator, CompilationResult
from ...core.schema import LookupTables, SchemaSet
from ...logging_config import get_logger
from .compiler import (
    EXTENSION_ORDER_OFFSET,
    ConverterHint,
    ModelCompiler,
    ResolvedEnum,
    ResolvedField,
    ResolvedModel,
    Shadowing,
    compile_schema,
)
from .naming import to_type_name

logger = get_logger(__name__)

DISINHERITED_MESSAGE = "This property is disinherited in this type, and must not be used."


def _plain_numbers(value: Any) -> Any:
    """Write whole-number floats as integers (``30.0`` -> ``30``), recursively."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _plain_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain_numbers(item) for item in value]
    return value


def render_code_example(
    example: Any, field_name: Optional[str] = None, required_type: Optional[str] = None
) -> List[str]:
    """
    Render a field example as the lines of a ``<code>`` block.

    Objects and lists are shown as indented JSON; numbers are left bare when
    the field is Integer or Float typed, everything else is quoted.
    """
    prefix = f'"{field_name}": ' if field_name else ""
    example = _plain_numbers(example)

    if isinstance(example, (dict, list)):
        body = prefix + json.dumps(example, indent=2, ensure_ascii=False)
    else:
        is_number = bool(required_type) and (
            "Integer" in required_type or "Float" in required_type
        )
        if isinstance(example, bool):
            value = json.dumps(example)
        else:
            value = str(example)
        body = prefix + (value if is_number else f'"{value}"')

    return ["<code>", *body.split("\n"), "</code>"]


class DotNetGenerator(CodeGenerator):
    """Code generator for C# classes on top of a foundation vocabulary library."""

    def __init__(self, config=None):
        """Initialize .NET generator with configuration."""
        super().__init__(config)

        self.converters = {
            ConverterHint.DURATION: self.config.custom.get(
                "duration_converter",
                "OpenActiveTimeSpanToISO8601DurationValuesConverter",
            ),
            ConverterHint.TIME: self.config.custom.get(
                "time_converter",
                "OpenActiveDateTimeOffsetToISO8601TimeValuesConverter",
            ),
            ConverterHint.TAGGED_UNION: self.config.custom.get(
                "union_converter", "ValuesConverter"
            ),
        }

    @property
    def language_name(self) -> str:
        return "dotnet"

    @property
    def file_extension(self) -> str:
        return ".cs"

    def get_template_directory(self) -> Optional[Path]:
        """Return the .NET templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    def get_dirs(self) -> List[str]:
        return ["/models/", "/enums/"]

    def get_model_filename(self, model: ResolvedModel) -> str:
        return f"/models/{model.class_name}{self.file_extension}"

    def get_enum_filename(self, enum: ResolvedEnum) -> str:
        return f"/enums/{enum.enum_name}{self.file_extension}"

    def create_compiler(self, schema_set: SchemaSet) -> ModelCompiler:
        """Build the run's lookup tables and a compiler sharing them."""
        tables = LookupTables.from_schema_set(
            schema_set, self.config.build_vocabulary()
        )
        return ModelCompiler(tables, self.config)

    def compile(self, schema_set: SchemaSet) -> List[CompilationResult]:
        compiler = self.create_compiler(schema_set)
        return compile_schema(schema_set, compiler, self.config.max_workers)

    def render(self, results: List[CompilationResult]) -> Dict[str, str]:
        files: Dict[str, str] = {}

        for result in results:
            if not result.success:
                continue

            resolved = result.resolved
            if isinstance(resolved, ResolvedModel):
                files[self.get_model_filename(resolved)] = self.generate_single_model(
                    resolved
                )
            elif isinstance(resolved, ResolvedEnum):
                # Foundation enums ship with the foundation library
                if resolved.is_external:
                    logger.debug("Skipping foundation enum %s", resolved.type)
                    continue
                files[self.get_enum_filename(resolved)] = self.generate_single_enum(
                    resolved
                )

        return files

    def generate_single_model(self, model: ResolvedModel) -> str:
        """Generate the C# class for a single resolved model."""
        context = {
            "namespace": self.config.namespace,
            "class_name": model.class_name,
            "base_class": model.base.render(),
            "type_name": model.type,
            "description": model.description if self.config.add_comments else (),
            "docs_url": self._docs_url(model),
            "properties": [self._property_data(f) for f in model.fields],
        }

        return self.format_code(self.render_template("model.cs.j2", context))

    def generate_single_enum(self, enum: ResolvedEnum) -> str:
        """Generate the C# enum for a single resolved enum."""
        context = {
            "namespace": self.config.namespace,
            "enum_name": enum.enum_name,
            "description": enum.description if self.config.add_comments else (),
            "members": enum.members,
        }

        return self.format_code(self.render_template("enum.cs.j2", context))

    def _docs_url(self, model: ResolvedModel) -> Optional[str]:
        if not self.config.add_comments or not self.config.docs_url_prefix:
            return None
        return f"{self.config.docs_url_prefix}{model.class_name.lower()}"

    def _property_data(self, field: ResolvedField) -> Dict[str, Any]:
        """Build the template data for one property."""
        property_name = field.property_name
        property_type = field.type.render()

        code_example = None
        if self.config.add_code_examples and field.example is not None:
            code_example = render_code_example(
                field.example, field.field_name, field.required_type
            )

        data = {
            "name": property_name,
            "type": property_type,
            "description": field.description if self.config.add_comments else (),
            "code_example": code_example,
        }

        if field.disinherited:
            data["decorators"] = [f'[Obsolete("{DISINHERITED_MESSAGE}", true)]']
            data["declaration"] = (
                f"public override {property_type} {property_name} {{ get; set; }}"
            )
            return data

        decorators = [
            f'[DataMember(Name = "{field.wire_name}", '
            f"EmitDefaultValue = false, Order = {field.order})]"
        ]
        converter = self.converters.get(field.converter)
        if converter:
            decorators.append(f"[JsonConverter(typeof({converter}))]")

        modifier = "new " if field.shadowing == Shadowing.NEW else ""
        data["decorators"] = decorators
        data["declaration"] = (
            f"public {modifier}virtual {property_type} {property_name} {{ get; set; }}"
        )
        return data

    def validate_schema_set(self, schema_set: SchemaSet) -> List[str]:
        """Validate the schema set for .NET generation."""
        warnings = super().validate_schema_set(schema_set)

        for model in schema_set.models:
            orders = [
                f.order + (EXTENSION_ORDER_OFFSET if f.is_extension else 0)
                for f in model.fields
                if not f.obsolete
            ]
            if len(orders) != len(set(orders)):
                warnings.append(f"Model {model.type} has duplicate field orders")

            property_names = [to_type_name(f.field_name) for f in model.fields]
            if len(property_names) != len(set(property_names)):
                warnings.append(
                    f"Model {model.type} has fields that map to the same property name"
                )

        for name in ("model.cs.j2", "enum.cs.j2"):
            if not self.template_exists(name):
                warnings.append(f"Template {name} not found")

        return warnings


def create_dotnet_generator(config: Optional[Dict[str, Any]] = None) -> DotNetGenerator:
    """Create a .NET generator with default configuration."""
    return DotNetGenerator(config or {})
