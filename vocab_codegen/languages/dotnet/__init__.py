"""
.NET code generator module.

Generates C# data contract classes and enums from a data model vocabulary,
resolving every field to one concrete type on top of a foundation library.
"""

from .compiler import (
    EXTENSION_ORDER_OFFSET,
    ConverterHint,
    EnumMember,
    ModelCompiler,
    ResolvedEnum,
    ResolvedField,
    ResolvedModel,
    Shadowing,
    compile_schema,
)
from .generator import DotNetGenerator, create_dotnet_generator, render_code_example
from .inheritance import foundation_root, has_base_class, resolve_base
from .naming import create_csharp_sanitizer, to_type_name
from .types import DOTNET_SCALAR_TYPES, DotNetType, DotNetTypeMapper, TypeKind

__all__ = [
    # Generator
    "DotNetGenerator",
    "create_dotnet_generator",
    "render_code_example",
    # Compilation
    "ModelCompiler",
    "compile_schema",
    "ResolvedModel",
    "ResolvedField",
    "ResolvedEnum",
    "EnumMember",
    "ConverterHint",
    "Shadowing",
    "EXTENSION_ORDER_OFFSET",
    # Inheritance
    "resolve_base",
    "has_base_class",
    "foundation_root",
    # Type system
    "DotNetType",
    "DotNetTypeMapper",
    "TypeKind",
    "DOTNET_SCALAR_TYPES",
    # Naming
    "create_csharp_sanitizer",
    "to_type_name",
]
