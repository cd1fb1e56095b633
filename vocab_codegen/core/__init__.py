"""
Core code generation components.

Provides the schema data model, base classes and utilities used by all
language generators.
"""

from .generator import (
    CodeGenerator,
    CompilationResult,
    EmptyUnionError,
    GenerationResult,
    GeneratorError,
    MissingBaseClassError,
    ResolutionError,
    UnresolvedTypeError,
    generate_code,
)
from .schema import (
    EnumDefinition,
    EnumEntry,
    Field,
    LookupTables,
    Model,
    ScalarKind,
    SchemaError,
    SchemaSet,
    TypeReference,
    parse_schema,
)
from .vocabulary import Vocabulary, get_short_name
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "CompilationResult",
    "GenerationResult",
    "generate_code",
    # Errors
    "GeneratorError",
    "ResolutionError",
    "UnresolvedTypeError",
    "EmptyUnionError",
    "MissingBaseClassError",
    # Schema system - core data structures
    "EnumDefinition",
    "EnumEntry",
    "Field",
    "LookupTables",
    "Model",
    "ScalarKind",
    "SchemaError",
    "SchemaSet",
    "TypeReference",
    "parse_schema",
    # Vocabulary
    "Vocabulary",
    "get_short_name",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
