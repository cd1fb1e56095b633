"""
Vocabulary Code Generation

Generates typed classes from a data model vocabulary's schema document.
"""

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    ResolutionError,
    generate_code,
)
from .core.schema import Field, Model, SchemaSet, parse_schema
from .registry import (
    GeneratorRegistry,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .utils import SchemaLoaderError, load_schema

# Version info
__version__ = "0.1.0"


def generate_from_document(document, language="dotnet", config=None):
    """
    Generate code from a parsed schema document.

    Args:
        document: Schema document (``{"models": ..., "enums": ...}``)
        language: Target language name or alias
        config: Generator configuration dict, GeneratorConfig or file path

    Returns:
        GenerationResult with generated files
    """
    schema_set = parse_schema(document)
    generator = get_generator(language, config)
    return generate_code(generator, schema_set)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "ResolutionError",
    "SchemaSet",
    "Model",
    "Field",
    "parse_schema",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_code",
    "generate_from_document",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
    "load_schema",
    "SchemaLoaderError",
]
