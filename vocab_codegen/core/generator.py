"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement, the
resolution error taxonomy, and the run boundary (``generate_code``) that
decides whether a failed model stops the run.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import GeneratorConfig, load_config
from .schema import SchemaSet
from .templates import TemplateEngine, TemplateError, create_template_engine
from ..logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class ResolutionError(GeneratorError):
    """
    A model or field could not be resolved to a target-language definition.

    Carries the model type and field name of the offending schema entry so
    that the failure can be located without re-running the compiler.
    """

    def __init__(
        self,
        message: str,
        model_type: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.model_type = model_type
        self.field_name = field_name

    def located(
        self, model_type: Optional[str] = None, field_name: Optional[str] = None
    ) -> "ResolutionError":
        """Fill in location context that is not already set."""
        if model_type and not self.model_type:
            self.model_type = model_type
        if field_name and not self.field_name:
            self.field_name = field_name
        return self

    @property
    def location(self) -> str:
        parts = [part for part in (self.model_type, self.field_name) if part]
        return ".".join(parts)

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class UnresolvedTypeError(ResolutionError):
    """A type reference matches no built-in, enum, model or vocabulary type."""

    def __init__(self, short_name: str, compact_key: str, **context):
        super().__init__(
            f"Unrecognised type or enum referenced: {short_name}, {compact_key}",
            **context,
        )
        self.short_name = short_name
        self.compact_key = compact_key


class EmptyUnionError(ResolutionError):
    """A field declares no type at all."""

    def __init__(self, field_name: str, **context):
        super().__init__(f"No type found for field: {field_name}", **context)
        self.field_name = field_name


class MissingBaseClassError(ResolutionError):
    """A model declares neither an explicit parent nor a derived-from type."""

    def __init__(self, model_type: str, **context):
        super().__init__(f"No base class specified for: {model_type}", **context)
        self.model_type = model_type


class CompilationResult:
    """Outcome of compiling one model or enum: resolved output or an error."""

    def __init__(self, name: str, resolved: Any = None, notices: List[str] = None):
        self.name = name
        self.resolved = resolved
        self.notices = notices or []
        self.error: Optional[ResolutionError] = None
        self.success = True

    @classmethod
    def failure(cls, name: str, error: ResolutionError) -> "CompilationResult":
        """Create a failed compilation result."""
        result = cls(name)
        result.success = False
        result.error = error
        return result

    def __repr__(self) -> str:
        state = "ok" if self.success else f"error={self.error}"
        return f"CompilationResult({self.name!r}, {state})"


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if isinstance(config, GeneratorConfig):
            self.config = config
        else:
            self.config = load_config(self.language_name, custom_config=config)
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'dotnet')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.cs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def get_dirs(self) -> List[str]:
        """Directories (relative to the output root) the generated files live in."""
        return []

    @abstractmethod
    def compile(self, schema_set: SchemaSet) -> List[CompilationResult]:
        """
        Resolve every model and enum of the schema set.

        Failures are returned as failed results, never raised.
        """
        pass

    @abstractmethod
    def render(self, results: List[CompilationResult]) -> Dict[str, str]:
        """
        Render successful compilation results.

        Returns:
            Mapping of output path to generated code
        """
        pass

    def generate(self, schema_set: SchemaSet) -> Dict[str, str]:
        """
        Compile and render a whole schema set.

        Raises:
            ResolutionError: the first model or enum that failed to compile
        """
        results = self.compile(schema_set)
        for result in results:
            if not result.success:
                raise result.error
        return self.render(results)

    def validate_schema_set(self, schema_set: SchemaSet) -> List[str]:
        """
        Validate the schema set for structural issues that are not fatal.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for model in schema_set.models:
            if not model.fields:
                warnings.append(f"Model '{model.type}' has no fields")

        for enum in schema_set.enums:
            if not enum.values:
                warnings.append(f"Enum '{enum.type}' has no values")

        return warnings

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace and collapse runs of blank lines."""
        code = re.sub(r"[ \t]+$", "", code, flags=re.MULTILINE)
        code = re.sub(r"\n{3,}", "\n\n", code)
        return code.strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        files: Dict[str, str],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            files: Generated code keyed by output path
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.files = files
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.errors: List[ResolutionError] = []
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        errors: List[ResolutionError] = None,
        warnings: List[str] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(files={}, warnings=warnings)
        result.success = False
        result.error_message = message
        result.exception = exception
        result.errors = errors or []
        return result


def generate_code(generator: CodeGenerator, schema_set: SchemaSet) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Every model is compiled independently. Failed models stop the run unless
    the generator is configured with ``allow_partial``, in which case they are
    reported as warnings and the remaining models are still rendered.

    Args:
        generator: Code generator instance
        schema_set: Models and enums to generate code for

    Returns:
        GenerationResult with files, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema_set(schema_set)

        results = generator.compile(schema_set)
        failures = [result for result in results if not result.success]
        errors = [result.error for result in failures]

        for result in results:
            warnings.extend(result.notices)

        if failures:
            for error in errors:
                logger.error("Compilation failed: %s", error)

            if not generator.config.allow_partial:
                message = "; ".join(str(error) for error in errors)
                return GenerationResult.error(
                    f"Code generation failed for {len(failures)} definition(s): {message}",
                    exception=errors[0],
                    errors=errors,
                    warnings=warnings,
                )

            logger.warning("Skipping %d failed definition(s)", len(failures))
            warnings.extend(f"Skipped {error}" for error in errors)

        files = generator.render(results)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "model_count": len(schema_set.models),
            "enum_count": len(schema_set.enums),
            "file_count": len(files),
            "failed": [result.name for result in failures],
        }

        result = GenerationResult(files, warnings, metadata)
        result.errors = errors
        logger.info("Generated %d file(s) for %s", len(files), generator.language_name)
        return result

    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
