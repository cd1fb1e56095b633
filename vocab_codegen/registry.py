"""
Registry of target-language generators.

Maps language names and their aliases (``dotnet``, ``csharp``, ``cs``) to
generator classes and builds configured generator instances.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass
class GeneratorEntry:
    """A registered generator and the names it answers to."""

    language: str
    generator_class: Type[CodeGenerator]
    aliases: Tuple[str, ...] = field(default_factory=tuple)


def _coerce_config(language: str, config: ConfigSource) -> GeneratorConfig:
    """Turn any accepted config source into a GeneratorConfig for ``language``."""
    if isinstance(config, GeneratorConfig):
        return config
    if isinstance(config, (str, Path)):
        return load_config(language, config_file=config)
    if isinstance(config, dict) or config is None:
        return load_config(language, custom_config=config)
    raise RegistryError(f"Invalid config type: {type(config)}")


class GeneratorRegistry:
    """Language name and alias lookup for code generators."""

    def __init__(self):
        self._entries: Dict[str, GeneratorEntry] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
    ):
        """
        Register a generator for a language.

        Registering the same language again replaces its generator class.

        Args:
            language: Primary language name (e.g., 'dotnet')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this language

        Raises:
            RegistryError: If generator class is invalid or a name is taken
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        key = language.lower()
        if key in self._aliases:
            raise RegistryError(f"'{key}' is already an alias of '{self._aliases[key]}'")

        alias_keys = tuple(
            sorted({alias.lower() for alias in aliases or []} - {key})
        )
        for alias_key in alias_keys:
            owner = self._aliases.get(alias_key, key)
            if alias_key in self._entries or owner != key:
                raise RegistryError(f"Alias '{alias_key}' is already used by '{owner}'")

        previous = self._entries.get(key)
        merged = tuple(sorted(set(alias_keys) | set(previous.aliases if previous else ())))
        self._entries[key] = GeneratorEntry(key, generator_class, merged)
        for alias_key in alias_keys:
            self._aliases[alias_key] = key

    def unregister(self, language: str):
        """Remove a language and every alias pointing at it."""
        entry = self._entries.pop(language.lower(), None)
        if entry is None:
            return
        for alias_key in entry.aliases:
            self._aliases.pop(alias_key, None)

    def resolve_language(self, language: str) -> str:
        """
        Return the primary language name for a name or alias.

        Raises:
            RegistryError: If nothing is registered under that name
        """
        key = language.lower()
        key = self._aliases.get(key, key)
        if key not in self._entries:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return key

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        return self._entries[self.resolve_language(language)].generator_class

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Create a configured generator.

        Args:
            language: Language name or alias
            config: GeneratorConfig, override dict, or JSON config file path

        Raises:
            RegistryError: If the language is unknown or the config is invalid
        """
        key = self.resolve_language(language)
        try:
            final_config = _coerce_config(key, config)
        except ConfigError as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e
        return self._entries[key].generator_class(final_config)

    def list_languages(self) -> List[str]:
        """Registered primary language names, sorted."""
        return sorted(self._entries)

    def get_aliases_for_language(self, language: str) -> List[str]:
        entry = self._entries.get(language.lower())
        return list(entry.aliases) if entry else []

    def is_supported(self, language: str) -> bool:
        key = language.lower()
        return key in self._entries or key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language from a default-configured generator.

        Raises:
            RegistryError: If language not found
        """
        key = self.resolve_language(language)
        generator = self.create_generator(key)
        generator_type = type(generator)

        return {
            "name": generator.language_name,
            "class": generator_type.__name__,
            "module": generator_type.__module__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(key),
            "dirs": generator.get_dirs(),
            "config": generator.config,
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Return the process-wide registry with the built-in generators registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    from .languages.dotnet import DotNetGenerator

    registry.register("dotnet", DotNetGenerator, aliases=["csharp", "cs"])


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    get_registry().register(language, generator_class, aliases)


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Create a configured generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Information about every supported language, keyed by primary name."""
    return {
        language: get_language_info(language)
        for language in list_supported_languages()
    }
