"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .vocabulary import DEFAULT_NAMESPACES, Vocabulary


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: Optional[str] = None
    namespace: str = "OpenActive.NET"

    # Foundation vocabulary library the generated classes build on
    foundation_namespace: str = "Schema.NET"
    foundation_root: str = "JsonLdObject"

    # Generic container types
    union_type: str = "SingleValues"
    list_type: str = "List"

    # Vocabulary
    vocabulary_namespaces: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_NAMESPACES)
    )
    local_prefix: str = "oa"
    foundation_prefix: str = "schema"
    foundation_types: Optional[List[str]] = None

    # Documentation
    docs_url_prefix: str = "https://developer.openactive.io/data-model/types/"
    add_comments: bool = True
    add_code_examples: bool = True

    # Run behaviour
    allow_partial: bool = False
    max_workers: Optional[int] = None

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def build_vocabulary(self) -> Vocabulary:
        """Create the run's immutable vocabulary from these settings."""
        return Vocabulary(
            namespaces=self.vocabulary_namespaces,
            local_prefix=self.local_prefix,
            foundation_prefix=self.foundation_prefix,
            foundation_types=(
                frozenset(self.foundation_types)
                if self.foundation_types is not None
                else None
            ),
        )


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["dotnet"] = {
            "namespace": "OpenActive.NET",
            "foundation_namespace": "Schema.NET",
            "foundation_root": "JsonLdObject",
            "union_type": "SingleValues",
            "list_type": "List",
            "add_comments": True,
            "add_code_examples": True,
            "custom": {
                "duration_converter": "OpenActiveTimeSpanToISO8601DurationValuesConverter",
                "time_converter": "OpenActiveDateTimeOffsetToISO8601TimeValuesConverter",
                "union_converter": "ValuesConverter",
            },
        }

    def get_config(
        self,
        language: str = "dotnet",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = json.loads(json.dumps(self._configs.get(language, {})))

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base; ``custom`` dicts are merged key by key."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in GeneratorConfig.__dataclass_fields__.values()}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys become language-specific custom settings
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        for name in ("namespace", "foundation_namespace"):
            value = getattr(config, name)
            if not value or not all(part.isidentifier() for part in value.split(".")):
                warnings.append(f"Invalid {name}: {value!r}")

        for name in ("foundation_root", "union_type", "list_type"):
            value = getattr(config, name)
            if not value or not value.isidentifier():
                warnings.append(f"Invalid {name}: {value!r}")

        if config.local_prefix not in config.vocabulary_namespaces:
            warnings.append(f"Unknown local_prefix: {config.local_prefix}")

        if config.foundation_prefix not in config.vocabulary_namespaces:
            warnings.append(f"Unknown foundation_prefix: {config.foundation_prefix}")

        if config.max_workers is not None and config.max_workers < 1:
            warnings.append(f"Invalid max_workers: {config.max_workers}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "dotnet",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)


# Example configuration file for reference
EXAMPLE_DOTNET_CONFIG = {
    "namespace": "OpenActive.NET",
    "foundation_namespace": "Schema.NET",
    "docs_url_prefix": "https://developer.openactive.io/data-model/types/",
    "allow_partial": False,
    "duration_converter": "OpenActiveTimeSpanToISO8601DurationValuesConverter",
}
