"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields, asdict

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    package_name: str = "module"

    # Comments
    add_comments: bool = True
    comment_wrap_length: int = 80

    # Struct tags
    generate_json_tags: bool = True
    json_tag_omitempty: bool = True
    json_tag_case: str = "original"  # original, snake, camel, pascal

    # Embed namespace information and Type() methods in definitions
    write_type_info: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["go"] = {
            "package_name": "module",
            "add_comments": True,
            "comment_wrap_length": 80,
            "generate_json_tags": True,
            "json_tag_omitempty": True,
            "json_tag_case": "original",
            "write_type_info": True,
            "custom": {
                "context_package": "context.",
                "context_import": "context",
                "any_type": "interface{}",
                "operation_args_types": False,
                "extra_struct_tags": [],
                "aliases": {},
            },
        }

    def get_config(
        self,
        language: str = "go",
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
        defaults = self._configs.get(language, {})
        base_config = {key: value for key, value in defaults.items() if key != "custom"}
        base_config["custom"] = json.loads(json.dumps(defaults.get("custom", {})))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        logger.debug("Resolved %s configuration: %s", language, base_config)
        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                target.setdefault("custom", {}).update(value)
            else:
                target[key] = value

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

        logger.info("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are language-specific settings
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

        logger.info("Saved configuration to %s", path)

    def list_languages(self) -> list[str]:
        """Get list of supported languages."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig, language: str) -> list[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings/errors
        """
        warnings = []

        if config.json_tag_case not in {"original", "snake", "camel", "pascal"}:
            warnings.append(f"Invalid json_tag_case: {config.json_tag_case}")

        if config.comment_wrap_length < 1:
            warnings.append(
                f"comment_wrap_length must be positive: {config.comment_wrap_length}"
            )

        if language == "go":
            if not config.package_name or not config.package_name.isidentifier():
                warnings.append(f"Invalid Go package name: {config.package_name}")

            context_package = config.custom.get("context_package", "context.")
            if context_package not in {"", "context."} and (
                config.custom.get("context_import", "context") == "context"
            ):
                warnings.append(
                    f"context_package {context_package} needs a matching context_import"
                )

            aliases = config.custom.get("aliases", {})
            if not isinstance(aliases, dict):
                warnings.append("aliases must be an object")
            else:
                for name, settings in aliases.items():
                    if not isinstance(settings, dict) or not settings.get("type"):
                        warnings.append(f"Alias override {name} has no 'type'")

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
    language: str = "go",
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
EXAMPLE_GO_CONFIG = {
    "package_name": "greeting",
    "json_tag_case": "original",
    "extra_struct_tags": ["yaml", "msgpack"],
    "operation_args_types": True,
    "aliases": {
        "UUID": {"type": "uuid.UUID", "import": "github.com/google/uuid"},
    },
}
