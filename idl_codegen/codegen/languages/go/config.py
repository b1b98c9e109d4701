"""
Go-specific configuration and validation.

Extends the base configuration system with Go-specific settings.
"""

from dataclasses import fields
from typing import Any, Dict, Iterable, List

from ...core.config import ConfigError, GeneratorConfig


class GoConfig(GeneratorConfig):
    """Go-specific configuration."""

    def __init__(self, **kwargs):
        """Initialize Go configuration with defaults."""
        super().__init__(**kwargs)

        self.custom = dict(self.custom or {})

        # Set Go defaults
        self.custom.setdefault("context_package", "context.")
        self.custom.setdefault("context_import", "context")
        self.custom.setdefault("any_type", "interface{}")
        self.custom.setdefault("operation_args_types", False)
        self.custom.setdefault("extra_struct_tags", [])
        self.custom.setdefault("aliases", {})

        self._validate_go_settings()

    @classmethod
    def from_config(cls, config: GeneratorConfig) -> "GoConfig":
        """Promote a base configuration to a GoConfig."""
        if isinstance(config, cls):
            return config
        return cls(**{f.name: getattr(config, f.name) for f in fields(GeneratorConfig)})

    @property
    def context_package(self) -> str:
        return self.custom["context_package"]

    @property
    def context_import(self) -> str:
        return self.custom["context_import"]

    @property
    def any_type(self) -> str:
        return self.custom["any_type"]

    @property
    def operation_args_types(self) -> bool:
        return bool(self.custom["operation_args_types"])

    @property
    def extra_struct_tags(self) -> List[str]:
        return list(self.custom["extra_struct_tags"])

    @property
    def aliases(self) -> Dict[str, Dict[str, Any]]:
        return self.custom["aliases"]

    def _validate_go_settings(self):
        """Validate Go-specific configuration."""
        if self.custom["any_type"] not in {"interface{}", "any"}:
            raise ConfigError(f"Invalid any_type: {self.custom['any_type']}")

        if self.json_tag_case not in {"original", "snake", "camel", "pascal"}:
            raise ConfigError(f"Invalid json_tag_case: {self.json_tag_case}")

        context_package = self.custom["context_package"]
        if context_package and not context_package.endswith("."):
            raise ConfigError(
                f"context_package must end with '.': {context_package}"
            )
        if context_package not in {"", "context."} and self.custom["context_import"] == "context":
            raise ConfigError(
                f"context_package {context_package} needs a matching context_import"
            )

        tags = self.custom["extra_struct_tags"]
        if not isinstance(tags, list) or not all(
            isinstance(tag, str) and tag.isidentifier() for tag in tags
        ):
            raise ConfigError(f"Invalid extra_struct_tags: {tags}")

        aliases = self.custom["aliases"]
        if not isinstance(aliases, dict):
            raise ConfigError("aliases must map alias names to settings")
        for name, settings in aliases.items():
            if not isinstance(settings, dict) or not settings.get("type"):
                raise ConfigError(f"Alias override {name} requires a 'type'")


def _is_standard_library(path: str) -> bool:
    return "." not in path.split("/", 1)[0]


def format_go_imports(imports: Iterable[str]) -> str:
    """
    Format an import block.

    Standard library packages come first, followed by a blank line and
    third-party packages, each group sorted.

    Returns:
        Import block followed by a blank line, or an empty string
    """
    imports = {imp for imp in imports if imp}
    if not imports:
        return ""

    standard = sorted(imp for imp in imports if _is_standard_library(imp))
    external = sorted(imp for imp in imports if not _is_standard_library(imp))

    lines = ["import ("]
    lines.extend(f'\t"{imp}"' for imp in standard)
    if standard and external:
        lines.append("")
    lines.extend(f'\t"{imp}"' for imp in external)
    lines.append(")")

    return "\n".join(lines) + "\n\n"
