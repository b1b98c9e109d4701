"""
Generator registry system for managing available code generators.

Provides dynamic registration and instantiation of language generators.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, load_config
from ..logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """
    Maps language names and their aliases to generator classes.

    Names are case-insensitive. An alias always points at a primary name,
    never at another alias.
    """

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator class under a primary name.

        Args:
            language: Primary language name (e.g., 'go')
            generator_class: CodeGenerator subclass
            aliases: Alternative names for the language
            replace: Overwrite an existing registration instead of keeping it

        Raises:
            RegistryError: If the class is not a generator or an alias is taken
        """
        if not issubclass(generator_class, CodeGenerator):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        primary = language.lower()
        if primary in self._generators and not replace:
            logger.debug("Generator for %s already registered", primary)
            return

        alias_keys = [alias.lower() for alias in aliases or [] if alias.lower() != primary]
        if not replace:
            for alias_key in alias_keys:
                self._check_alias(alias_key, primary)

        self._generators[primary] = generator_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = primary

        logger.debug("Registered %s generator %s", primary, generator_class.__name__)

    def _check_alias(self, alias_key: str, primary: str) -> None:
        if alias_key in self._generators:
            raise RegistryError(f"Alias '{alias_key}' conflicts with existing primary language")
        target = self._aliases.get(alias_key)
        if target is not None and target != primary:
            raise RegistryError(f"Alias '{alias_key}' already points to '{target}'")

    def unregister(self, language: str):
        """Remove a generator together with its aliases."""
        primary = self.resolve_language(language)
        self._generators.pop(primary, None)
        self._aliases = {
            alias: target for alias, target in self._aliases.items() if target != primary
        }

    def resolve_language(self, language: str) -> str:
        """Primary name for a language name or alias."""
        language_key = language.lower()
        return self._aliases.get(language_key, language_key)

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        """
        Look up the generator class for a language name or alias.

        Raises:
            RegistryError: If no generator is registered under the name
        """
        generator_class = self._generators.get(self.resolve_language(language))
        if generator_class is None:
            raise RegistryError(
                f"No generator registered for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )
        return generator_class

    def create_generator(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Instantiate the generator for a language.

        Args:
            language: Language name or alias
            config: GeneratorConfig, overrides dict, configuration file path
                or None for the language defaults

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the language is unknown or the generator
                cannot be configured
        """
        generator_class = self.get_generator_class(language)
        primary = self.resolve_language(language)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(primary, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(primary, custom_config=config)
            elif config is None:
                final_config = load_config(primary)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config)

        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {language} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Registered primary names, sorted."""
        return sorted(self._generators)

    def get_aliases_for_language(self, language: str) -> List[str]:
        primary = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == primary)

    def list_all_names(self) -> Dict[str, List[str]]:
        """Every primary name mapped to itself followed by its aliases."""
        return {
            language: [language] + self.get_aliases_for_language(language)
            for language in self._generators
        }

    def is_supported(self, language: str) -> bool:
        return self.resolve_language(language) in self._generators

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Describe a registered language.

        Returns:
            Dict with name, class, file_extension, aliases and module

        Raises:
            RegistryError: If language not found
        """
        generator_class = self.get_generator_class(language)
        primary = self.resolve_language(language)
        generator = generator_class(load_config(primary))

        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(primary),
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators()
    return _global_registry


def _auto_register_generators():
    """
    Auto-register known generators with their aliases.

    This is the single source of truth for generator registration.
    Each language module should export its configuration here.
    """
    from .languages.go import GoGenerator

    _global_registry.register("go", GoGenerator, aliases=["golang"])


# Public API functions using the global registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """
    Register a generator in the global registry.

    Args:
        language: Language name
        generator_class: Generator class
        aliases: Optional aliases
    """
    get_registry().register(language, generator_class, aliases)


def get_generator(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> CodeGenerator:
    """
    Get generator instance from global registry.

    Args:
        language: Language name
        config: Configuration

    Returns:
        Generator instance
    """
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported languages."""
    result = {}
    for language in list_supported_languages():
        try:
            result[language] = get_language_info(language)
        except RegistryError as e:
            logger.warning("Skipping %s: %s", language, e)
    return result
