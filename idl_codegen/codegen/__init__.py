"""
IDL Code Generation Module

Generates source code in various languages from an interface-definition model.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.model import Namespace, ModelError
from .core.document import convert_document
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_from_namespace(namespace, language="go", config=None):
    """
    Generate code for a namespace model.

    Args:
        namespace: Namespace to generate code for
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or path)

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, namespace)


def generate_from_document(document, language="go", config=None):
    """
    Generate code from a model document.

    Args:
        document: Parsed model document (dict)
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or path)

    Returns:
        GenerationResult with generated code

    Raises:
        ModelError: If the document is not a valid model
    """
    return generate_from_namespace(convert_document(document), language, config)


def quick_generate(document, language="go", **options):
    """
    Quick code generation from a model document.

    Args:
        document: Model document (dict or JSON string)
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    # Convert string to dict if needed
    if isinstance(document, str):
        import json

        document = json.loads(document)

    result = generate_from_document(document, language, options or None)

    if result.success:
        return result.code
    else:
        raise GeneratorError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "Namespace",
    "ModelError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "convert_document",
    "generate_code",
    "generate_from_namespace",
    "generate_from_document",
    "quick_generate",
    "get_generator",
    "get_registry",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
