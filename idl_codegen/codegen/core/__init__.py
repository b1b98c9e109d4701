"""
Core code generation components.

Provides the model, visitor infrastructure and utilities used by all
language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .model import (
    Alias,
    Annotation,
    Enum,
    EnumValue,
    Field,
    Kind,
    ModelError,
    Namespace,
    Operation,
    Parameter,
    Role,
    Type,
    Union,
)
from .document import convert_document, parse_type_expression
from .visitor import BaseVisitor, Context, Writer
from .naming import NameSanitizer, NamingCase, camel_case, pascal_case, snake_case
from .comments import format_comment
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Model - core data structures
    "Alias",
    "Annotation",
    "Enum",
    "EnumValue",
    "Field",
    "Kind",
    "ModelError",
    "Namespace",
    "Operation",
    "Parameter",
    "Role",
    "Type",
    "Union",
    "convert_document",
    "parse_type_expression",
    # Visitor infrastructure
    "BaseVisitor",
    "Context",
    "Writer",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    "camel_case",
    "pascal_case",
    "snake_case",
    "format_comment",
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
