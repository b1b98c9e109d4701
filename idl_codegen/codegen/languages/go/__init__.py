"""
Go code generator module.

Generates Go interfaces for service and provider roles, plus structs,
enums, unions and aliases for the namespace's definitions.
"""

from .config import GoConfig, format_go_imports
from .generator import (
    GoGenerator,
    create_go_generator,
    create_modern_go_generator,
    create_workflow_generator,
)
from .interfaces import HandlerVisitor, InterfacesVisitor, ProviderVisitor
from .imports import ImportsVisitor
from .aliases import AliasVisitor
from .enums import EnumVisitor
from .unions import UnionVisitor
from .structs import StructVisitor
from .naming import create_go_sanitizer, method_name, field_name
from .types import GoType, GoTypeConfig, GoTypeMapper, translate_alias

__all__ = [
    "GoGenerator",
    "GoConfig",
    "GoType",
    "GoTypeConfig",
    "GoTypeMapper",
    "translate_alias",
    "format_go_imports",
    "create_go_sanitizer",
    "method_name",
    "field_name",
    # Visitors
    "InterfacesVisitor",
    "HandlerVisitor",
    "ProviderVisitor",
    "ImportsVisitor",
    "AliasVisitor",
    "EnumVisitor",
    "UnionVisitor",
    "StructVisitor",
    # Factory functions
    "create_generator",
    "create_go_generator",
    "create_modern_go_generator",
    "create_workflow_generator",
]


def create_generator(**kwargs) -> GoGenerator:
    """
    Create a Go generator from keyword options.

    Args:
        **kwargs: Generator options (package_name, generate_json_tags,
            context_package, aliases, ...)

    Returns:
        Configured GoGenerator instance
    """
    return GoGenerator(kwargs or None)
