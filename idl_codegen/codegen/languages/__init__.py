"""
Language-specific code generators.

This module contains generators for different programming languages.
"""

from .go import (
    GoGenerator,
    create_go_generator,
    create_modern_go_generator,
    create_workflow_generator,
)

__all__ = [
    "GoGenerator",
    "create_go_generator",
    "create_modern_go_generator",
    "create_workflow_generator",
]
