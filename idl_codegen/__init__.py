"""Generate Go interfaces and types from interface-definition models."""

from .codegen import __version__

__all__ = ["__version__"]
