"""
Go declarations for aliases.
"""

from ...core.visitor import BaseVisitor, Context
from .helpers import comment
from .types import GoTypeMapper


class AliasVisitor(BaseVisitor):
    """Writes ``type Name <underlying>``; configured aliases are skipped."""

    def visit_alias(self, context: Context) -> None:
        alias = context.alias
        mapper = GoTypeMapper.from_context(context)
        if mapper.is_translated(alias.name):
            return

        underlying = mapper.expand_type(alias.type, None, True, mapper.translate_alias())
        self.write(comment(context, alias.description))
        self.write(f"type {alias.name} {underlying}\n\n")
        super().visit_alias(context)
