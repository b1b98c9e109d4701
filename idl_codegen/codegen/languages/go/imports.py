"""
Collects the imports a generated Go file needs.
"""

from typing import Any, Set

from ...core.annotations import is_handler, is_provider, no_code
from ...core.visitor import BaseVisitor, Context, Writer
from ....logging_config import get_logger
from .config import format_go_imports
from .types import GoTypeMapper

logger = get_logger(__name__)


class ImportsVisitor(BaseVisitor):
    """
    Walks the namespace once and writes the import block at the end.

    Only roles that emit methods contribute imports; handler operations
    marked ``@nocode`` are ignored like the handler visitor ignores them.
    """

    def __init__(self, writer: Writer):
        super().__init__(writer)
        self.imports: Set[str] = set()

    def _add_type(self, context: Context, t: Any) -> None:
        self.imports |= GoTypeMapper.from_context(context).imports_for(t)

    def _context_import(self, context: Context, provider: bool) -> str:
        if not provider:
            return "context"
        custom = getattr(context.config, "custom", None) or {}
        if not custom.get("context_package", "context."):
            return ""
        return custom.get("context_import", "context")

    def visit_role_before(self, context: Context) -> None:
        if is_provider(context):
            self.imports.add(self._context_import(context, True))
        elif is_handler(context):
            self.imports.add(self._context_import(context, False))
        super().visit_role_before(context)

    def visit_operation(self, context: Context) -> None:
        operation = context.operation
        if is_provider(context):
            pass
        elif is_handler(context):
            if no_code(operation):
                return
        else:
            return

        self._add_type(context, operation.type)
        for parameter in operation.parameters:
            self._add_type(context, parameter.type)
        super().visit_operation(context)

    def visit_alias(self, context: Context) -> None:
        alias = context.alias
        mapper = GoTypeMapper.from_context(context)
        if not mapper.is_translated(alias.name):
            self.imports |= mapper.imports_for(alias.type)
        super().visit_alias(context)

    def visit_type_field(self, context: Context) -> None:
        self._add_type(context, context.field.type)
        super().visit_type_field(context)

    def visit_enum(self, context: Context) -> None:
        self.imports.update(("encoding/json", "fmt"))
        super().visit_enum(context)

    def visit_union(self, context: Context) -> None:
        for member in context.union.types:
            self._add_type(context, member)
        super().visit_union(context)

    def visit_namespace_after(self, context: Context) -> None:
        self.imports.discard("")
        logger.debug("Collected imports: %s", sorted(self.imports))
        self.write(format_go_imports(self.imports))
        super().visit_namespace_after(context)
