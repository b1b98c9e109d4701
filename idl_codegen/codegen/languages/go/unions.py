"""
Go declarations for unions.
"""

from typing import Any

from ...core.generator import GeneratorError
from ...core.model import Kind
from ...core.naming import capitalize
from ...core.type_utils import is_named
from ...core.visitor import BaseVisitor, Context
from .helpers import comment, render
from .types import GoTypeMapper


def member_name(t: Any) -> str:
    """Name a union member is stored under."""
    if is_named(t):
        return t.name
    if t.kind == Kind.PRIMITIVE:
        return t.name
    raise GeneratorError(f"Union members must be named or primitive types, not {t.kind.value}")


class UnionVisitor(BaseVisitor):
    """Struct with one pointer field per member; exactly one is set."""

    def visit_union(self, context: Context) -> None:
        union = context.union
        mapper = GoTypeMapper.from_context(context)
        translate = mapper.translate_alias()

        members = []
        for t in union.types:
            name = member_name(t)
            go_type = mapper.expand_type(t, None, False, translate)
            members.append(
                {"declaration": f'{capitalize(name)} *{go_type} `json:"{name},omitempty"`'}
            )

        self.write(
            render(
                "union.go.j2",
                {
                    "comment": comment(context, union.description),
                    "name": union.name,
                    "members": members,
                    "embed_ns": getattr(context.config, "write_type_info", True),
                    "type_info": getattr(context.config, "write_type_info", True),
                },
            )
        )
        super().visit_union(context)
