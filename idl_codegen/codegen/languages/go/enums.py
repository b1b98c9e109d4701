"""
Go declarations for enums.

An enum becomes an ``int32`` type with one constant per value, lookup
tables between values and their display strings, and JSON marshalling
through those strings.
"""

from ...core.visitor import BaseVisitor, Context
from .helpers import comment, enum_value_name, go_string, render


class EnumVisitor(BaseVisitor):
    def visit_enum(self, context: Context) -> None:
        enum = context.enum
        values = [
            {
                "comment": comment(context, value.description, "\t"),
                "const": enum_value_name(enum, value),
                "index": value.index,
                "display": go_string(value.display or value.name),
            }
            for value in enum.values
        ]

        self.write(
            render(
                "enum.go.j2",
                {
                    "comment": comment(context, enum.description),
                    "name": enum.name,
                    "values": values,
                    "type_info": getattr(context.config, "write_type_info", True),
                },
            )
        )
        super().visit_enum(context)
