"""
Visitor infrastructure for model traversal.

Model nodes drive the walk (see ``accept`` in model.py); visitors receive
a :class:`Context` naming the node currently visited and write output
through a shared :class:`Writer`.
"""

import io
from collections import defaultdict
from typing import Any, Callable, Dict, Optional

from .model import Namespace


class Writer:
    """Accumulates generated source text."""

    def __init__(self):
        self._buffer = io.StringIO()

    def write(self, text: str) -> None:
        self._buffer.write(text)

    def string(self) -> str:
        return self._buffer.getvalue()


class Context:
    """Current position in the model plus the generator configuration."""

    _NODES = (
        "namespace",
        "role",
        "operation",
        "parameter",
        "type",
        "field",
        "enum",
        "enum_value",
        "union",
        "alias",
    )

    def __init__(self, config: Any, namespace: Optional[Namespace] = None, **nodes):
        unknown = set(nodes) - set(self._NODES)
        if unknown:
            raise TypeError(f"Unknown context nodes: {', '.join(sorted(unknown))}")

        self.config = config
        self.namespace = namespace
        self.role = nodes.get("role")
        self.operation = nodes.get("operation")
        self.parameter = nodes.get("parameter")
        self.type = nodes.get("type")
        self.field = nodes.get("field")
        self.enum = nodes.get("enum")
        self.enum_value = nodes.get("enum_value")
        self.union = nodes.get("union")
        self.alias = nodes.get("alias")

    def clone(self, **changes) -> "Context":
        """Return a copy with some nodes replaced."""
        nodes = {name: getattr(self, name) for name in self._NODES}
        nodes.update(changes)
        namespace = nodes.pop("namespace")
        return Context(self.config, namespace, **nodes)


Callback = Callable[[Context], None]


class BaseVisitor:
    """
    Visitor with a no-op method for every traversal phase.

    Each default method fires the callbacks registered for its phase, so
    callers can hook output into a visitor without subclassing it. Phases
    are named after the method, without the ``visit_`` prefix.
    """

    def __init__(self, writer: Writer):
        self.writer = writer
        self._callbacks: Dict[str, Dict[str, Callback]] = defaultdict(dict)

    def write(self, text: str) -> None:
        self.writer.write(text)

    def set_callback(self, phase: str, name: str, callback: Callback) -> None:
        """Register (or replace) a named callback for a phase."""
        self._callbacks[phase][name] = callback

    def trigger_callbacks(self, context: Context, phase: str) -> None:
        for callback in list(self._callbacks.get(phase, {}).values()):
            callback(context)

    # Namespace

    def visit_namespace_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "namespace_before")

    def visit_namespace(self, context: Context) -> None:
        self.trigger_callbacks(context, "namespace")

    def visit_namespace_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "namespace_after")

    # Aliases

    def visit_aliases_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "aliases_before")

    def visit_alias(self, context: Context) -> None:
        self.trigger_callbacks(context, "alias")

    def visit_aliases_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "aliases_after")

    # Roles and operations

    def visit_roles_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "roles_before")

    def visit_role_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "role_before")

    def visit_role(self, context: Context) -> None:
        self.trigger_callbacks(context, "role")

    def visit_operations_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "operations_before")

    def visit_operation_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "operation_before")

    def visit_operation(self, context: Context) -> None:
        self.trigger_callbacks(context, "operation")

    def visit_parameters_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "parameters_before")

    def visit_parameter(self, context: Context) -> None:
        self.trigger_callbacks(context, "parameter")

    def visit_parameters_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "parameters_after")

    def visit_operation_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "operation_after")

    def visit_operations_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "operations_after")

    def visit_role_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "role_after")

    def visit_roles_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "roles_after")

    # Types

    def visit_types_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "types_before")

    def visit_type_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "type_before")

    def visit_type(self, context: Context) -> None:
        self.trigger_callbacks(context, "type")

    def visit_type_fields_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "type_fields_before")

    def visit_type_field(self, context: Context) -> None:
        self.trigger_callbacks(context, "type_field")

    def visit_type_fields_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "type_fields_after")

    def visit_type_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "type_after")

    def visit_types_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "types_after")

    # Enums

    def visit_enums_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "enums_before")

    def visit_enum_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum_before")

    def visit_enum(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum")

    def visit_enum_values_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum_values_before")

    def visit_enum_value(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum_value")

    def visit_enum_values_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum_values_after")

    def visit_enum_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "enum_after")

    def visit_enums_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "enums_after")

    # Unions

    def visit_unions_before(self, context: Context) -> None:
        self.trigger_callbacks(context, "unions_before")

    def visit_union(self, context: Context) -> None:
        self.trigger_callbacks(context, "union")

    def visit_unions_after(self, context: Context) -> None:
        self.trigger_callbacks(context, "unions_after")
