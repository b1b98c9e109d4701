"""
Go interface declarations for a namespace.

:class:`InterfacesVisitor` writes the file header and delegates every
definition to a dedicated visitor. Roles implemented by the user of the
generated code (``@service``, ``@events``) become handler interfaces;
roles the generated code calls (``@provider``, ``@dependency``,
``@activities``) become provider interfaces.
"""

from typing import Optional

from ...core.annotations import is_handler, is_provider, no_code
from ...core.model import Operation
from ...core.naming import uncapitalize
from ...core.type_utils import convert_operation_to_type, is_void
from ...core.visitor import BaseVisitor, Context, Writer
from ....logging_config import get_logger
from .aliases import AliasVisitor
from .enums import EnumVisitor
from .helpers import comment, go_string, render
from .imports import ImportsVisitor
from .naming import CONTEXT_PARAMETER, method_name
from .structs import StructVisitor
from .types import GoTypeMapper
from .unions import UnionVisitor

logger = get_logger(__name__)

DEFAULT_CONTEXT_PACKAGE = "context."


def operation_signature(context: Context, operation: Operation, context_package: str) -> str:
    """Interface method for an operation, without indentation."""
    mapper = GoTypeMapper.from_context(context)
    translate = mapper.translate_alias()

    signature = (
        f"{method_name(operation, operation.name)}"
        f"({CONTEXT_PARAMETER} {context_package}Context"
    )
    if operation.parameters:
        signature += ", " + mapper.map_params(operation.parameters, None, translate)
    signature += ")"

    if is_void(operation.type):
        return f"{signature} error"

    returns = mapper.return_pointer(operation.type) + mapper.expand_type(
        operation.type, None, True, translate
    )
    return f"{signature} ({returns}, error)"


class InterfacesVisitor(BaseVisitor):
    """
    Entry point of Go generation.

    Sub-visitors are created through the factory methods so subclasses
    can swap any of them.
    """

    def __init__(self, writer: Writer):
        super().__init__(writer)
        self._config = None

    def imports_visitor(self, writer: Writer) -> BaseVisitor:
        return ImportsVisitor(writer)

    def provider_visitor(self, writer: Writer) -> BaseVisitor:
        return ProviderVisitor(writer)

    def handler_visitor(self, writer: Writer) -> BaseVisitor:
        return HandlerVisitor(writer)

    def args_visitor(self, writer: Writer) -> BaseVisitor:
        return StructVisitor(writer, write_type_info=False)

    def alias_visitor(self, writer: Writer) -> BaseVisitor:
        return AliasVisitor(writer)

    def enum_visitor(self, writer: Writer) -> BaseVisitor:
        return EnumVisitor(writer)

    def union_visitor(self, writer: Writer) -> BaseVisitor:
        return UnionVisitor(writer)

    def struct_visitor(self, writer: Writer) -> BaseVisitor:
        return StructVisitor(writer, getattr(self._config, "write_type_info", True))

    def visit_namespace_before(self, context: Context) -> None:
        namespace = context.namespace
        self._config = context.config

        imports = Writer()
        namespace.accept(context, self.imports_visitor(imports))

        version = namespace.annotation("version")
        package_name = getattr(context.config, "package_name", None) or "module"

        self.write(
            render(
                "header.go.j2",
                {
                    "description": comment(context, namespace.description),
                    "package_name": package_name,
                    "imports": imports.string(),
                    "namespace": go_string(namespace.name),
                    "version": go_string(str(version.value)) if version else None,
                },
            )
        )
        logger.debug("Wrote header for package %s", package_name)
        super().visit_namespace_before(context)

    def visit_role_before(self, context: Context) -> None:
        role = context.role
        if is_provider(context):
            role.accept(context, self.provider_visitor(self.writer))
        elif is_handler(context):
            role.accept(context, self.handler_visitor(self.writer))
            if self._args_types(context):
                self._write_args_types(context)
        else:
            logger.debug("Role %s generates no code", role.name)
        super().visit_role_before(context)

    def _args_types(self, context: Context) -> bool:
        custom = getattr(context.config, "custom", None) or {}
        return bool(custom.get("operation_args_types", False))

    def _write_args_types(self, context: Context) -> None:
        role = context.role
        for operation in role.operations:
            if no_code(operation) or not operation.parameters:
                continue
            args = convert_operation_to_type(operation, uncapitalize(role.name))
            args.accept(context, self.args_visitor(self.writer))

    def visit_alias(self, context: Context) -> None:
        context.alias.accept(context, self.alias_visitor(self.writer))
        super().visit_alias(context)

    def visit_type(self, context: Context) -> None:
        context.type.accept(context, self.struct_visitor(self.writer))
        super().visit_type(context)

    def visit_enum(self, context: Context) -> None:
        context.enum.accept(context, self.enum_visitor(self.writer))
        super().visit_enum(context)

    def visit_union(self, context: Context) -> None:
        context.union.accept(context, self.union_visitor(self.writer))
        super().visit_union(context)


class HandlerVisitor(BaseVisitor):
    """Interface implemented by the user; ``@nocode`` operations are left out."""

    context_package = DEFAULT_CONTEXT_PACKAGE

    def visit_role_before(self, context: Context) -> None:
        role = context.role
        self.write(comment(context, role.description))
        self.write(f"type {role.name} interface {{\n")
        super().visit_role_before(context)

    def visit_operation(self, context: Context) -> None:
        operation = context.operation
        if self.skip(operation):
            return
        self.write(comment(context, operation.description, "\t"))
        self.write(
            f"\t{operation_signature(context, operation, self.package(context))}\n"
        )
        super().visit_operation(context)

    def visit_role_after(self, context: Context) -> None:
        self.write("}\n\n")
        super().visit_role_after(context)

    def skip(self, operation: Operation) -> bool:
        return no_code(operation)

    def package(self, context: Context) -> str:
        return self.context_package


class ProviderVisitor(HandlerVisitor):
    """
    Interface the generated code calls.

    Every operation is emitted. The context type comes from
    ``context_package``, which defaults to the configured package.
    """

    def __init__(self, writer: Writer, context_package: Optional[str] = None):
        super().__init__(writer)
        self.context_package = context_package

    def skip(self, operation: Operation) -> bool:
        return False

    def package(self, context: Context) -> str:
        if self.context_package is not None:
            return self.context_package
        custom = getattr(context.config, "custom", None) or {}
        return custom.get("context_package", DEFAULT_CONTEXT_PACKAGE)
