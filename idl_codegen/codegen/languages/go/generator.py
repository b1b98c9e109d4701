"""
Go code generator implementation.

Generates Go interfaces and definitions from a namespace model.
"""

from typing import Dict, List, Optional, Any, Set, Union
from pathlib import Path

from ...core.annotations import has_service_code, is_handler, is_provider, no_code
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.model import Namespace
from ...core.naming import NamingCase
from ...core.type_utils import visit_named
from ...core.visitor import BaseVisitor, Context, Writer
from ....logging_config import get_logger
from .config import GoConfig
from .helpers import TEMPLATE_DIR
from .interfaces import InterfacesVisitor
from .naming import create_parameter_sanitizer, validate_go_package_name

logger = get_logger(__name__)


class GoGenerator(CodeGenerator):
    """Code generator for Go interfaces, structs, enums and unions."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize Go generator with configuration."""
        super().__init__(config)
        self.config = GoConfig.from_config(self.config)

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        return TEMPLATE_DIR if TEMPLATE_DIR.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def create_visitor(self, writer: Writer) -> BaseVisitor:
        """Visitor that renders the namespace; override to customize output."""
        return InterfacesVisitor(writer)

    def generate(self, namespace: Namespace) -> str:
        """Generate the Go source file for a namespace."""
        writer = Writer()
        context = Context(self.config, namespace)
        namespace.accept(context, self.create_visitor(writer))
        logger.debug("Rendered %d characters for %s", len(writer.string()), namespace.name)
        return writer.string()

    def validate_namespace(self, namespace: Namespace) -> List[str]:
        """Validate a namespace for Go generation."""
        warnings = super().validate_namespace(namespace)

        for error in validate_go_package_name(self.config.package_name):
            warnings.append(f"Invalid Go package name: {error}")

        context = Context(self.config, namespace)
        for role in namespace.roles.values():
            role_context = context.clone(role=role)
            if not (is_provider(role_context) or is_handler(role_context)):
                warnings.append(f"Role '{role.name}' generates no code")
                continue

            provider = is_provider(role_context)
            for operation in role.operations:
                if no_code(operation) and not provider:
                    continue

                # Parameter names must be sanitized per operation
                sanitizer = create_parameter_sanitizer()
                for parameter in operation.parameters:
                    name = sanitizer.sanitize_name(parameter.name, NamingCase.CAMEL_CASE)
                    if name != parameter.name:
                        warnings.append(
                            f"Parameter {role.name}.{operation.name}({parameter.name}) "
                            f"renamed to {name}"
                        )

        for alias_name in self.config.aliases:
            if alias_name not in namespace.aliases:
                warnings.append(f"Configured alias '{alias_name}' is not defined")

        return warnings

    def get_metadata(self, namespace: Namespace) -> Dict[str, Any]:
        """Roles and types the generated interfaces refer to."""
        context = Context(self.config, namespace)
        handlers = []
        providers = []
        referenced: Set[str] = set()

        for role in namespace.roles.values():
            role_context = context.clone(role=role)
            if is_provider(role_context):
                providers.append(role.name)
            elif is_handler(role_context):
                handlers.append(role.name)
            else:
                continue

            for operation in role.operations:
                visit_named(operation.type, referenced.add)
                for parameter in operation.parameters:
                    visit_named(parameter.type, referenced.add)

        return {
            "package_name": self.config.package_name,
            "has_service_code": has_service_code(context),
            "handler_roles": handlers,
            "provider_roles": providers,
            "referenced_types": sorted(referenced),
        }


# Factory functions
def create_go_generator(config: Optional[Dict[str, Any]] = None) -> GoGenerator:
    """Create a Go generator with default configuration."""
    return GoGenerator(config)


# Configuration presets
def create_modern_go_generator(package_name: str = "module") -> GoGenerator:
    """Create generator using modern Go 1.18+ features."""
    return create_go_generator({"package_name": package_name, "any_type": "any"})


def create_workflow_generator(package_name: str = "module") -> GoGenerator:
    """Create generator whose provider roles run as workflow activities."""
    return create_go_generator(
        {
            "package_name": package_name,
            "context_package": "workflow.",
            "context_import": "go.temporal.io/sdk/workflow",
        }
    )
