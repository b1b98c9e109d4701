"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, Union
from pathlib import Path

from .config import GeneratorConfig, load_config
from .model import Namespace
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None):
        """Initialize generator with optional configuration."""
        if config is None:
            config = load_config(self.language_name)
        elif isinstance(config, dict):
            config = load_config(self.language_name, custom_config=config)
        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, namespace: Namespace) -> str:
        """
        Generate code for a namespace.

        Args:
            namespace: Model to generate code for

        Returns:
            Generated code as a string
        """
        pass

    def validate_namespace(self, namespace: Namespace) -> List[str]:
        """
        Validate the model for basic structural issues.

        Language generators should override this to add language-specific validation.

        Args:
            namespace: Model to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for t in namespace.types.values():
            if not t.fields:
                warnings.append(f"Type '{t.name}' has no fields")

            seen = set()
            for f in t.fields:
                if f.name in seen:
                    warnings.append(f"Duplicate field {t.name}.{f.name}")
                seen.add(f.name)

        for e in namespace.enums.values():
            if not e.values:
                warnings.append(f"Enum '{e.name}' has no values")

            indexes = [value.index for value in e.values]
            if len(indexes) != len(set(indexes)):
                warnings.append(f"Enum '{e.name}' has duplicate value indexes")

        for u in namespace.unions.values():
            if not u.types:
                warnings.append(f"Union '{u.name}' has no member types")

        for role in namespace.roles.values():
            if not role.operations:
                warnings.append(f"Role '{role.name}' has no operations")

        return warnings

    def get_metadata(self, namespace: Namespace) -> Dict[str, Any]:
        """Language-specific metadata added to the generation result."""
        return {}

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove trailing whitespace and excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, namespace: Namespace) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        namespace: Model to generate code for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_namespace(namespace)

        code = generator.generate(namespace)
        formatted_code = generator.format_code(code)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "namespace": namespace.name,
            "role_count": len(namespace.roles),
            "type_count": len(namespace.types),
            "enum_count": len(namespace.enums),
            "union_count": len(namespace.unions),
            "alias_count": len(namespace.aliases),
        }
        metadata.update(generator.get_metadata(namespace))

        logger.info(
            "Generated %s code for %s (%d warnings)",
            generator.language_name,
            namespace.name,
            len(warnings),
        )
        return GenerationResult(formatted_code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
