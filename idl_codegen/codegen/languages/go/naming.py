"""
Go-specific naming utilities and sanitization.

Handles Go reserved words, builtins, and naming conventions.
"""

from ...core.annotations import capitalize_rename
from ...core.model import Annotated
from ...core.naming import NameSanitizer, NamingCase, convert_case


# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Go builtin types and functions
GO_BUILTIN_TYPES = {
    "any",
    "bool",
    "byte",
    "complex64",
    "complex128",
    "error",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
    "append",
    "cap",
    "close",
    "complex",
    "copy",
    "delete",
    "imag",
    "len",
    "make",
    "new",
    "panic",
    "print",
    "println",
    "real",
    "recover",
}

# Name of the context argument every interface method receives
CONTEXT_PARAMETER = "ctx"


def create_go_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Go."""
    return NameSanitizer(GO_RESERVED_WORDS, GO_BUILTIN_TYPES)


def create_parameter_sanitizer() -> NameSanitizer:
    """Sanitizer for one method's parameter list; ``ctx`` is taken."""
    sanitizer = create_go_sanitizer()
    sanitizer.add_used_name(CONTEXT_PARAMETER)
    return sanitizer


def method_name(annotated: Annotated, name: str) -> str:
    """Exported Go method name, honoring ``@rename``."""
    return capitalize_rename(annotated, name, "go")


def field_name(annotated: Annotated, name: str) -> str:
    """Exported Go field name, honoring ``@rename``."""
    return capitalize_rename(annotated, name, "go")


def tag_name(name: str, case: str) -> str:
    """Name used in struct tags for ``json_tag_case``."""
    if case == "original":
        return name
    return convert_case(name, NamingCase(case))


def validate_go_package_name(name: str) -> list[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if "_" in name:
        errors.append("Package names should not contain underscores")

    if name in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
