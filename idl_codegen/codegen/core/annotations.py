"""
Annotation inspection helpers.

Roles are classified by their annotations: ``@service`` and ``@events``
roles are implemented by the generated code's user (handlers), while
``@provider``, ``@dependency`` and ``@activities`` roles are consumed by it
(providers). Operations marked ``@nocode`` are left out of handlers.
"""

from typing import Iterable, Optional

from .model import Annotated, Annotation, Operation, Role
from .naming import capitalize
from .visitor import Context

SERVICE_ANNOTATIONS = ("service",)
EVENTS_ANNOTATIONS = ("events",)
PROVIDER_ANNOTATIONS = ("provider", "dependency", "activities")
CODE_ANNOTATIONS = ("service", "provider", "dependency")
ROLE_ANNOTATIONS = ("service", "events", "provider", "dependency", "activities")


def no_code(annotated: Optional[Annotated]) -> bool:
    if annotated is None:
        return False
    return annotated.annotation("nocode") is not None


def has_methods(role: Role) -> bool:
    """True when at least one operation of the role generates code."""
    return any(not no_code(operation) for operation in role.operations)


def _has_any(annotated: Annotated, names: Iterable[str]) -> bool:
    return any(annotated.annotation(name) is not None for name in names)


def is_one_of_type(context: Context, types: Iterable[str]) -> bool:
    """True when the current role has one of ``types`` and generates code."""
    role = context.role
    if role is None:
        return False
    if not _has_any(role, types):
        return False
    return has_methods(role)


def is_service(context: Context) -> bool:
    return is_one_of_type(context, SERVICE_ANNOTATIONS)


def is_events(context: Context) -> bool:
    return is_one_of_type(context, EVENTS_ANNOTATIONS)


def is_handler(context: Context) -> bool:
    return is_service(context) or is_events(context)


def is_provider(context: Context) -> bool:
    return is_one_of_type(context, PROVIDER_ANNOTATIONS)


def has_code(context: Context) -> bool:
    return is_one_of_type(context, CODE_ANNOTATIONS)


def has_service_code(context: Context) -> bool:
    """True when any role in the namespace is a service with methods."""
    for role in context.namespace.roles.values():
        if role.annotation("service") is None:
            continue
        if has_methods(role):
            return True
    return False


def renamed(
    annotated: Annotated, default: Optional[str] = None, language: str = "go"
) -> Optional[str]:
    """
    Name override from ``@rename``.

    The annotation's first argument maps language names to the name to use,
    e.g. ``@rename({"go": "ID"})``.
    """
    result = default

    def apply(annotation: Annotation):
        nonlocal result
        mapping = annotation.value
        if isinstance(mapping, dict) and language in mapping:
            result = mapping[language]

    annotated.annotation("rename", apply)
    return result


def capitalize_rename(annotated: Annotated, name: str, language: str = "go") -> str:
    rename = renamed(annotated, language=language)
    if rename is not None:
        return rename
    return capitalize(name)


def is_reference(annotations: Iterable[Annotation]) -> bool:
    """True if one of the annotations marks a reference."""
    for annotation in annotations:
        if annotation.name in ("ref", "reference"):
            return True
    return False


def operation_type_name(operation: Operation) -> str:
    return capitalize(renamed(operation, operation.name))
