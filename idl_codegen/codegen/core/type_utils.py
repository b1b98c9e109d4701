"""
Helpers for inspecting and unwrapping type expressions.
"""

from typing import Any, Callable, Dict, Iterable, Optional, TypeVar

from .annotations import operation_type_name
from .model import Field, Kind, Operation, Type

T = TypeVar("T")
D = TypeVar("D")

NAMED_KINDS = (Kind.ALIAS, Kind.ENUM, Kind.TYPE, Kind.UNION)


def is_kinds(t: Any, *kinds: Kind) -> bool:
    return t.kind in kinds


def is_void(t: Any) -> bool:
    return t.kind == Kind.VOID


def is_primitive(t: Any) -> bool:
    return t.kind == Kind.PRIMITIVE


def is_named(t: Any) -> bool:
    return t.kind in NAMED_KINDS


def is_object(t: Any, recurse_option: bool = True) -> bool:
    """
    True if the type is a struct or union once aliases are unwrapped.

    Args:
        t: Type expression
        recurse_option: Also look through optionals
    """
    seen = set()
    while t.kind in (Kind.ALIAS, Kind.OPTIONAL):
        if t.kind == Kind.OPTIONAL and not recurse_option:
            break
        if t.kind == Kind.ALIAS:
            if t.name in seen:
                return False
            seen.add(t.name)
        t = t.type
    return t.kind in (Kind.TYPE, Kind.UNION)


def unwrap_kinds(t: Any, *kinds: Kind) -> Any:
    """Strip wrapper layers for as long as their kind is listed."""
    while is_kinds(t, *kinds):
        if t.kind in (Kind.ALIAS, Kind.OPTIONAL, Kind.LIST, Kind.STREAM):
            t = t.type
        elif t.kind == Kind.MAP:
            t = t.value_type
        else:
            return t
    return t


def visit_named(t: Any, callback: Callable[[str], None]) -> None:
    """Report the names of struct types reachable through wrappers."""
    if t is None:
        return

    if t.kind == Kind.TYPE:
        callback(t.name)
    elif t.kind in (Kind.OPTIONAL, Kind.LIST):
        visit_named(t.type, callback)
    elif t.kind == Kind.MAP:
        visit_named(t.key_type, callback)
        visit_named(t.value_type, callback)


def convert_operation_to_type(operation: Operation, prefix: Optional[str] = None) -> Type:
    """
    Build a struct type holding an operation's parameters.

    Args:
        operation: Operation to convert
        prefix: Prepended to the generated type name

    Returns:
        Type named ``<prefix><Operation>Args``
    """
    fields = [
        Field(
            name=param.name,
            type=param.type,
            description=param.description,
            default=param.default,
            annotations=list(param.annotations),
        )
        for param in operation.parameters
    ]
    return Type(
        name=f"{prefix or ''}{operation_type_name(operation)}Args",
        fields=fields,
        annotations=list(operation.annotations),
    )


def convert_array_to_object(
    items: Iterable[T],
    key_func: Callable[[T], str],
    convert: Callable[[T], D] = lambda value: value,
) -> Dict[str, D]:
    """Index a sequence by key, converting each value."""
    result: Dict[str, D] = {}
    for item in items:
        result[key_func(item)] = convert(item)
    return result
