"""
Model documents.

Converts a JSON document describing a namespace into the in-memory model.

Example document::

    {
      "namespace": "greeting.v1",
      "annotations": [{"name": "version", "arguments": {"value": "1.0.0"}}],
      "types": [
        {"name": "Person", "fields": [{"name": "name", "type": "string"}]}
      ],
      "roles": [
        {
          "name": "Greeter",
          "annotations": ["service"],
          "operations": [
            {"name": "greet", "parameters": [{"name": "to", "type": "Person"}],
             "returns": "string"}
          ]
        }
      ]
    }

Type expressions use ``T?`` (optional), ``[T]`` (list), ``{K: V}`` (map),
``stream T`` and ``void``; anything else is a primitive or a named
definition.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from .model import (
    PRIMITIVE_NAMES,
    VOID,
    Alias,
    Annotation,
    Enum,
    EnumValue,
    Field,
    Kind,
    List as ListType,
    Map,
    ModelError,
    Namespace,
    Operation,
    Optional as OptionalType,
    Parameter,
    Primitive,
    Role,
    Stream,
    Type,
    Union,
)
from ...logging_config import get_logger

logger = get_logger(__name__)

Resolver = Callable[[str], Any]

_TOKEN = re.compile(r"\s*(?:([\[\]{}:?])|([A-Za-z_][A-Za-z0-9_.]*))")


def _tokenize(text: str) -> List[str]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if not match:
            raise ModelError(f"Invalid type expression {text!r} at position {pos}")
        tokens.append(match.group(1) or match.group(2))
        pos = match.end()
    return tokens


class _TypeParser:
    """Recursive descent parser for type expressions."""

    def __init__(self, text: str, resolver: Resolver):
        self.text = text
        self.tokens = _tokenize(text)
        self.pos = 0
        self.resolver = resolver

    def parse(self) -> Any:
        if not self.tokens:
            raise ModelError("Empty type expression")
        t = self._type()
        if self.pos != len(self.tokens):
            raise ModelError(
                f"Unexpected {self.tokens[self.pos]!r} in type expression {self.text!r}"
            )
        return t

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _expect(self, token: str) -> None:
        if self._peek() != token:
            raise ModelError(f"Expected {token!r} in type expression {self.text!r}")
        self.pos += 1

    def _type(self) -> Any:
        t = self._base()
        while self._peek() == "?":
            self.pos += 1
            t = OptionalType(t)
        return t

    def _base(self) -> Any:
        token = self._peek()
        if token is None:
            raise ModelError(f"Unexpected end of type expression {self.text!r}")
        self.pos += 1

        if token == "[":
            item = self._type()
            self._expect("]")
            return ListType(item)
        if token == "{":
            key = self._type()
            self._expect(":")
            value = self._type()
            self._expect("}")
            return Map(key, value)
        if token == "stream":
            return Stream(self._type())
        if token == "void":
            return VOID
        if token in PRIMITIVE_NAMES:
            return Primitive(token)
        if token in "[]{}:?":
            raise ModelError(f"Unexpected {token!r} in type expression {self.text!r}")

        resolved = self.resolver(token)
        if resolved is None:
            raise ModelError(f"Unknown type {token!r} in type expression {self.text!r}")
        return resolved


def parse_type_expression(text: str, resolver: Resolver) -> Any:
    """
    Parse a type expression.

    Args:
        text: Expression such as ``"[Person]?"``
        resolver: Looks up named definitions; returns None for unknown names

    Returns:
        Type expression object

    Raises:
        ModelError: If the expression is malformed or names an unknown type
    """
    return _TypeParser(text, resolver).parse()


def _annotations(node: Dict[str, Any]) -> List[Annotation]:
    result = []
    for item in node.get("annotations", []):
        if isinstance(item, str):
            result.append(Annotation(item))
        elif isinstance(item, dict) and "name" in item:
            arguments = item.get("arguments") or {}
            if not isinstance(arguments, dict):
                raise ModelError(f"Arguments of annotation {item['name']!r} must be an object")
            result.append(Annotation(item["name"], dict(arguments)))
        else:
            raise ModelError(f"Invalid annotation: {item!r}")
    return result


def _name(node: Dict[str, Any], what: str) -> str:
    name = node.get("name")
    if not name or not isinstance(name, str):
        raise ModelError(f"{what} without a name: {node!r}")
    return name


def convert_document(document: Dict[str, Any]) -> Namespace:
    """
    Convert a model document into a Namespace.

    Args:
        document: Parsed JSON document

    Returns:
        Namespace with all references resolved

    Raises:
        ModelError: If the document is invalid
    """
    if not isinstance(document, dict):
        raise ModelError("Model document must be a JSON object")

    ns_name = document.get("namespace")
    if not ns_name or not isinstance(ns_name, str):
        raise ModelError("Model document requires a 'namespace' name")

    namespace = Namespace(
        name=ns_name,
        description=document.get("description"),
        annotations=_annotations(document),
    )
    logger.debug("Converting model document for namespace %s", ns_name)

    # Pass 1: declare named definitions so references resolve in any order
    pending = []
    for node in document.get("aliases", []):
        alias = Alias(_name(node, "Alias"), description=node.get("description"),
                      annotations=_annotations(node))
        namespace.add(alias)
        pending.append((alias, node))

    for node in document.get("types", []):
        t = Type(_name(node, "Type"), description=node.get("description"),
                 annotations=_annotations(node))
        namespace.add(t)
        pending.append((t, node))

    for node in document.get("enums", []):
        e = Enum(_name(node, "Enum"), description=node.get("description"),
                 annotations=_annotations(node))
        namespace.add(e)
        pending.append((e, node))

    for node in document.get("unions", []):
        u = Union(_name(node, "Union"), description=node.get("description"),
                  annotations=_annotations(node))
        namespace.add(u)
        pending.append((u, node))

    def parse(expression: Any, where: str) -> Any:
        if not isinstance(expression, str):
            raise ModelError(f"Type of {where} must be a string, got {expression!r}")
        try:
            return parse_type_expression(expression, namespace.resolve)
        except ModelError as e:
            raise ModelError(f"{where}: {e}") from e

    # Pass 2: fill in bodies
    for definition, node in pending:
        if isinstance(definition, Alias):
            definition.type = parse(node.get("type"), f"alias {definition.name}")
        elif isinstance(definition, Type):
            for field_node in node.get("fields", []):
                field_name = _name(field_node, f"Field of {definition.name}")
                definition.fields.append(
                    Field(
                        name=field_name,
                        type=parse(field_node.get("type"), f"{definition.name}.{field_name}"),
                        description=field_node.get("description"),
                        default=field_node.get("default"),
                        annotations=_annotations(field_node),
                    )
                )
        elif isinstance(definition, Enum):
            for index, value_node in enumerate(node.get("values", [])):
                definition.values.append(
                    EnumValue(
                        name=_name(value_node, f"Value of {definition.name}"),
                        index=value_node.get("index", index),
                        display=value_node.get("display"),
                        description=value_node.get("description"),
                        annotations=_annotations(value_node),
                    )
                )
        elif isinstance(definition, Union):
            for member in node.get("types", []):
                definition.types.append(parse(member, f"union {definition.name}"))

    for alias in namespace.aliases.values():
        _check_alias_chain(alias)

    for node in document.get("roles", []):
        namespace.add(_convert_role(node, parse))

    logger.info(
        "Converted namespace %s: %d roles, %d types, %d enums, %d unions, %d aliases",
        namespace.name,
        len(namespace.roles),
        len(namespace.types),
        len(namespace.enums),
        len(namespace.unions),
        len(namespace.aliases),
    )
    return namespace


def _check_alias_chain(alias: Alias) -> None:
    """Reject aliases whose underlying type is, through other aliases, the alias itself."""
    chain = [alias.name]
    t = alias.type
    while t.kind == Kind.ALIAS:
        if t.name in chain:
            raise ModelError(f"Alias cycle: {' -> '.join(chain + [t.name])}")
        chain.append(t.name)
        t = t.type


def _convert_role(node: Dict[str, Any], parse: Callable[[Any, str], Any]) -> Role:
    role = Role(_name(node, "Role"), description=node.get("description"),
                annotations=_annotations(node))

    for op_node in node.get("operations", []):
        op_name = _name(op_node, f"Operation of {role.name}")
        where = f"{role.name}.{op_name}"
        operation = Operation(
            name=op_name,
            description=op_node.get("description"),
            annotations=_annotations(op_node),
        )
        if op_node.get("returns") is not None:
            operation.type = parse(op_node["returns"], f"{where} return type")

        for param_node in op_node.get("parameters", []):
            param_name = _name(param_node, f"Parameter of {where}")
            operation.parameters.append(
                Parameter(
                    name=param_name,
                    type=parse(param_node.get("type"), f"{where}({param_name})"),
                    description=param_node.get("description"),
                    default=param_node.get("default"),
                    annotations=_annotations(param_node),
                )
            )
        role.operations.append(operation)

    return role
