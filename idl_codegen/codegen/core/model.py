"""
Interface-definition model for code generation.

A namespace holds named definitions (aliases, types, enums, unions) and
roles grouping operations. Type references are plain objects: primitives,
wrappers (optional, list, map, stream) and the named definitions
themselves. Every node can ``accept`` a visitor, which is how the language
generators walk the model.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List as TList, Optional as TOptional


class ModelError(Exception):
    """Exception raised for invalid model definitions."""

    pass


class Kind(enum.Enum):
    """Node kinds."""

    NAMESPACE = "namespace"
    ALIAS = "alias"
    ENUM = "enum"
    ENUM_VALUE = "enum_value"
    TYPE = "type"
    FIELD = "field"
    UNION = "union"
    ROLE = "role"
    OPERATION = "operation"
    PARAMETER = "parameter"
    PRIMITIVE = "primitive"
    OPTIONAL = "optional"
    LIST = "list"
    MAP = "map"
    STREAM = "stream"
    VOID = "void"


# Base translation types
PRIMITIVES = {
    "bool",
    "i8",
    "i16",
    "i32",
    "i64",
    "u8",
    "u16",
    "u32",
    "u64",
    "f32",
    "f64",
    "string",
}

# Everything the model accepts as a primitive name
PRIMITIVE_NAMES = PRIMITIVES | {"datetime", "bytes", "any", "raw", "value"}


@dataclass
class Annotation:
    """A named annotation with ordered arguments."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @property
    def value(self) -> Any:
        """Value of the first argument, or None."""
        for value in self.arguments.values():
            return value
        return None

    def argument(self, name: str, default: Any = None) -> Any:
        """Get an argument value by name."""
        return self.arguments.get(name, default)

    def convert(self) -> Dict[str, Any]:
        """Return the arguments as a plain dictionary."""
        return dict(self.arguments)


class Annotated:
    """Mixin for nodes that carry annotations."""

    annotations: TList[Annotation]

    def annotation(
        self, name: str, callback: TOptional[Callable[[Annotation], None]] = None
    ) -> TOptional[Annotation]:
        """
        Look up an annotation by name.

        Args:
            name: Annotation name
            callback: Called with the annotation when it is present

        Returns:
            The first matching annotation or None
        """
        for annotation in self.annotations:
            if annotation.name == name:
                if callback is not None:
                    callback(annotation)
                return annotation
        return None


# Type expressions


@dataclass
class Primitive:
    kind: ClassVar[Kind] = Kind.PRIMITIVE
    name: str


@dataclass
class Optional:
    kind: ClassVar[Kind] = Kind.OPTIONAL
    type: Any


@dataclass
class List:
    kind: ClassVar[Kind] = Kind.LIST
    type: Any


@dataclass
class Map:
    kind: ClassVar[Kind] = Kind.MAP
    key_type: Any
    value_type: Any


@dataclass
class Stream:
    kind: ClassVar[Kind] = Kind.STREAM
    type: Any


@dataclass(frozen=True)
class Void:
    kind: ClassVar[Kind] = Kind.VOID


VOID = Void()


# Named definitions


@dataclass(eq=False, repr=False)
class Alias(Annotated):
    """A named alias of another type."""

    kind: ClassVar[Kind] = Kind.ALIAS
    name: str
    type: Any = None
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Alias({self.name!r})"

    def accept(self, context, visitor) -> None:
        visitor.visit_alias(context.clone(alias=self))


@dataclass(eq=False, repr=False)
class Field(Annotated):
    """A field of a structured type."""

    kind: ClassVar[Kind] = Kind.FIELD
    name: str
    type: Any
    description: TOptional[str] = None
    default: Any = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Field({self.name!r})"


@dataclass(eq=False, repr=False)
class Parameter(Annotated):
    """A parameter of an operation."""

    kind: ClassVar[Kind] = Kind.PARAMETER
    name: str
    type: Any
    description: TOptional[str] = None
    default: Any = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Parameter({self.name!r})"


@dataclass(eq=False, repr=False)
class Type(Annotated):
    """A structured type with named fields."""

    kind: ClassVar[Kind] = Kind.TYPE
    name: str
    fields: TList[Field] = field(default_factory=list)
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Type({self.name!r})"

    def accept(self, context, visitor) -> None:
        context = context.clone(type=self)
        visitor.visit_type_before(context)
        visitor.visit_type(context)

        visitor.visit_type_fields_before(context)
        for f in self.fields:
            visitor.visit_type_field(context.clone(field=f))
        visitor.visit_type_fields_after(context)

        visitor.visit_type_after(context)


@dataclass(eq=False, repr=False)
class EnumValue(Annotated):
    """A single enum member."""

    kind: ClassVar[Kind] = Kind.ENUM_VALUE
    name: str
    index: int
    display: TOptional[str] = None
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"EnumValue({self.name!r}, {self.index})"


@dataclass(eq=False, repr=False)
class Enum(Annotated):
    """An enumeration."""

    kind: ClassVar[Kind] = Kind.ENUM
    name: str
    values: TList[EnumValue] = field(default_factory=list)
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Enum({self.name!r})"

    def accept(self, context, visitor) -> None:
        context = context.clone(enum=self)
        visitor.visit_enum_before(context)
        visitor.visit_enum(context)

        visitor.visit_enum_values_before(context)
        for value in self.values:
            visitor.visit_enum_value(context.clone(enum_value=value))
        visitor.visit_enum_values_after(context)

        visitor.visit_enum_after(context)


@dataclass(eq=False, repr=False)
class Union(Annotated):
    """A tagged union of member types."""

    kind: ClassVar[Kind] = Kind.UNION
    name: str
    types: TList[Any] = field(default_factory=list)
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Union({self.name!r})"

    def accept(self, context, visitor) -> None:
        visitor.visit_union(context.clone(union=self))


@dataclass(eq=False, repr=False)
class Operation(Annotated):
    """An operation of a role. ``type`` is the return type."""

    kind: ClassVar[Kind] = Kind.OPERATION
    name: str
    parameters: TList[Parameter] = field(default_factory=list)
    type: Any = VOID
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Operation({self.name!r})"

    def accept(self, context, visitor) -> None:
        context = context.clone(operation=self)
        visitor.visit_operation_before(context)
        visitor.visit_operation(context)

        visitor.visit_parameters_before(context)
        for parameter in self.parameters:
            visitor.visit_parameter(context.clone(parameter=parameter))
        visitor.visit_parameters_after(context)

        visitor.visit_operation_after(context)


@dataclass(eq=False, repr=False)
class Role(Annotated):
    """A named group of operations (service, provider, events...)."""

    kind: ClassVar[Kind] = Kind.ROLE
    name: str
    operations: TList[Operation] = field(default_factory=list)
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Role({self.name!r})"

    def accept(self, context, visitor) -> None:
        context = context.clone(role=self)
        visitor.visit_role_before(context)
        visitor.visit_role(context)

        visitor.visit_operations_before(context)
        for operation in self.operations:
            operation.accept(context, visitor)
        visitor.visit_operations_after(context)

        visitor.visit_role_after(context)


@dataclass(eq=False, repr=False)
class Namespace(Annotated):
    """Root of the model."""

    kind: ClassVar[Kind] = Kind.NAMESPACE
    name: str
    description: TOptional[str] = None
    annotations: TList[Annotation] = field(default_factory=list)
    aliases: Dict[str, Alias] = field(default_factory=dict)
    roles: Dict[str, Role] = field(default_factory=dict)
    types: Dict[str, Type] = field(default_factory=dict)
    enums: Dict[str, Enum] = field(default_factory=dict)
    unions: Dict[str, Union] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Namespace({self.name!r})"

    def resolve(self, name: str) -> Any:
        """Find a named definition, or None."""
        for table in (self.aliases, self.types, self.enums, self.unions):
            if name in table:
                return table[name]
        return None

    def add(self, definition: Any) -> None:
        """Register a named definition or role."""
        tables = {
            Kind.ALIAS: self.aliases,
            Kind.TYPE: self.types,
            Kind.ENUM: self.enums,
            Kind.UNION: self.unions,
            Kind.ROLE: self.roles,
        }
        if definition.kind not in tables:
            raise ModelError(f"Cannot add {definition.kind.value} to a namespace")

        if definition.kind == Kind.ROLE:
            if definition.name in self.roles:
                raise ModelError(f"Duplicate role name: {definition.name}")
            if self.resolve(definition.name) is not None:
                raise ModelError(
                    f"Role {definition.name} clashes with a definition of the same name"
                )
        elif self.resolve(definition.name) is not None:
            raise ModelError(f"Duplicate definition name: {definition.name}")
        elif definition.name in self.roles:
            raise ModelError(f"Definition {definition.name} clashes with a role of the same name")

        tables[definition.kind][definition.name] = definition

    def accept(self, context, visitor) -> None:
        context = context.clone(namespace=self)
        visitor.visit_namespace_before(context)
        visitor.visit_namespace(context)

        visitor.visit_aliases_before(context)
        for alias in self.aliases.values():
            alias.accept(context, visitor)
        visitor.visit_aliases_after(context)

        visitor.visit_roles_before(context)
        for role in self.roles.values():
            role.accept(context, visitor)
        visitor.visit_roles_after(context)

        visitor.visit_types_before(context)
        for t in self.types.values():
            t.accept(context, visitor)
        visitor.visit_types_after(context)

        visitor.visit_enums_before(context)
        for e in self.enums.values():
            e.accept(context, visitor)
        visitor.visit_enums_after(context)

        visitor.visit_unions_before(context)
        for u in self.unions.values():
            u.accept(context, visitor)
        visitor.visit_unions_after(context)

        visitor.visit_namespace_after(context)
