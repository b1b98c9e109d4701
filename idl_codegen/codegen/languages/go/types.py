"""
Go-specific type system for code generation.

Maps model type expressions to Go types, tracking the imports they need
and whether their zero value is already nil.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, Optional, Set

from ...core.generator import GeneratorError
from ...core.model import Kind
from ...core.naming import NamingCase
from ...core.type_utils import is_object
from ...core.visitor import Context
from .naming import create_parameter_sanitizer

Translate = Callable[[str], str]

# Fixed-width primitives
PRIMITIVE_TYPES = {
    "bool": "bool",
    "i8": "int8",
    "i16": "int16",
    "i32": "int32",
    "i64": "int64",
    "u8": "uint8",
    "u16": "uint16",
    "u32": "uint32",
    "u64": "uint64",
    "f32": "float32",
    "f64": "float64",
    "string": "string",
}


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go type with its metadata.

    Carries everything needed to emit the type: the Go spelling, the
    imports it requires and whether nil is already a valid value.
    """

    name: str  # The Go type name (e.g., "string", "*User")
    base_name: str = field(default="")  # Base name without pointer (e.g., "User")
    is_pointer: bool = field(default=False)
    imports_needed: FrozenSet[str] = field(default_factory=frozenset)
    is_nilable: bool = field(default=False)  # Slices, maps, channels, interfaces

    def __post_init__(self):
        """Set base_name if not provided."""
        if not self.base_name:
            object.__setattr__(self, "base_name", self.name.lstrip("*"))

    def as_pointer(self) -> "GoType":
        """Return a pointer version of this type."""
        if self.is_pointer:
            return self

        return GoType(
            name=f"*{self.name}",
            base_name=self.base_name,
            is_pointer=True,
            imports_needed=self.imports_needed,
            is_nilable=True,
        )


@dataclass
class GoTypeConfig:
    """Configuration for Go type mapping behavior."""

    # Time handling
    time_type: str = "time.Time"
    time_import: str = "time"

    # Interface types
    unknown_type: str = "interface{}"  # or "any" for Go 1.18+

    # Alias overrides: name -> {"type": ..., "import": ...}
    aliases: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_generator_config(cls, config: Any) -> "GoTypeConfig":
        """Build a type configuration from a generator configuration."""
        custom = getattr(config, "custom", None) or {}
        return cls(
            unknown_type=custom.get("any_type", "interface{}"),
            aliases=dict(custom.get("aliases", {}) or {}),
        )


class GoTypeMapper:
    """
    Central engine for mapping model type expressions to Go types.
    """

    def __init__(self, config: Optional[GoTypeConfig] = None):
        """Initialize with type configuration."""
        self.config = config or GoTypeConfig()
        self._primitive_types = self._build_primitive_type_map()

    @classmethod
    def from_context(cls, context: Context) -> "GoTypeMapper":
        return cls(GoTypeConfig.from_generator_config(context.config))

    def _build_primitive_type_map(self) -> Dict[str, GoType]:
        """Build mapping of primitive names to Go types."""
        types = {name: GoType(name=go_name) for name, go_name in PRIMITIVE_TYPES.items()}

        unknown = GoType(name=self.config.unknown_type, is_nilable=True)
        types.update(
            {
                "datetime": GoType(
                    name=self.config.time_type,
                    imports_needed=frozenset({self.config.time_import}),
                ),
                "bytes": GoType(name="[]byte", is_nilable=True),
                "raw": GoType(
                    name="json.RawMessage",
                    imports_needed=frozenset({"encoding/json"}),
                    is_nilable=True,
                ),
                "any": unknown,
                "value": unknown,
            }
        )
        return types

    def is_translated(self, name: str) -> bool:
        """True when configuration replaces the alias with a Go type."""
        return name in self.config.aliases

    def translate_alias(self) -> Translate:
        """Function mapping alias names to their configured Go types."""
        aliases = self.config.aliases

        def translate(name: str) -> str:
            override = aliases.get(name)
            if override and override.get("type"):
                return override["type"]
            return name

        return translate

    def map_type(
        self,
        t: Any,
        package_name: Optional[str] = None,
        use_optional: bool = False,
        translate: Optional[Translate] = None,
    ) -> GoType:
        """
        Map a type expression to a Go type.

        Args:
            t: Type expression
            package_name: Package qualifier for named types
            use_optional: Make optional values pointers unless already nilable
            translate: Alias name translation

        Returns:
            GoType with imports and nilability
        """
        kind = t.kind
        prefix = f"{package_name}." if package_name else ""

        if kind == Kind.PRIMITIVE:
            if t.name not in self._primitive_types:
                raise GeneratorError(f"Unsupported primitive type: {t.name}")
            return self._primitive_types[t.name]

        if kind == Kind.ALIAS:
            if translate is not None:
                translated = translate(t.name)
                if translated != t.name:
                    return GoType(name=translated)
            return GoType(name=prefix + t.name, is_nilable=self._is_nilable(t.type, translate))

        if kind in (Kind.TYPE, Kind.ENUM, Kind.UNION):
            return GoType(name=prefix + t.name)

        if kind == Kind.LIST:
            item = self.map_type(t.type, package_name, use_optional, translate)
            return GoType(
                name=f"[]{item.name}",
                imports_needed=item.imports_needed,
                is_nilable=True,
            )

        if kind == Kind.MAP:
            key = self.map_type(t.key_type, package_name, use_optional, translate)
            value = self.map_type(t.value_type, package_name, use_optional, translate)
            return GoType(
                name=f"map[{key.name}]{value.name}",
                imports_needed=key.imports_needed | value.imports_needed,
                is_nilable=True,
            )

        if kind == Kind.OPTIONAL:
            inner = self.map_type(t.type, package_name, use_optional, translate)
            if use_optional and not inner.is_nilable:
                return inner.as_pointer()
            return inner

        if kind == Kind.STREAM:
            item = self.map_type(t.type, package_name, use_optional, translate)
            return GoType(
                name=f"<-chan {item.name}",
                imports_needed=item.imports_needed,
                is_nilable=True,
            )

        if kind == Kind.VOID:
            return GoType(name="")

        raise GeneratorError(f"Cannot map {kind.value} to a Go type")

    def _is_nilable(self, t: Any, translate: Optional[Translate] = None) -> bool:
        """Whether nil is a valid value, following aliases only once each."""
        seen: Set[str] = set()
        while t.kind in (Kind.ALIAS, Kind.OPTIONAL):
            # Alias declarations spell optionals as pointers
            if t.kind == Kind.OPTIONAL:
                return True
            if t.name in seen or (translate is not None and translate(t.name) != t.name):
                return False
            seen.add(t.name)
            t = t.type

        if t.kind in (Kind.LIST, Kind.MAP, Kind.STREAM):
            return True
        if t.kind == Kind.PRIMITIVE and t.name in self._primitive_types:
            return self._primitive_types[t.name].is_nilable
        return False

    def expand_type(
        self,
        t: Any,
        package_name: Optional[str] = None,
        use_optional: bool = False,
        translate: Optional[Translate] = None,
    ) -> str:
        """Go spelling of a type expression."""
        return self.map_type(t, package_name, use_optional, translate).name

    def return_pointer(self, t: Any) -> str:
        if t.kind == Kind.ALIAS and self.is_translated(t.name):
            return ""
        return "*" if is_object(t, False) else ""

    def map_params(
        self,
        parameters: Iterable[Any],
        package_name: Optional[str] = None,
        translate: Optional[Translate] = None,
    ) -> str:
        """
        Render a parameter list.

        Names are camel cased and kept clear of Go keywords and of the
        leading ``ctx`` argument.
        """
        sanitizer = create_parameter_sanitizer()
        parts = []
        for parameter in parameters:
            name = sanitizer.sanitize_name(parameter.name, NamingCase.CAMEL_CASE)
            go_type = self.expand_type(parameter.type, package_name, True, translate)
            parts.append(f"{name} {self.return_pointer(parameter.type)}{go_type}")
        return ", ".join(parts)

    def imports_for(self, t: Any) -> Set[str]:
        """Imports needed to spell a type expression."""
        if t is None:
            return set()

        kind = t.kind
        if kind == Kind.ALIAS:
            override = self.config.aliases.get(t.name)
            if override and override.get("import"):
                return {override["import"]}
            return set()
        if kind in (Kind.OPTIONAL, Kind.LIST, Kind.STREAM):
            return self.imports_for(t.type)
        if kind == Kind.MAP:
            return self.imports_for(t.key_type) | self.imports_for(t.value_type)
        if kind == Kind.PRIMITIVE:
            return set(self.map_type(t).imports_needed)
        return set()


def translate_alias(context: Context) -> Translate:
    """Alias translation configured for the current generation."""
    return GoTypeMapper.from_context(context).translate_alias()
