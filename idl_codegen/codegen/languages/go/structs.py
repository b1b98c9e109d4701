"""
Go declarations for structured types.
"""

import json
from typing import Any, Dict, List, Optional

from ...core.annotations import is_reference
from ...core.model import Field, Kind
from ...core.type_utils import convert_array_to_object, is_object
from ...core.visitor import BaseVisitor, Context, Writer
from ....logging_config import get_logger
from .helpers import comment, enum_value_name, render
from .naming import field_name, tag_name
from .types import GoTypeMapper

logger = get_logger(__name__)

NUMERIC_PRIMITIVES = {"i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "f32", "f64"}


def struct_tag(config: Any, f: Field) -> str:
    """Struct tag for a field, or an empty string when tags are disabled."""
    if not getattr(config, "generate_json_tags", True):
        return ""

    name = tag_name(f.name, getattr(config, "json_tag_case", "original"))
    options = ""
    if f.type.kind == Kind.OPTIONAL and getattr(config, "json_tag_omitempty", True):
        options = ",omitempty"

    custom = getattr(config, "custom", None) or {}
    keys = ["json"] + list(custom.get("extra_struct_tags", []))
    return "`" + " ".join(f'{key}:"{name}{options}"' for key in keys) + "`"


def default_literal(t: Any, value: Any, mapper: GoTypeMapper) -> Optional[str]:
    """Go literal for a field default, or None if it cannot be expressed."""
    seen = set()
    while t.kind == Kind.ALIAS and not mapper.is_translated(t.name):
        if t.name in seen:
            return None
        seen.add(t.name)
        t = t.type

    if t.kind == Kind.ENUM and isinstance(value, str):
        values = convert_array_to_object(t.values, lambda v: v.name)
        if value in values:
            return enum_value_name(t, values[value])
        return None

    if t.kind != Kind.PRIMITIVE:
        return None

    if t.name == "bool":
        if isinstance(value, bool):
            return "true" if value else "false"
        return None
    if t.name == "string":
        return json.dumps(value) if isinstance(value, str) else None
    if t.name in NUMERIC_PRIMITIVES and isinstance(value, (int, float)):
        if isinstance(value, bool):
            return None
        if isinstance(value, float) and t.name not in ("f32", "f64"):
            return None
        return json.dumps(value)
    return None


class StructVisitor(BaseVisitor):
    """
    Writes a struct for the current type.

    Optional fields are pointers unless nil is already valid for them;
    ``@ref`` fields to structs are pointers as well. Fields declaring a
    default produce a ``Default<Name>()`` constructor.
    """

    def __init__(self, writer: Writer, write_type_info: bool = True):
        super().__init__(writer)
        self.write_type_info = write_type_info

    def visit_type(self, context: Context) -> None:
        t = context.type
        mapper = GoTypeMapper.from_context(context)
        translate = mapper.translate_alias()

        fields = []
        defaults: List[Dict[str, str]] = []
        for f in t.fields:
            go_type = mapper.expand_type(f.type, None, True, translate)
            if is_reference(f.annotations) and is_object(f.type, False):
                go_type = f"*{go_type}"

            name = field_name(f, f.name)
            declaration = f"{name} {go_type}"
            tag = struct_tag(context.config, f)
            if tag:
                declaration = f"{declaration} {tag}"
            fields.append(
                {
                    "comment": comment(context, f.description, "\t"),
                    "declaration": declaration,
                }
            )

            if f.default is not None and f.type.kind != Kind.OPTIONAL:
                literal = default_literal(f.type, f.default, mapper)
                if literal is None:
                    logger.warning(
                        "Cannot express default %r of %s.%s in Go", f.default, t.name, f.name
                    )
                else:
                    defaults.append({"name": name, "value": literal})

        self.write(
            render(
                "struct.go.j2",
                {
                    "comment": comment(context, t.description),
                    "name": t.name,
                    "fields": fields,
                    "embed_ns": self.write_type_info,
                    "type_info": self.write_type_info,
                    "defaults": defaults,
                },
            )
        )
        super().visit_type(context)
