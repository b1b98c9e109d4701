"""
Shared helpers for the Go visitors.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from ...core.comments import format_comment
from ...core.model import Enum, EnumValue
from ...core.templates import TemplateEngine, create_template_engine
from ...core.visitor import Context
from .naming import field_name

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def template_engine() -> TemplateEngine:
    """Engine loading the packaged Go templates."""
    return create_template_engine(TEMPLATE_DIR)


def render(template_name: str, variables: Dict[str, Any]) -> str:
    return template_engine().render_template(template_name, variables)


def comment(context: Context, text: Optional[str], indent: str = "") -> str:
    """Description as ``//`` lines, or nothing when comments are disabled."""
    config = context.config
    if not getattr(config, "add_comments", True):
        return ""
    wrap_length = getattr(config, "comment_wrap_length", 80)
    return format_comment(f"{indent}// ", text, wrap_length)


def go_string(value: str) -> str:
    """Quoted Go string literal."""
    return json.dumps(value)


def enum_value_name(enum: Enum, value: EnumValue) -> str:
    """Constant name of an enum member, e.g. ``ColorRed``."""
    return f"{enum.name}{field_name(value, value.name)}"
