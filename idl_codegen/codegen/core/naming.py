"""
Naming utilities for safe code generation.

Handles case conversions (camel, pascal, snake and dot case with
locale-aware lowering), name sanitization and keyword conflicts.
The case conversion follows the change-case word splitting rules.
"""

import re
from typing import Callable, Dict, Iterable, Optional, Set, Union
from enum import Enum


Transform = Callable[[str, int], str]

# Support camel case ("camelCase" -> "camel Case" and "CAMELCase" -> "CAMEL Case")
DEFAULT_SPLIT_REGEXP = [
    re.compile(r"([a-z0-9])([A-Z])"),
    re.compile(r"([A-Z])([A-Z][a-z])"),
]

# Remove all non-word characters
DEFAULT_STRIP_REGEXP = re.compile(r"[^A-Za-z0-9]+")

_SPLIT = "\0"

# Source: https://www.unicode.org/Public/UCD/latest/ucd/SpecialCasing.txt
# Alternation order matters: "I" is tried before "I\u0307" in the Turkish rule.
SUPPORTED_LOCALE: Dict[str, tuple[re.Pattern, Dict[str, str]]] = {
    "tr": (
        re.compile("\u0130|I|I\u0307"),
        {"\u0130": "i", "I": "\u0131", "I\u0307": "i"},
    ),
    "az": (
        re.compile("\u0130"),
        {"\u0130": "i", "I": "\u0131", "I\u0307": "i"},
    ),
    "lt": (
        re.compile("I|J|\u012e|\u00cc|\u00cd|\u0128"),
        {
            "I": "i\u0307",
            "J": "j\u0307",
            "\u012e": "\u012f\u0307",
            "\u00cc": "i\u0307\u0300",
            "\u00cd": "i\u0307\u0301",
            "\u0128": "i\u0307\u0303",
        },
    ),
}


def lower_case(value: str) -> str:
    """Lower case as a function."""
    return value.lower()


def locale_lower_case(value: str, locale: str) -> str:
    """Localized lower case. Unsupported locales fall back to ``lower_case``."""
    rules = SUPPORTED_LOCALE.get(locale.lower())
    if rules:
        pattern, mapping = rules
        value = pattern.sub(lambda m: mapping[m.group(0)], value)
    return lower_case(value)


def _replace(value: str, patterns: Union[re.Pattern, Iterable[re.Pattern]], replacement) -> str:
    if isinstance(patterns, re.Pattern):
        return patterns.sub(replacement, value)
    for pattern in patterns:
        value = pattern.sub(replacement, value)
    return value


def _split_marker(match: re.Match) -> str:
    return f"{match.group(1)}{_SPLIT}{match.group(2)}"


def no_case(
    value: str,
    split_regexp: Union[re.Pattern, Iterable[re.Pattern]] = DEFAULT_SPLIT_REGEXP,
    strip_regexp: Union[re.Pattern, Iterable[re.Pattern]] = DEFAULT_STRIP_REGEXP,
    delimiter: str = " ",
    transform: Optional[Transform] = None,
    locale: Optional[str] = None,
) -> str:
    """
    Split a string into words and join them back with ``delimiter``.

    Args:
        value: Input string
        split_regexp: Patterns with two groups marking a word boundary
        strip_regexp: Patterns for characters that separate words
        delimiter: Joins the transformed words
        transform: ``transform(word, index)``; lower-cases by default
        locale: Locale for the default lower-casing

    Returns:
        Converted string
    """
    if transform is None:
        if locale:
            transform = lambda part, index: locale_lower_case(part, locale)
        else:
            transform = lambda part, index: lower_case(part)

    result = _replace(_replace(value, split_regexp, _split_marker), strip_regexp, _SPLIT)
    result = result.strip(_SPLIT)

    return delimiter.join(
        transform(part, index) for index, part in enumerate(result.split(_SPLIT))
    )


def pascal_case_transform(value: str, index: int) -> str:
    first_char = value[:1]
    lower_chars = value[1:].lower()
    if index > 0 and "0" <= first_char <= "9":
        return f"_{first_char}{lower_chars}"
    return f"{first_char.upper()}{lower_chars}"


def pascal_case_transform_merge(value: str, index: int = 0) -> str:
    return value[:1].upper() + value[1:].lower()


def camel_case_transform(value: str, index: int) -> str:
    if index == 0:
        return value.lower()
    return pascal_case_transform(value, index)


def camel_case_transform_merge(value: str, index: int) -> str:
    if index == 0:
        return value.lower()
    return pascal_case_transform_merge(value)


def pascal_case(value: str, **options) -> str:
    """Convert to PascalCase."""
    return no_case(value, **{"delimiter": "", "transform": pascal_case_transform, **options})


def camel_case(value: str, **options) -> str:
    """Convert to camelCase."""
    return pascal_case(value, **{"transform": camel_case_transform, **options})


def dot_case(value: str, **options) -> str:
    """Convert to dot.case."""
    return no_case(value, **{"delimiter": ".", **options})


def snake_case(value: str, **options) -> str:
    """Convert to snake_case."""
    return dot_case(value, **{"delimiter": "_", **options})


def capitalize(value: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


def uncapitalize(value: str) -> str:
    """Lower-case the first character, leaving the rest untouched."""
    return value[:1].lower() + value[1:]


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    DOT_CASE = "dot"  # user.name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME
    ORIGINAL = "original"  # left as written


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert a name to the given case style."""
    if target_case == NamingCase.SNAKE_CASE:
        return snake_case(name)
    elif target_case == NamingCase.CAMEL_CASE:
        return camel_case(name)
    elif target_case == NamingCase.PASCAL_CASE:
        return pascal_case(name)
    elif target_case == NamingCase.DOT_CASE:
        return dot_case(name)
    elif target_case == NamingCase.SCREAMING_SNAKE:
        return snake_case(name).upper()
    return name


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "_",
    ) -> str:
        """
        Sanitize a name for safe use in target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for conflicts

        Returns:
            Sanitized name, unique within the current scope
        """
        cache_key = f"{name}\0{target_case.value}"
        converted = self._name_cache.get(cache_key)
        if converted is None:
            converted = self._clean(name, target_case)
            self._name_cache[cache_key] = converted

        final_name = self._resolve_conflicts(converted, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def _clean(self, name: str, target_case: NamingCase) -> str:
        # Remove invalid characters, then convert
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name).strip("_-")
        if cleaned:
            cleaned = convert_case(cleaned, target_case)

        # Ensure doesn't start with number
        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        original_name = name

        if name in self.reserved_words or name in self.builtin_types:
            name = f"{name}{suffix}"

        counter = 1
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)
