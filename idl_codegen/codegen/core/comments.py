"""
Comment formatting for generated code.
"""

from typing import Optional


def format_comment(prefix: str, text: Optional[str], wrap_length: int = 80) -> str:
    """
    Wrap a description into prefixed comment lines.

    Single newlines are treated as spaces so descriptions reflow; blank
    lines are kept as paragraph breaks. Lines are wrapped greedily once a
    word would carry them past ``wrap_length`` characters.

    Args:
        prefix: Written before every line (e.g. ``"// "``)
        text: Description to format
        wrap_length: Maximum line length, excluding the prefix

    Returns:
        Comment block ending with a newline, or an empty string
    """
    if text is None:
        return ""

    chars = list(text)
    for i in range(1, len(chars) - 1):
        if chars[i] == "\n" and chars[i - 1] != "\n" and chars[i + 1] != "\n":
            chars[i] = " "
    text = "".join(chars)

    lines = []
    line = ""
    word = ""
    for c in text:
        if c == " " or c == "\n":
            if len(line) + len(word) > wrap_length:
                lines.append(prefix + line.strip())
                line = word.strip()
                word = " "
            elif c == "\n":
                line += word
                lines.append(prefix + line.strip())
                line = ""
                word = ""
            else:
                line += word
                word = c
        else:
            word += c

    if len(line) + len(word) > wrap_length:
        lines.append(prefix + line.strip())
        line = word.strip()
    else:
        line += word

    if line:
        lines.append(prefix + line.strip())

    if not lines:
        return ""
    return "\n".join(lines) + "\n"
