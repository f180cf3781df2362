"""Moment.js date formats to strftime templates.

Obsidian plugins store date formats in Moment.js syntax (YYYY-MM-DD). Only
the subset of tokens used in note filenames is translated. Unpadded tokens
(M, D, H, h, m, s) map to the glibc/BSD "%-" directives.
"""

# Longest tokens first so YYYY wins over YY, MMMM over MM, etc.
_TOKENS: list[tuple[str, str]] = [
    ("YYYY", "%Y"),
    ("YY", "%y"),
    ("MMMM", "%B"),
    ("MMM", "%b"),
    ("MM", "%m"),
    ("M", "%-m"),
    ("DDDD", "%A"),
    ("DDD", "%a"),
    ("DD", "%d"),
    ("D", "%-d"),
    ("HH", "%H"),
    ("H", "%-H"),
    ("hh", "%I"),
    ("h", "%-I"),
    ("mm", "%M"),
    ("m", "%-M"),
    ("ss", "%S"),
    ("s", "%-S"),
    ("ZZ", "%z"),
    ("A", "%p"),
    ("a", "%p"),
    ("Z", "%z"),
    ("T", "T"),
]


def _literal(text: str) -> str:
    return text.replace("%", "%%")


def _match_token(fmt: str, start: int) -> tuple[str, str] | None:
    for token, directive in _TOKENS:
        if fmt.startswith(token, start):
            return token, directive
    return None


def moment_to_strftime(fmt: str) -> str | None:
    """
    Convert a Moment.js format string to a strftime template.

    Args:
        fmt: Moment.js format (e.g. "YYYY-MM-DD[ Daily]")

    Returns:
        strftime template, or None if a [literal] block is unterminated
    """
    parts: list[str] = []
    i = 0
    while i < len(fmt):
        char = fmt[i]

        if char == "[":
            end = fmt.find("]", i + 1)
            if end == -1:
                return None
            parts.append(_literal(fmt[i + 1 : end]))
            i = end + 1
            continue

        if char == "\\":
            if i + 1 < len(fmt):
                parts.append(_literal(fmt[i + 1]))
                i += 2
            else:
                parts.append(_literal(char))
                i += 1
            continue

        match = _match_token(fmt, i)
        if match is not None:
            token, directive = match
            parts.append(directive)
            i += len(token)
            continue

        parts.append(_literal(char))
        i += 1

    return "".join(parts)
