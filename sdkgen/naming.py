"""Convert API path segments to generated names.

A path contributes a function only when it has exactly two segments:
the first names the module, the second is camel-cased into the function name.

Examples:
  /weatherforecast/today        -> ("weatherforecast", "today")
  /WeatherForecast/GetTomorrow  -> ("WeatherForecast", "getTomorrow")
  /pets/get-all items           -> ("pets", "getAllItems")
  /a, /a/b/c                    -> skipped
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")

# Case tokens, tried left to right:
#   ABCWord -> ABC | Word   (3+ capitals before Upper+lower: acronym ends one early)
#   ABc, Today              (1-2 capitals glue onto the lowercase run)
#   ABC, AB2                (trailing capitals)
#   abc, 123
_CASE_TOKENS = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z])|[A-Z]{1,2}[a-z]+|[A-Z]+|[a-z]+|[0-9]+")


def _split_words(segment: str) -> list[str]:
    """Split on whitespace, underscores and punctuation, dropping empty words."""
    return [w for w in _SEPARATORS.split(segment) if w]


def _case_tokens(word: str) -> list[str]:
    return _CASE_TOKENS.findall(word)


def to_camel_case(segment: str) -> str:
    """Normalize an arbitrary path segment to a lowerCamelCase identifier.

    Returns an empty string when the segment has no letters or digits.
    """
    tokens = [t.lower() for w in _split_words(segment) for t in _case_tokens(w)]
    if not tokens:
        return ""
    return tokens[0] + "".join(t[0].upper() + t[1:] for t in tokens[1:])


def split_path(path: str) -> tuple[str, str] | None:
    """Return (module, segment) for a two-segment path, else None."""
    parts = [p for p in path.split("/") if p]
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


JS_RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in", "instanceof",
    "interface", "let", "new", "null", "package", "private", "protected", "public",
    "return", "static", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield", "arguments", "eval",
})

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def js_identifier(name: str, taken: frozenset[str] | set[str] = frozenset()) -> str:
    """Make name usable as a JavaScript binding.

    Invalid names are camel-cased ('page-size' -> 'pageSize'); reserved words
    and names in `taken` get a trailing underscore until they are free.
    """
    if not _JS_IDENTIFIER.match(name):
        name = to_camel_case(name) or "param"
        if name[0].isdigit():
            name = "_" + name
    while name in JS_RESERVED_WORDS or name in taken:
        name += "_"
    return name
