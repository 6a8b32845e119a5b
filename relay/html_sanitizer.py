"""
Decoding of double-escaped HTML.

Some clients JSON-encode the page twice, so what arrives is e.g.
``<p class=\\"x\\">a\\nb</p>`` rather than the document itself. This module
undoes that one extra layer. It is not a security filter: scripts and
inline handlers pass through untouched.

Decoding is opt-in; legitimate HTML may contain backslashes (inline JS
regexes, Windows paths) that would be corrupted by an unconditional pass.
"""
import re

_ESCAPES = {
    '"': '"',
    "'": "'",
    'n': '\n',
    'r': '\r',
    't': '\t',
    '\\': '\\',
}

_ESCAPE_RE = re.compile(r'\\(["\'nrt\\])')
_LIKELY_ESCAPED_RE = re.compile(r'\\["n]')


def unescape_html(text: str) -> str:
    """Undo one level of backslash escaping in a single pass.

    ``\\"`` ``\\'`` ``\\n`` ``\\r`` ``\\t`` and ``\\\\`` are decoded; any other
    backslash sequence is left as is.
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(1)], text)


def looks_double_escaped(text: str) -> bool:
    """Heuristic: escaped quotes/newlines but no real newlines."""
    return bool(_LIKELY_ESCAPED_RE.search(text)) and '\n' not in text
