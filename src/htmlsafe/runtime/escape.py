"""HTML escaping utilities for XSS prevention."""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from htmlsafe.core.text import TextConverter, to_text

ESCAPE_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# str.translate makes a single pass, so replacements are never re-scanned
_TRANSLATION = str.maketrans(dict(ESCAPE_TABLE))


def escape_html(value: Any, *, converter: Optional[TextConverter] = None) -> str:
    """Escape HTML special characters to prevent XSS.

    Escapes: & < > " '

    Args:
        value: Any value to escape (converted to text first, ``None`` gives "")
        converter: Optional replacement for the default text conversion

    Returns:
        HTML-escaped string safe for embedding in HTML content
    """
    s = (converter or to_text)(value)
    return s.translate(_TRANSLATION)


html_escape = escape_html
h = escape_html
