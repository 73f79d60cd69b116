"""Escaping for literal text written into template fragments."""

from typing import Any


def escape_html(value: Any, quote: bool = True) -> str:
    """Escape a literal so the renderer parses it as text, not markup.

    Escapes: & < > and, when ``quote`` is set, "

    Args:
        value: Any value (converted to string first)
        quote: Also escape double quotes, required inside attribute values

    Returns:
        Escaped string, safe to splice into a static fragment
    """
    s = str(value).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    if quote:
        s = s.replace('"', "&quot;")
    return s
