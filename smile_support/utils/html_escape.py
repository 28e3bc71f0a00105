"""
HTML escaping for values interpolated into generated email markup.
"""

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


def escape_html(text: str) -> str:
    """Replace the five reserved characters with entity references in one pass."""
    return text.translate(_HTML_ESCAPES)
