from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("htmlsafe")
except PackageNotFoundError:
    __version__ = "unknown"

from htmlsafe.runtime.escape import ESCAPE_TABLE, escape_html, h, html_escape
from htmlsafe.core.text import TextConverter, to_text
from htmlsafe.compiler import (
    CompiledTemplate,
    HtmlSafeError,
    TemplateSyntaxError,
    compile_template,
)

__all__ = [
    "ESCAPE_TABLE",
    "escape_html",
    "html_escape",
    "h",
    "to_text",
    "TextConverter",
    "compile_template",
    "CompiledTemplate",
    "HtmlSafeError",
    "TemplateSyntaxError",
]
