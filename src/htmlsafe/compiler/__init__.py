"""Interpolation template compiler."""

from htmlsafe.compiler.codegen import CompiledTemplate, compile_template
from htmlsafe.compiler.exceptions import HtmlSafeError, TemplateSyntaxError
from htmlsafe.compiler.interpolation import Interpolation, parse_template

__all__ = [
    "CompiledTemplate",
    "compile_template",
    "HtmlSafeError",
    "TemplateSyntaxError",
    "Interpolation",
    "parse_template",
]
