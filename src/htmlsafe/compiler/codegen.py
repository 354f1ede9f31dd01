"""Code generation for interpolation templates.

Each template compiles to a module defining a zero-argument render function.
Escaped interpolations are wrapped in ``escape_html(...)`` and raw ones in
``to_text(...)``; the rendering context becomes the module globals, so the
function body reads template names as plain globals.
"""

import ast
import builtins
import logging
from dataclasses import dataclass, field
from types import CodeType
from typing import Any, Dict, List, Mapping, Optional

from htmlsafe.compiler.interpolation import Interpolation, TemplatePart, parse_template
from htmlsafe.core.text import to_text
from htmlsafe.runtime.escape import escape_html

log = logging.getLogger(__name__)

RENDER_FUNC = "__htmlsafe_render__"
ESCAPE_FUNC = "__htmlsafe_escape__"
TEXT_FUNC = "__htmlsafe_text__"
PARTS_VAR = "__htmlsafe_parts__"

SAFE_BUILTINS = (
    "abs",
    "all",
    "any",
    "bool",
    "dict",
    "enumerate",
    "float",
    "format",
    "int",
    "isinstance",
    "len",
    "list",
    "max",
    "min",
    "range",
    "repr",
    "reversed",
    "round",
    "set",
    "sorted",
    "str",
    "sum",
    "tuple",
    "zip",
)

_BUILTINS: Dict[str, Any] = {
    name: getattr(builtins, name) for name in SAFE_BUILTINS
}


class TemplateCodegen:
    """Builds the ``ast.Module`` for a parsed template."""

    def __init__(self, name: str = "<template>"):
        self.name = name

    def generate(self, parts: List[TemplatePart]) -> ast.Module:
        module = ast.parse(
            f"def {RENDER_FUNC}():\n"
            f"    {PARTS_VAR} = []\n"
            f"    return ''.join({PARTS_VAR})\n",
            filename=self.name,
        )
        func = module.body[0]
        assert isinstance(func, ast.FunctionDef)

        body: List[ast.stmt] = []
        for part in parts:
            if isinstance(part, Interpolation):
                term = self._interpolation(part)
            else:
                term = ast.Constant(value=part)

            append_stmt = ast.Expr(
                value=ast.Call(
                    func=ast.Attribute(
                        value=ast.Name(id=PARTS_VAR, ctx=ast.Load()),
                        attr="append",
                        ctx=ast.Load(),
                    ),
                    args=[term],
                    keywords=[],
                )
            )
            if isinstance(part, Interpolation):
                ast.copy_location(append_stmt, term)
            body.append(append_stmt)

        # buffer = [] ... appends ... return
        func.body[1:1] = body
        return ast.fix_missing_locations(module)

    def _interpolation(self, part: Interpolation) -> ast.expr:
        expr = ast.parse(part.expression, mode="eval").body
        # Point tracebacks at the template line holding the interpolation
        ast.increment_lineno(expr, part.line - 1)

        if part.is_raw:
            # Raw HTML - no escaping
            func_name = TEXT_FUNC
        else:
            # Default: escape HTML for XSS prevention
            func_name = ESCAPE_FUNC

        call = ast.Call(
            func=ast.Name(id=func_name, ctx=ast.Load()),
            args=[expr],
            keywords=[],
        )
        ast.copy_location(call.func, expr)
        return ast.copy_location(call, expr)


@dataclass
class CompiledTemplate:
    """A template compiled to a Python code object."""

    source: str
    name: str
    parts: List[TemplatePart]
    code: CodeType = field(repr=False)

    def render(self, context: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> str:
        """Render the template with ``context`` and ``kwargs`` as variables.

        Unknown names raise ``NameError``; errors raised by the expressions
        themselves propagate unchanged.
        """
        namespace: Dict[str, Any] = {}
        if context:
            namespace.update(context)
        namespace.update(kwargs)
        namespace["__builtins__"] = dict(_BUILTINS)
        namespace[ESCAPE_FUNC] = escape_html
        namespace[TEXT_FUNC] = to_text

        exec(self.code, namespace)
        return namespace[RENDER_FUNC]()

    @property
    def interpolations(self) -> List[Interpolation]:
        return [p for p in self.parts if isinstance(p, Interpolation)]


def compile_template(source: str, name: str = "<template>") -> CompiledTemplate:
    """Parse and compile ``source`` into a :class:`CompiledTemplate`."""
    parts = parse_template(source, name)
    module = TemplateCodegen(name).generate(parts)
    code = compile(module, name, "exec")
    log.debug(f"Compiled template {name} ({len(parts)} parts)")
    return CompiledTemplate(source=source, name=name, parts=parts, code=code)
