from typing import Any, Mapping, Optional, Union

from starlette.responses import HTMLResponse

from htmlsafe.compiler.codegen import CompiledTemplate, compile_template
from htmlsafe.runtime.escape import escape_html


def render_response(
    template: Union[CompiledTemplate, str],
    context: Optional[Mapping[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Render an interpolation template into an ``HTMLResponse``.

    ``template`` may be a :class:`CompiledTemplate` or raw template source,
    which is compiled on every call.
    """
    if isinstance(template, str):
        template = compile_template(template, name="<response>")
    return HTMLResponse(template.render(context), status_code=status_code)


def escaped_response(value: Any, status_code: int = 200) -> HTMLResponse:
    """Return an ``HTMLResponse`` whose body is ``value`` escaped."""
    return HTMLResponse(escape_html(value), status_code=status_code)
