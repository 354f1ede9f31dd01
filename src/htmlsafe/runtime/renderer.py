from typing import Any, Dict, Optional

from jinja2 import Environment, select_autoescape
from markupsafe import Markup

from htmlsafe.runtime.escape import escape_html

ESCAPE_FILTERS = ("h", "html_escape", "escape_html")

_env: Optional[Environment] = None


def escape_filter(value: Any) -> Markup:
    """Jinja2 filter form of :func:`escape_html`.

    The result is marked safe so autoescaping does not escape it twice.
    """
    return Markup(escape_html(value))


def create_environment(autoescape: bool = True, **options: Any) -> Environment:
    """Create a Jinja2 environment with the escaping filters registered.

    Args:
        autoescape: Enable autoescaping for html/xml and string templates
        **options: Extra keyword arguments passed to ``jinja2.Environment``

    Returns:
        Configured ``jinja2.Environment``
    """
    if autoescape:
        options.setdefault(
            "autoescape",
            select_autoescape(["html", "htm", "xml"], default_for_string=True),
        )
    env = Environment(**options)
    for name in ESCAPE_FILTERS:
        env.filters[name] = escape_filter
    return env


def get_environment() -> Environment:
    """Return the shared default environment, creating it on first use."""
    global _env
    if _env is None:
        _env = create_environment()
    return _env


def render_string(
    source: str,
    context: Optional[Dict[str, Any]] = None,
    env: Optional[Environment] = None,
) -> str:
    """Render a Jinja2 template string with the given context.

    Args:
        source: Template source
        context: Dictionary of variables to pass to the template
        env: Environment to use instead of the shared default

    Returns:
        Rendered HTML string
    """
    template = (env or get_environment()).from_string(source)
    return template.render(**(context or {}))
