"""Main CLI entry point."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import rich_click as click
from jinja2 import TemplateError
from rich.console import Console

from htmlsafe import __version__
from htmlsafe.compiler import HtmlSafeError, compile_template
from htmlsafe.config import Config, configure_logging
from htmlsafe.runtime.escape import escape_html

log = logging.getLogger(__name__)

err_console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'htmlsafe --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "htmlsafe": [
        {
            "name": "Commands",
            "commands": ["escape", "render"],
        }
    ]
}


def parse_vars(pairs: Tuple[str, ...]) -> Dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a context dict."""
    context: Dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Expected KEY=VALUE, got '{pair}'", param_hint="--var"
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key.isidentifier():
            raise click.BadParameter(
                f"'{key}' is not a valid variable name", param_hint="--var"
            )
        context[key] = value
    return context


def _read_file(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Could not read {path}: {e}")


@click.group(
    help=f"""
[bold white on cyan] htmlsafe [/] [bold cyan]v{__version__}[/] Escape text for safe use in HTML.

Run [bold cyan]htmlsafe escape TEXT[/] to escape a string, file or stdin.
Run [bold cyan]htmlsafe render TEMPLATE[/] to render a template file.
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    try:
        config = Config.from_env()
    except ValueError as e:
        raise click.ClickException(str(e))
    configure_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


@cli.command()
@click.argument("text", required=False)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Escape the contents of a file",
)
@click.option("--encoding", default=None, help="Input file encoding")
@click.pass_obj
def escape(
    config: Config, text: Optional[str], file_path: Optional[Path], encoding: Optional[str]
) -> None:
    """Escape TEXT, a file, or standard input."""
    if text is not None and file_path is not None:
        raise click.UsageError("Pass either TEXT or --file, not both.")

    if text is not None:
        click.echo(escape_html(text))
        return

    if file_path is not None:
        log.debug(f"Escaping {file_path}")
        source = _read_file(file_path, encoding or config.encoding)
    else:
        source = click.get_text_stream("stdin").read()

    click.echo(escape_html(source), nl=False)


@cli.command()
@click.argument(
    "template", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    "--var",
    "variables",
    multiple=True,
    metavar="KEY=VALUE",
    help="Template variable (repeatable)",
)
@click.option("--jinja", is_flag=True, help="Render with Jinja2 instead")
@click.option("--encoding", default=None, help="Template file encoding")
@click.pass_obj
def render(
    config: Config,
    template: Path,
    variables: Tuple[str, ...],
    jinja: bool,
    encoding: Optional[str],
) -> None:
    """Render a TEMPLATE file, escaping every interpolated value."""
    context: Dict[str, Any] = parse_vars(variables)
    source = _read_file(template, encoding or config.encoding)

    try:
        if jinja:
            from htmlsafe.runtime.renderer import create_environment, render_string

            env = create_environment(autoescape=config.jinja_autoescape)
            output = render_string(source, context, env=env)
        else:
            output = compile_template(source, name=str(template)).render(context)
    except (HtmlSafeError, TemplateError) as e:
        err_console.print(f"[bold red]✗[/] {type(e).__name__}")
        raise click.ClickException(str(e))

    click.echo(output, nl=False)


if __name__ == "__main__":
    cli()
