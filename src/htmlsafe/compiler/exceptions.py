from typing import Optional


class HtmlSafeError(Exception):
    """Base class for errors raised by htmlsafe."""


class TemplateSyntaxError(HtmlSafeError, SyntaxError):
    """Raised when a template cannot be parsed or compiled."""

    def __init__(
        self,
        message: str,
        name: str = "<template>",
        line: int = 1,
        column: int = 1,
        source_line: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.template_name = name
        self.line = line
        self.column = column
        self.source_line = source_line
        # SyntaxError attributes, so tracebacks show the template position
        self.filename = name
        self.lineno = line
        self.offset = column
        self.text = source_line

    def __str__(self) -> str:
        return f"{self.template_name}:{self.line}:{self.column}: {self.message}"
