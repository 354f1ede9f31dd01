"""Parser for ``{expr}`` interpolations in template text."""

import ast
import logging
from dataclasses import dataclass
from typing import List, NoReturn, Tuple, Union

from htmlsafe.compiler.exceptions import TemplateSyntaxError

log = logging.getLogger(__name__)

RAW_PREFIX = "@html"


@dataclass
class Interpolation:
    """A single ``{...}`` slot in a template."""

    expression: str
    is_raw: bool = False
    line: int = 1
    column: int = 1


TemplatePart = Union[str, Interpolation]


class InterpolationParser:
    """Splits template source into literal text and interpolations.

    ``{expr}`` is escaped on output, ``{@html expr}`` is emitted as is, and
    ``{{`` / ``}}`` stand for literal braces.
    """

    def __init__(self, source: str, name: str = "<template>"):
        self.source = source
        self.name = name
        self.lines = source.splitlines()

    def parse(self) -> List[TemplatePart]:
        parts: List[TemplatePart] = []
        text: List[str] = []
        src = self.source
        i = 0
        n = len(src)

        while i < n:
            char = src[i]
            if char == "{":
                if src.startswith("{{", i):
                    text.append("{")
                    i += 2
                    continue
                if text:
                    parts.append("".join(text))
                    text = []
                interp, i = self._read_interpolation(i)
                parts.append(interp)
            elif char == "}":
                if src.startswith("}}", i):
                    text.append("}")
                    i += 2
                    continue
                self._error("Unexpected '}' (use '}}' for a literal brace)", i)
            else:
                text.append(char)
                i += 1

        if text:
            parts.append("".join(text))

        log.debug(
            f"Parsed {self.name}: {sum(isinstance(p, Interpolation) for p in parts)} interpolations"
        )
        return parts

    def _read_interpolation(self, start: int) -> Tuple[Interpolation, int]:
        """Read from the opening brace at ``start`` to its matching close."""
        src = self.source
        depth = 0
        quote = None
        i = start + 1
        n = len(src)

        while i < n:
            char = src[i]
            if quote:
                if char == "\\":
                    i += 2
                    continue
                if src.startswith(quote, i):
                    i += len(quote)
                    quote = None
                    continue
            elif char in "\"'":
                # Triple quotes first so '' is not read as an empty string
                quote = src[i : i + 3] if src.startswith(char * 3, i) else char
                i += len(quote)
                continue
            elif char in "([{":
                depth += 1
            elif char in ")]}":
                if depth == 0:
                    if char != "}":
                        self._error(f"Unmatched '{char}' in interpolation", i)
                    return self._build(src[start + 1 : i], start), i + 1
                depth -= 1
            i += 1

        self._error("Unterminated interpolation, expected '}'", start)

    def _build(self, body: str, start: int) -> Interpolation:
        line, column = self._position(start)
        expression = body.strip()
        is_raw = False

        if expression.startswith(RAW_PREFIX) and (
            len(expression) == len(RAW_PREFIX)
            or expression[len(RAW_PREFIX)].isspace()
        ):
            is_raw = True
            expression = expression[len(RAW_PREFIX) :].strip()

        if not expression:
            self._error("Empty interpolation", start)

        try:
            ast.parse(expression, mode="eval")
        except SyntaxError as e:
            self._error(f"Invalid expression {expression!r}: {e.msg}", start)

        return Interpolation(
            expression=expression, is_raw=is_raw, line=line, column=column
        )

    def _position(self, index: int) -> Tuple[int, int]:
        line = self.source.count("\n", 0, index) + 1
        column = index - (self.source.rfind("\n", 0, index) + 1) + 1
        return line, column

    def _error(self, message: str, index: int) -> NoReturn:
        line, column = self._position(index)
        source_line = self.lines[line - 1] if line <= len(self.lines) else None
        raise TemplateSyntaxError(
            message, name=self.name, line=line, column=column, source_line=source_line
        )


def parse_template(source: str, name: str = "<template>") -> List[TemplatePart]:
    """Split ``source`` into literal strings and :class:`Interpolation` parts."""
    return InterpolationParser(source, name).parse()
