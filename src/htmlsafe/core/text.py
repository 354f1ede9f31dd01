"""Conversion of arbitrary values to text."""

from typing import Any, Callable

TextConverter = Callable[[Any], str]


def to_text(value: Any) -> str:
    """Return the text form of ``value``.

    ``None`` becomes an empty string and ``str`` subclasses are reduced to a
    plain ``str``. Everything else goes through ``str()``, so an exception
    raised by the value's ``__str__`` reaches the caller as is.
    """
    if value is None:
        return ""
    if type(value) is str:
        return value
    if isinstance(value, str):
        return str.__str__(value)
    return str(value)
