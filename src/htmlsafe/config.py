"""Configuration and logging setup."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from rich.logging import RichHandler

ENV_PREFIX = "HTMLSAFE_"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {value!r}")


def _parse_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Invalid log level for {name}: {value!r}")
    return level


@dataclass
class Config:
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    jinja_autoescape: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a config from ``HTMLSAFE_*`` environment variables."""
        if environ is None:
            environ = os.environ

        config = cls()
        if f"{ENV_PREFIX}ENCODING" in environ:
            config.encoding = environ[f"{ENV_PREFIX}ENCODING"]
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            config.log_level = _parse_level(
                f"{ENV_PREFIX}LOG_LEVEL", environ[f"{ENV_PREFIX}LOG_LEVEL"]
            )
        if f"{ENV_PREFIX}JINJA_AUTOESCAPE" in environ:
            config.jinja_autoescape = _parse_bool(
                f"{ENV_PREFIX}JINJA_AUTOESCAPE",
                environ[f"{ENV_PREFIX}JINJA_AUTOESCAPE"],
            )
        return config


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a rich handler to the package logger and set its level.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger("htmlsafe")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level.upper())
    return logger
