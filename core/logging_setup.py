"""Centralized logging configuration shared by every package in this project.

- ``configure_logging(...)``: attach a single ``StreamHandler`` to the project
  root logger (``"finplan"``). Called once by entrypoints such as the CLI.
- ``get_logger(name)``: acquire a logger, ensuring the project root logger has
  at least a ``NullHandler`` when nothing has been configured yet.

Library modules never attach their own handlers; they call
``get_logger("finplan.<module>")`` and rely on the host application.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "finplan"
_CONFIGURED = False


def _parse_level(level: int | str | None, *, use_env: bool = True) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("FINPLAN_LOG_LEVEL") if use_env else None
    if env_val:
        return _parse_level(env_val, use_env=False)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Configure the project root logger exactly once.

    ``level`` may be an ``int`` or a level name; when ``None`` the
    ``FINPLAN_LOG_LEVEL`` environment variable is used, else ``INFO``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setLevel(_parse_level(level))
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))

    logger.setLevel(_parse_level(level))
    logger.addHandler(handler)
    # no double emission via the root logger
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, with a silent default until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
