"""
Logging for git-critic.

Every module logs through a child of the ``git_critic`` logger. As a library
the package only carries a ``NullHandler``; the CLI (or an embedding
application that wants git-critic's own output) calls ``setup_logging``,
which attaches handlers to the package logger and leaves the root logger
alone.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "git_critic"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Send git-critic's log records to stderr through rich, and optionally a file.

    Calling this again replaces the handlers a previous call installed.
    Records stop propagating to the root logger, so an application that
    configured root does not print them a second time.

    Args:
        verbose: Log DEBUG records (git and perlcritic command lines)
        quiet: Only log errors
        log_file: Optional path to append plain-text records to
        console: Console to render on; defaults to one bound to stderr

    Returns:
        The ``git_critic`` logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_git_critic", False):
            logger.removeHandler(handler)
            handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        show_path=verbose,
    )
    _install(logger, rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        _install(logger, file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def _install(logger: logging.Logger, handler: logging.Handler) -> None:
    handler._git_critic = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name`` under the ``git_critic`` namespace."""
    if name is None or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(LOGGER_NAME).getChild(name)
