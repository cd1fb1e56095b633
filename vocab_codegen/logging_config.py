"""Logging helpers shared by every module in the package.

Modules obtain a logger with ``get_logger(__name__)``; the CLI calls
``configure_logging`` once to install a rich console handler.
"""

import logging

from rich.logging import RichHandler

LOGGER_NAME = "vocab_codegen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "WARNING", use_rich: bool = True) -> None:
    """Configure the package logger.

    Args:
        level: Log level name or number.
        use_rich: Render records through rich instead of a plain stream handler.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            show_time=False, show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.setLevel(level)
