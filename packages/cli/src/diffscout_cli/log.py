import logging

from rich.logging import RichHandler

_LOGGER_NAMES = ("diffscout_core", "diffscout_cli")


def setup_logging(level: str = "INFO") -> None:
    """Route diffscout loggers through a single rich handler at ``level``."""
    for name in _LOGGER_NAMES:
        logger = logging.getLogger(name)
        if not logger.handlers:
            handler = RichHandler(show_path=False, rich_tracebacks=True)
            handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
            logger.addHandler(handler)
        logger.setLevel(level.upper())
