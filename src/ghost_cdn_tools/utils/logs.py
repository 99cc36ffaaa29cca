"""Console logging."""
import logging

from rich.logging import RichHandler

LOGGER_NAME = "ghost_cdn_tools"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route package logs through rich. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=verbose, markup=False, rich_tracebacks=True))
    logger.propagate = False

    return logger
