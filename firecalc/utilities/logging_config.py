"""Console logging configuration for firecalc.

The library itself only creates module loggers; applications call
:func:`configure_logger` once to see their output.
"""

import logging
import sys


class InfoFilter(logging.Filter):
    """Filter that lets DEBUG and INFO records through to the stdout handler."""

    def filter(self, rec):
        return rec.levelno in (logging.DEBUG, logging.INFO)


def configure_logger(name: str = "firecalc", level: int = logging.INFO) -> logging.Logger:
    """Configure a logger with split stdout/stderr handlers.

    DEBUG and INFO records go to stdout, WARNING and above to stderr.
    Calling it again only updates the level.

    Args:
        name (str, optional): Logger name. Defaults to "firecalc".
        level (int, optional): Logging level. Defaults to logging.INFO.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if getattr(logger, "_firecalc_configured", False):
        return logger

    formatter = logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s")

    h1 = logging.StreamHandler(sys.stdout)
    h1.setLevel(logging.DEBUG)
    h1.addFilter(InfoFilter())
    h1.setFormatter(formatter)

    h2 = logging.StreamHandler(sys.stderr)
    h2.setLevel(logging.WARNING)
    h2.setFormatter(formatter)

    logger.addHandler(h1)
    logger.addHandler(h2)
    logger._firecalc_configured = True

    return logger
