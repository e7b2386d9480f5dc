"""
Helper Functions and Utilities

Logging configuration and small helpers shared across the insetmap package.

Example Usage:
    >>> from insetmap.utils import setup_logging
    >>> logger = setup_logging(log_level="DEBUG")
    >>> logger.debug("Rendering inset map")

Author: Steph Smith (steph.smith@unc.edu)
"""

from typing import Optional
from pathlib import Path
import logging
import sys

# Configure module logger
logger = logging.getLogger(__name__)


# ============================================================================
# Logging Configuration
# ============================================================================

DEFAULT_LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and optional file handlers to the ``insetmap`` logger.

    The renderer logs each resolution and drawing step at DEBUG, one summary
    line per finished map at INFO, and a WARNING when a fill category spans
    several shapes and the legend swatch has to pick one. Only the
    ``insetmap`` logger is configured; the root logger and matplotlib's
    loggers are left alone. Calling this again replaces the handlers.

    Parameters
    ----------
    log_level : str, optional
        Level name, case-insensitive (default: INFO)
    log_file : str, optional
        Also append messages to this file, creating parent directories
    format_string : str, optional
        Record format; defaults to ``DEFAULT_LOG_FORMAT``, which includes the
        emitting module (e.g. ``insetmap.legend``)

    Returns
    -------
    logging.Logger
        The ``insetmap`` logger

    Raises
    ------
    ValueError
        If log_level is not a logging level name

    Examples
    --------
    >>> logger = setup_logging(log_level="DEBUG", log_file="maps/insetmap.log")
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    package_logger = logging.getLogger("insetmap")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    if log_file is not None:
        package_logger.debug(f"Logging to file: {log_file}")

    return package_logger


def log_function_call(func_name: str, **kwargs) -> None:
    """
    Log a function call with its parameters at DEBUG level.

    Examples
    --------
    >>> log_function_call("plot_inset_map", point_size=5, point_alpha=0.6)
    """
    params = ", ".join(f"{k}={v!r}" for k, v in kwargs.items())
    logger.debug(f"Calling {func_name}({params})")
