"""Unified logging for dasdcalc with console and file output."""
import logging
import tempfile
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

# Log file configuration
LOG_DIR = Path.home() / ".cache" / "dasdcalc"
LOG_FILE = LOG_DIR / "dasdcalc.log"

# Track if file logging has been set up
_file_logging_configured = False

# Level given to every dasdcalc logger
_log_level = logging.INFO


def set_log_level(level: int) -> None:
    """Apply a level to all dasdcalc loggers, existing and future."""
    global _log_level
    _log_level = level
    for name, existing in logging.root.manager.loggerDict.items():
        if name.startswith("dasdcalc") and isinstance(existing, logging.Logger):
            existing.setLevel(level)


def setup_file_logging(log_file: str = None, verbose: bool = False):
    """Set up file logging for dasdcalc runs.

    Args:
        log_file: Path to log file (defaults to ~/.cache/dasdcalc/dasdcalc.log)
        verbose: Enable debug-level logging

    Note:
        Creates log directory if it doesn't exist.
        Falls back to the temp directory if the cache directory is not writable.
    """
    global _file_logging_configured

    if _file_logging_configured:
        return

    target_log_file = Path(log_file) if log_file else LOG_FILE

    try:
        target_log_file.parent.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        target_log_file = Path(tempfile.gettempdir()) / "dasdcalc.log"
        target_log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("dasdcalc")
    file_handler = logging.FileHandler(target_log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    file_formatter = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    set_log_level(logging.DEBUG if verbose else logging.INFO)

    _file_logging_configured = True

    root_logger.info(f"dasdcalc logging initialized: {target_log_file}")


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance with console output.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger with Rich console handler

    Note:
        File logging must be enabled separately via setup_file_logging()
    """
    logger = logging.getLogger(name)

    # Only add console handler if not already present
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(_log_level)

    return logger
