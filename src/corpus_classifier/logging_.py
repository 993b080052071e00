"""Logging utilities.

We use Python's standard `logging` module with a plain structured format.

- Logs go to: `<log_dir>/<run_id>.log`
- Also prints to the console.
"""

from __future__ import annotations
import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"

def setup_logging(log_dir: str, run_id: str, level: int = logging.INFO) -> str:
    """
    Setup logging configuration.

    Args:
        log_dir: Directory for the run log file
        run_id: Run identifier (log file name)
        level: Root log level

    Returns:
        Path of the log file
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, f"{run_id}.log"))

    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    # File (once per log path)
    if not any(isinstance(h, logging.FileHandler) and h.baseFilename == log_path for h in root.handlers):
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Console
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        root.addHandler(ch)

    return log_path
