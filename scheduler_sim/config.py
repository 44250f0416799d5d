from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

MAX_TIME_UNIT = 500

MAX_TIME_ENV = "SCHEDULER_SIM_MAX_TIME"


def max_time_from_env(default: int = MAX_TIME_UNIT) -> int:
    """
    Read the arrival/burst ceiling from the environment, falling back to ``default``.
    """
    raw = os.environ.get(MAX_TIME_ENV, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring non-integer %s=%r", MAX_TIME_ENV, raw)
        return default
    if value < 1:
        logging.getLogger(__name__).warning("Ignoring non-positive %s=%r", MAX_TIME_ENV, raw)
        return default
    return value


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
