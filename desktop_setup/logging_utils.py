from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = "/tmp"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_installed_handlers: list[logging.Handler] = []


def default_log_path(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return os.path.join(DEFAULT_LOG_DIR, f"debian_setup_{stamp}.log")


def log_success(log: logging.Logger, msg: str, *args: object) -> None:
    log.log(SUCCESS, msg, *args)


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging for one run.

    Every event becomes a single line in the run log:
    ``<timestamp> [LEVEL] <logger>: <message>``.

    Notes:
    - If the requested file cannot be opened we fall back to a file in the
      current working directory and keep going.
    - Calling this again replaces the handlers installed by the previous call.

    Returns the actual file path being used.
    """

    requested = log_path or default_log_path()

    logger = logging.getLogger()
    logger.setLevel(level)

    for h in _installed_handlers:
        logger.removeHandler(h)
        h.close()
    _installed_handlers.clear()

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    chosen_path = requested
    try:
        Path(os.path.dirname(requested) or ".").mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.FileHandler(requested)
    except OSError:
        chosen_path = str(Path.cwd() / "debian_setup.log")
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    _installed_handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        _installed_handlers.append(console)

    for h in _installed_handlers:
        logger.addHandler(h)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
