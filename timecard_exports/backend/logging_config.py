from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def setup_logging(level: str = "INFO", log_dir: str | None = None) -> Path | None:
    """Configure root logging for exports.

    Logs go to the console, and to a rotating `exports.log` when a log
    directory is given. Returns that directory, if any.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    # Font and PDF internals are chatty at DEBUG.
    logging.getLogger("reportlab").setLevel(logging.WARNING)

    if not log_dir:
        return None

    logs = Path(log_dir)
    logs.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        logs / "exports.log",
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    return logs
