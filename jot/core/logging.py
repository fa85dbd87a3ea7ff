from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from jot.core.paths import LOG_FILENAME


def get_logger(name: str = "jot") -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(
    *,
    level: str = "info",
    format_name: str = "json",
    stream=None,
    log_dir: Path | None = None,
    filename: str = LOG_FILENAME,
) -> None:
    normalized = level.strip().upper()
    level_value = getattr(logging, normalized, logging.INFO)
    if format_name == "json":
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    if stream is None:
        env_dir = os.environ.get("JOT_LOG_DIR")
        if env_dir:
            log_dir = Path(env_dir)
        if log_dir is not None:
            # The terminal belongs to the UI, so logs only ever go to a file.
            log_dir.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(
                log_dir / filename, encoding="utf-8"
            )
        else:
            handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(level_value)
    if not root.handlers:
        root.addHandler(handler)


def log_event(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.info(json.dumps(payload, sort_keys=True, default=str))


def log_failure(logger: logging.Logger, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.warning(json.dumps(payload, sort_keys=True, default=str))
