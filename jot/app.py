from __future__ import annotations

from pathlib import Path

from jot.core.app import Jot
from jot.core.config import get_runtime_config
from jot.core.logging import configure_logging
from jot.core.paths import AppPaths


def main(data_dir: Path | None = None) -> None:
    config = get_runtime_config()
    paths = AppPaths.resolve(data_dir or config.data_dir).ensure()
    configure_logging(
        level=config.log_level,
        format_name=config.log_format,
        log_dir=paths.logs_dir,
    )
    Jot(paths=paths, config=config).run()
