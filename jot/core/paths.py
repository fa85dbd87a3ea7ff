from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_path, user_data_path, user_log_path

APP_NAME = "jot"
APP_AUTHOR = "jot"
SETTINGS_FILENAME = "settings.json"
LOG_FILENAME = "jot.log"


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    settings_file: Path
    data_dir: Path
    logs_dir: Path

    @classmethod
    def resolve(cls, data_dir: Path | None = None) -> AppPaths:
        """Platform directories, or everything under ``data_dir`` when given."""
        if data_dir is not None:
            root = Path(data_dir).expanduser()
            config_dir = root / "config"
            storage_dir = root / "data"
            logs_dir = root / "logs"
        else:
            config_dir = Path(user_config_path(APP_NAME, APP_AUTHOR))
            storage_dir = Path(user_data_path(APP_NAME, APP_AUTHOR))
            logs_dir = Path(user_log_path(APP_NAME, APP_AUTHOR))
        return cls(
            config_dir=config_dir,
            settings_file=config_dir / SETTINGS_FILENAME,
            data_dir=storage_dir,
            logs_dir=logs_dir,
        )

    def ensure(self) -> AppPaths:
        for directory in (self.config_dir, self.data_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)
        return self
