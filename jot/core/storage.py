from __future__ import annotations

import os
import re
from pathlib import Path

from jot.core.config import STORAGE_KEY_PATTERN
from jot.core.errors import wrap_error

_KEY_RE = re.compile(STORAGE_KEY_PATTERN)


class FileKeyValueStore:
    """String values keyed by name, one UTF-8 file per key.

    There is no locking and no transaction across keys; a single ``set`` is
    made atomic by writing a temporary sibling and renaming it into place.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key in {".", ".."}:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise wrap_error(exc, message=f"Unable to read '{key}'") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as exc:
            raise wrap_error(exc, message=f"Unable to write '{key}'") from exc
