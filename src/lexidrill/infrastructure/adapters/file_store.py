"""
JSON File Store: infrastructure adapter for persisting scheduler blobs on disk.

Implements KeyValueStore with one file per key inside a state directory.
"""

import logging
import os
import re
import tempfile
from pathlib import Path

from lexidrill.domain.ports import KeyValueStore

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


class JsonFileStore(KeyValueStore):
    """
    Stores each blob in `<state_dir>/<key>.json`.

    Characters that are not safe in file names (e.g. ':' in versioned keys)
    are replaced with '_'. Writes go to a temporary file that replaces the
    target, so a crash mid-write leaves the previous blob intact.
    """

    def __init__(self, state_dir: Path):
        self.state_dir = Path(state_dir)

    def path_for(self, key: str) -> Path:
        return self.state_dir / f"{_UNSAFE.sub('_', key)}.json"

    def load(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def save(self, key: str, blob: str) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)

        fd, tmp = tempfile.mkstemp(dir=self.state_dir, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved {len(blob)} bytes to {path}")
