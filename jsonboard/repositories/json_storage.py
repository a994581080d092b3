"""
JSON document persistence adapter.

The whole database is one JSON file holding every collection. It is read in
full for each request and rewritten in full after each mutation.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import json
import logging
import os
import threading

logger = logging.getLogger(__name__)

COLLECTIONS = ("posts", "comments")


class StoreError(Exception):
    """Raised when the backing document cannot be read, parsed or written."""


def empty_document() -> dict:
    return {name: [] for name in COLLECTIONS}


def db_defaults(db: dict) -> dict:
    for name in COLLECTIONS:
        db.setdefault(name, [])
    return db


class JsonStore:
    """Load/save the whole document; `transaction()` serializes load-mutate-save within the process."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> dict:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise StoreError(f"Database file not found: {self.path}") from exc
        except (OSError, ValueError) as exc:
            raise StoreError(str(exc)) from exc
        if not isinstance(data, dict):
            raise StoreError(f"Database file {self.path} does not contain a JSON object")
        return db_defaults(data)

    def save(self, db: dict) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            payload = json.dumps(db, ensure_ascii=False, indent=2)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write %s: %s", self.path, exc)
            try:
                tmp.unlink()
            except OSError:
                pass
            raise StoreError(str(exc)) from exc

    def read(self) -> dict:
        """Load under the write lock so readers never see a half-applied transaction."""
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """Yield a fresh document and save it when the block finishes without raising."""
        with self._lock:
            db = self.load()
            yield db
            self.save(db)

    def ensure_exists(self) -> bool:
        """Create the document with empty collections when the file is missing."""
        with self._lock:
            if self.path.exists():
                return False
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.save(empty_document())
            logger.info("Created empty database at %s", self.path)
            return True
