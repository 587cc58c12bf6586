"""Durable local key-value storage backed by a single JSON file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import orjson

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Maps string keys to JSON values in one file on disk.

    Every ``set`` rewrites the whole file through a temporary sibling and an
    atomic rename, so readers never observe a half-written document.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        data = orjson.loads(self.path.read_bytes())
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold an object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        try:
            data = self._read_all()
        except (orjson.JSONDecodeError, ValueError) as exc:
            logger.warning(f"Discarding unreadable storage file {self.path}: {exc}")
            data = {}
        data[key] = value
        self._write_all(data)
