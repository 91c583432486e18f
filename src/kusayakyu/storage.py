"""JSON persistence, export and import.

:class:`JsonStore` is a small key-value store kept in a single JSON file. The
collection snapshot lives under one key; a snapshot written by the
single-tournament version of the app lives under the legacy key and is
upgraded when read.
"""

# Kusayakyu
# Copyright (C) 2025  Kusayakyu developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import json
import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from kusayakyu.collection import TournamentCollection, deserialize, serialize
from kusayakyu.constants import (
    EXPORT_FILE_PREFIX,
    LEGACY_STORAGE_KEY,
    SAVE_FILE_EXTENSION,
    STORAGE_KEY,
)
from kusayakyu.exceptions import FileLoadError, FileSaveError
from kusayakyu.type_hints import Document
from kusayakyu.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def _write_json_atomic(path: Path, data: Any) -> None:
    """Write ``data`` next to ``path`` first, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _collection_from(document: Any, source: str) -> TournamentCollection:
    if not isinstance(document, dict):
        raise FileLoadError(f"{source}: expected a JSON object")
    try:
        return deserialize(document)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.error(f"Malformed tournament document in {source}: {e}")
        raise FileLoadError(f"{source}: malformed tournament document ({e})") from e


class JsonStore:
    """Key-value store persisted as one JSON object on disk."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)

    # ========== Key-Value Access ==========

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = _read_json(self.path)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read store {self.path}: {e}")
            raise FileLoadError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise FileLoadError(f"{self.path}: expected a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        try:
            _write_json_atomic(self.path, data)
        except OSError as e:
            logger.error(f"Could not write store {self.path}: {e}")
            raise FileSaveError(f"Could not write {self.path}: {e}") from e

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if data.pop(key, None) is not None:
            self._write_all(data)

    # ========== Collection Snapshot ==========

    def load_collection(self) -> TournamentCollection:
        """Load the stored collection.

        Falls back to a legacy single-tournament snapshot, and to an empty
        collection when nothing is stored.
        """
        data = self._read_all()
        if STORAGE_KEY in data:
            return _collection_from(data[STORAGE_KEY], str(self.path))
        if LEGACY_STORAGE_KEY in data:
            logger.info("Found single-tournament snapshot, upgrading")
            return _collection_from(data[LEGACY_STORAGE_KEY], str(self.path))
        logger.debug(f"Nothing stored in {self.path}, starting empty")
        return TournamentCollection()

    def save_collection(self, collection: TournamentCollection) -> None:
        """Store the whole collection; the legacy snapshot is dropped."""
        data = self._read_all()
        data[STORAGE_KEY] = serialize(collection)
        data.pop(LEGACY_STORAGE_KEY, None)
        self._write_all(data)
        logger.debug(f"Saved {len(collection)} tournaments to {self.path}")

    def reset(self) -> None:
        """Forget every stored tournament."""
        data = self._read_all()
        data.pop(STORAGE_KEY, None)
        data.pop(LEGACY_STORAGE_KEY, None)
        self._write_all(data)
        logger.warning(f"Reset store {self.path}")


# ========== Export / Import ==========


def export_file_name(today: Optional[date] = None) -> str:
    """``baseball-tournament-YYYY-MM-DD.json`` for the given day."""
    today = today or date.today()
    return f"{EXPORT_FILE_PREFIX}{today.isoformat()}{SAVE_FILE_EXTENSION}"


def export_collection(
    collection: TournamentCollection,
    directory: PathLike,
    today: Optional[date] = None,
) -> Path:
    """Write the collection to a dated export file in ``directory``.

    Returns:
        Path of the written file
    """
    document: Document = serialize(collection)
    document["exportDate"] = datetime.now().isoformat(timespec="seconds")

    path = Path(directory) / export_file_name(today)
    try:
        _write_json_atomic(path, document)
    except OSError as e:
        logger.error(f"Export to {path} failed: {e}")
        raise FileSaveError(f"Could not export to {path}: {e}") from e

    logger.info(f"Exported {len(collection)} tournaments to {path}")
    return path


def import_collection(path: PathLike) -> TournamentCollection:
    """Read an export file, current or single-tournament shape.

    Raises:
        FileLoadError: If the file cannot be read or is not a tournament
            document
    """
    path = Path(path)
    try:
        document = _read_json(path)
    except (OSError, ValueError) as e:
        logger.error(f"Import from {path} failed: {e}")
        raise FileLoadError(f"Could not read {path}: {e}") from e

    collection = _collection_from(document, str(path))
    logger.info(f"Imported {len(collection)} tournaments from {path}")
    return collection
