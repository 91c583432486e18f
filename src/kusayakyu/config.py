"""Application configuration for Kusayakyu."""

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

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from PyQt6 import QtCore

from kusayakyu.constants import APP_NAME, DEFAULT_LOG_LEVEL, STORE_FILE_NAME

ENV_DATA_DIR = "KUSAYAKYU_DATA_DIR"
ENV_LOG_LEVEL = "KUSAYAKYU_LOG_LEVEL"


def default_data_dir() -> str:
    """Resolve the per-user folder Kusayakyu keeps its data and logs in.

    Uses Qt's generic data location (``~/.local/share`` on Linux,
    ``%APPDATA%`` on Windows), falling back to the temp location.
    """
    base = QtCore.QStandardPaths.writableLocation(
        QtCore.QStandardPaths.StandardLocation.GenericDataLocation
    )
    if not base:
        base = QtCore.QStandardPaths.writableLocation(
            QtCore.QStandardPaths.StandardLocation.TempLocation
        )
    return os.path.join(base, APP_NAME)


@dataclass
class AppConfig:
    """Application settings.

    Attributes
    ----------
    data_dir : str
        Folder holding the key-value store file and the ``logs`` folder.
    log_level : str
        Name of the minimum logging level (``DEBUG``, ``INFO`` ...).
    store_file : str
        File name of the JSON key-value store inside ``data_dir``.
    """

    data_dir: str = field(default_factory=default_data_dir)
    log_level: str = DEFAULT_LOG_LEVEL
    store_file: str = STORE_FILE_NAME

    @property
    def store_path(self) -> Path:
        """Full path of the key-value store file."""
        return Path(self.data_dir) / self.store_file

    @property
    def log_dir(self) -> Path:
        """Folder the rotating log file is written to."""
        return Path(self.data_dir) / "logs"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "data_dir": self.data_dir,
            "log_level": self.log_level,
            "store_file": self.store_file,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            data_dir=data.get("data_dir") or default_data_dir(),
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)).upper(),
            store_file=data.get("store_file", STORE_FILE_NAME),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build configuration from ``KUSAYAKYU_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls.from_dict(
            {
                "data_dir": env.get(ENV_DATA_DIR),
                "log_level": env.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            }
        )
