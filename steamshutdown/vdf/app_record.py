"""Application record built from one app manifest."""

from dataclasses import dataclass
from enum import IntFlag
from pathlib import Path
from typing import Union


class AppState(IntFlag):
    """Bits of the ``StateFlags`` manifest value."""
    INVALID = 0
    UNINSTALLED = 1
    UPDATE_REQUIRED = 2
    FULLY_INSTALLED = 4
    ENCRYPTED = 8
    LOCKED = 16
    FILES_MISSING = 32
    APP_RUNNING = 64
    FILES_CORRUPT = 128
    UPDATE_RUNNING = 256
    UPDATE_PAUSED = 512
    UPDATE_STARTED = 1024
    UNINSTALLING = 2048
    BACKUP_RUNNING = 4096
    RECONFIGURING = 65536
    VALIDATING = 131072
    ADDING_FILES = 262144
    PREALLOCATING = 524288
    DOWNLOADING = 1048576
    STAGING = 2097152
    COMMITTING = 4194304
    UPDATE_STOPPING = 8388608


DOWNLOADING_STATES = AppState.UPDATE_RUNNING | AppState.UPDATE_STARTED | AppState.DOWNLOADING


@dataclass(frozen=True)
class AppRecord:
    id: int
    name: str
    state: int

    @property
    def flags(self) -> AppState:
        return AppState(self.state)

    @property
    def is_downloading(self) -> bool:
        return bool(self.state & DOWNLOADING_STATES)

    @property
    def is_fully_installed(self) -> bool:
        return bool(self.state & AppState.FULLY_INSTALLED)

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "state": self.state}


def app_id_from_filename(filename: Union[str, Path]) -> int:
    """Extract the app id from a manifest filename.

    ``appmanifest_570.acf`` -> 570. Everything after the first underscore
    of the stem is the id.

    Raises:
        ValueError: If that part is not an integer
    """
    stem = Path(filename).stem
    return int(stem[stem.find("_") + 1:])
