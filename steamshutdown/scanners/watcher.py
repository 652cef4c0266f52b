"""Watch library folders for manifest changes.

Polls file modification times instead of subscribing to OS
notifications, which keeps the whole pipeline synchronous. Every poll
compares a fresh snapshot with the previous one and reports the
differences as ChangeEvents. ManifestMonitor turns a batch of events
into at most one rebuild.
"""

import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from ..utils.constants import LIBRARY_FOLDERS_FILE, LIBRARY_SUBFOLDER, MANIFEST_PATTERN, POLL_INTERVAL
from .library_folders import discover_library_roots, library_folders_path
from .manifests import AppCollection, PublishedApps, iter_manifest_files

Snapshot = dict[Path, tuple[int, int]]


class ChangeKind(Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeEvent:
    path: Path
    kind: ChangeKind


def _stat_key(path: Path) -> Optional[tuple[int, int]]:
    try:
        st = path.stat()
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size)


class ManifestWatcher:
    """Tracks manifest files of a set of library folders.

    Args:
        roots: Library folders to watch
        extra_files: Other files to watch (the library folders file)
        manifest_pattern: Glob for manifest files
    """

    def __init__(
        self,
        roots: Iterable[Union[str, Path]],
        extra_files: Iterable[Union[str, Path]] = (),
        manifest_pattern: str = MANIFEST_PATTERN,
    ):
        self.roots = [Path(r) for r in roots]
        self.extra_files = [Path(f) for f in extra_files]
        self.manifest_pattern = manifest_pattern
        self._snapshot: Snapshot = self.snapshot()

    def snapshot(self) -> Snapshot:
        """Current (mtime, size) of every watched file that exists."""
        files: list[Path] = list(self.extra_files)
        for root in self.roots:
            if not root.is_dir():
                continue
            try:
                files.extend(iter_manifest_files(root, self.manifest_pattern))
            except OSError:
                continue

        snap: Snapshot = {}
        for path in files:
            key = _stat_key(path)
            if key is not None:
                snap[path] = key
        return snap

    def set_roots(self, roots: Iterable[Union[str, Path]]) -> None:
        """Watch a new set of library folders, starting from a fresh snapshot."""
        self.roots = [Path(r) for r in roots]
        self._snapshot = self.snapshot()

    def poll(self) -> list[ChangeEvent]:
        """Report what changed since the previous poll."""
        current = self.snapshot()
        previous = self._snapshot
        events: list[ChangeEvent] = []

        for path, key in current.items():
            if path not in previous:
                events.append(ChangeEvent(path, ChangeKind.CREATED))
            elif previous[path] != key:
                events.append(ChangeEvent(path, ChangeKind.CHANGED))

        for path in previous:
            if path not in current:
                events.append(ChangeEvent(path, ChangeKind.DELETED))

        self._snapshot = current
        return events


class ManifestMonitor:
    """Keeps a PublishedApps up to date with the files on disk.

    Library folders are discovered once on start and again only when the
    library folders file itself changes; any other change just rebuilds
    the collection from the known folders.
    """

    def __init__(
        self,
        install_path: Union[str, Path],
        published: Optional[PublishedApps] = None,
        library_subfolder: str = LIBRARY_SUBFOLDER,
        library_folders_file: str = LIBRARY_FOLDERS_FILE,
        manifest_pattern: str = MANIFEST_PATTERN,
    ):
        self.install_path = Path(install_path)
        self.published = published or PublishedApps()
        self.library_subfolder = library_subfolder
        self.library_folders_file = library_folders_file
        self.manifest_pattern = manifest_pattern
        self.roots: list[Path] = []
        self.watcher: Optional[ManifestWatcher] = None

    @property
    def library_folders_path(self) -> Path:
        return library_folders_path(
            self.install_path, self.library_subfolder, self.library_folders_file
        )

    def discover(self) -> list[Path]:
        """Re-discover library folders.

        Raises:
            LibraryDiscoveryError: If discovery fails
        """
        self.roots = discover_library_roots(
            self.install_path, self.library_subfolder, self.library_folders_file
        )
        if self.watcher is None:
            self.watcher = ManifestWatcher(
                self.roots, [self.library_folders_path], self.manifest_pattern
            )
        else:
            self.watcher.set_roots(self.roots)
        return self.roots

    def rebuild(self) -> AppCollection:
        return self.published.rebuild(self.roots, self.manifest_pattern)

    def start(self) -> AppCollection:
        """Discover library folders and build the first collection."""
        self.discover()
        return self.rebuild()

    def handle(self, events: Iterable[ChangeEvent]) -> Optional[AppCollection]:
        """Apply a batch of change events.

        Returns:
            The new collection, or None if the batch was empty
        """
        events = list(events)
        if not events:
            return None

        if any(event.path == self.library_folders_path for event in events):
            self.discover()

        return self.rebuild()

    def poll_once(self) -> Optional[AppCollection]:
        if self.watcher is None:
            return self.start()
        return self.handle(self.watcher.poll())

    def run(
        self,
        interval: float = POLL_INTERVAL,
        on_rebuild: Optional[Callable[[AppCollection], None]] = None,
        max_polls: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Poll until interrupted (or ``max_polls`` polls have run).

        ``on_rebuild`` is called after every rebuild with the new collection.
        """
        polls = 0
        while max_polls is None or polls < max_polls:
            sleep(interval)
            collection = self.poll_once()
            polls += 1
            if collection is not None and on_rebuild is not None:
                on_rebuild(collection)
