"""Scanner for installed Steam apps.

Reads every app manifest of the given library folders and assembles the
sorted AppCollection. Files that cannot be read are skipped, with an
entry added to the collection's warnings unless they were simply empty.

Each rebuild produces a new, complete AppCollection. PublishedApps holds
the current one and replaces it with a single assignment, so readers see
either the previous or the new collection, never a partial one. Running
several rebuilds at once from different threads is not supported;
callers must serialize them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Union

from ..utils.constants import MANIFEST_PATTERN
from ..vdf.app_record import AppRecord
from ..vdf.decode import EmptyOrCorruptFile, ManifestError, decode_manifest
from ..vdf.mapper import map_app_record


def sort_key(record: AppRecord) -> tuple[str, str]:
    """Case-insensitive name order, raw name as tie-breaker."""
    return (record.name.casefold(), record.name)


def _warn(warnings: Optional[list], path: Path, error: str) -> None:
    if warnings is not None:
        warnings.append({"path": str(path), "error": error})


def parse_manifest_file(
    path: Union[str, Path],
    warnings: Optional[list[dict[str, str]]] = None,
) -> Optional[AppRecord]:
    """Read one app manifest.

    Args:
        path: Manifest file
        warnings: List receiving ``{"path", "error"}`` entries for skipped files.
            When omitted, skipped files are not reported anywhere.

    Returns:
        The AppRecord, or None if the file was skipped
    """
    path = Path(path)

    try:
        if path.stat().st_size == 0:
            return None
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        _warn(warnings, path, f"Could not read manifest: {e}")
        return None

    try:
        return map_app_record(decode_manifest(text))
    except EmptyOrCorruptFile:
        return None
    except ManifestError as e:
        _warn(warnings, path, f"Unexpected content, app ignored: {e}")
        return None


@dataclass(frozen=True)
class AppCollection:
    """Sorted, immutable result of one rebuild."""
    apps: tuple[AppRecord, ...] = ()
    roots: tuple[Path, ...] = ()
    warnings: tuple[dict[str, str], ...] = field(default=(), compare=False)

    def __iter__(self) -> Iterator[AppRecord]:
        return iter(self.apps)

    def __len__(self) -> int:
        return len(self.apps)

    def names(self) -> list[str]:
        return [app.name for app in self.apps]

    def by_id(self, app_id: int) -> Optional[AppRecord]:
        for app in self.apps:
            if app.id == app_id:
                return app
        return None

    def downloading(self) -> list[AppRecord]:
        """Apps with a download or update in progress."""
        return [app for app in self.apps if app.is_downloading]

    def to_dict(self) -> dict[str, Any]:
        return {
            "apps": [app.to_dict() for app in self.apps],
            "count": len(self.apps),
            "roots": [str(root) for root in self.roots],
            "errors": list(self.warnings),
        }


def iter_manifest_files(root: Path, manifest_pattern: str = MANIFEST_PATTERN) -> list[Path]:
    """Manifest files directly inside a library folder, sorted by name."""
    return sorted(p for p in root.glob(manifest_pattern) if p.is_file())


def rebuild_app_collection(
    roots: Iterable[Union[str, Path]],
    manifest_pattern: str = MANIFEST_PATTERN,
) -> AppCollection:
    """Read all manifests of the given library folders.

    A library folder that cannot be listed adds a warning and is skipped.
    A manifest reached through two roots pointing at the same folder is
    read once. When the same app id is found in two different folders only
    the first record is kept.

    Args:
        roots: Library folders, in discovery order
        manifest_pattern: Glob for manifest files

    Returns:
        New AppCollection sorted by name
    """
    root_paths = tuple(Path(root) for root in roots)
    warnings: list[dict[str, str]] = []
    records: dict[int, AppRecord] = {}
    parsed: set[Path] = set()

    for root in root_paths:
        if not root.is_dir():
            _warn(warnings, root, "Library folder does not exist")
            continue

        try:
            files = iter_manifest_files(root, manifest_pattern)
        except OSError as e:
            _warn(warnings, root, f"Could not list library folder: {e}")
            continue

        for manifest in files:
            # same file reached through a duplicated root
            resolved = manifest.resolve()
            if resolved in parsed:
                continue
            parsed.add(resolved)

            record = parse_manifest_file(manifest, warnings)
            if record is None or record.id in records:
                continue
            records[record.id] = record

    return AppCollection(
        apps=tuple(sorted(records.values(), key=sort_key)),
        roots=root_paths,
        warnings=tuple(warnings),
    )


class PublishedApps:
    """Holder of the current AppCollection.

    Example:
        >>> published = PublishedApps()
        >>> published.rebuild(roots)
        >>> for app in published.current:
        ...     print(app.name)
    """

    def __init__(self, collection: Optional[AppCollection] = None):
        self._current = collection if collection is not None else AppCollection()

    @property
    def current(self) -> AppCollection:
        return self._current

    def publish(self, collection: AppCollection) -> AppCollection:
        """Replace the current collection, returning the previous one."""
        previous = self._current
        self._current = collection
        return previous

    def rebuild(
        self,
        roots: Iterable[Union[str, Path]],
        manifest_pattern: str = MANIFEST_PATTERN,
    ) -> AppCollection:
        collection = rebuild_app_collection(roots, manifest_pattern)
        self.publish(collection)
        return collection


if __name__ == "__main__":
    import json

    from ..utils.install_path import get_install_path
    from .library_folders import discover_library_roots

    result = rebuild_app_collection(discover_library_roots(get_install_path()))
    print(json.dumps(result.to_dict(), indent=2))
