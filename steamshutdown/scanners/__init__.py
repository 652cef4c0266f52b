"""Scanner modules for discovering Steam libraries and installed apps.

Modules:
    library_folders: Find library folders from libraryfolders.vdf
    manifests: Read app manifests into a sorted AppCollection
    watcher: Poll library folders and rebuild on changes
"""

from .library_folders import (
    LibraryDiscoveryError,
    LibraryFoldersFileUnreadable,
    NoLibrariesFound,
    discover_library_roots,
    library_folders_path,
    parse_library_paths,
)
from .manifests import (
    AppCollection,
    PublishedApps,
    iter_manifest_files,
    parse_manifest_file,
    rebuild_app_collection,
    sort_key,
)
from .watcher import (
    ChangeEvent,
    ChangeKind,
    ManifestMonitor,
    ManifestWatcher,
)

__all__ = [
    # library_folders
    "LibraryDiscoveryError",
    "LibraryFoldersFileUnreadable",
    "NoLibrariesFound",
    "discover_library_roots",
    "library_folders_path",
    "parse_library_paths",
    # manifests
    "AppCollection",
    "PublishedApps",
    "iter_manifest_files",
    "parse_manifest_file",
    "rebuild_app_collection",
    "sort_key",
    # watcher
    "ChangeEvent",
    "ChangeKind",
    "ManifestMonitor",
    "ManifestWatcher",
]
