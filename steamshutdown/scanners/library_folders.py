r"""Scanner for Steam library folders.

Steam keeps extra library locations in ``libraryfolders.vdf``. Valve has
changed the nesting of that file between client versions, so it is not
decoded as a whole: every line is scanned for a ``path`` entry like

    "path"\t\t"E:\\SteamLibrary"

and the value is taken from there. This is a heuristic. Keys that
merely contain "path" are filtered by checking the cleaned line starts
with it; anything with an unexpected layout is silently dropped.
"""

from pathlib import Path
from typing import Iterable, Union

from ..utils.constants import LIBRARY_FOLDERS_FILE, LIBRARY_SUBFOLDER
from ..vdf.decode import split_lines

PATH_TOKEN = "path"


class LibraryDiscoveryError(Exception):
    """Base class for errors that make library discovery impossible."""
    pass


class NoLibrariesFound(LibraryDiscoveryError):
    """Discovery produced no library folder at all."""
    pass


class LibraryFoldersFileUnreadable(LibraryDiscoveryError):
    """The library folders file is missing or cannot be read."""
    pass


def library_folders_path(
    install_path: Union[str, Path],
    library_subfolder: str = LIBRARY_SUBFOLDER,
    library_folders_file: str = LIBRARY_FOLDERS_FILE,
) -> Path:
    """Location of the library folders file for an install path."""
    return Path(install_path) / library_subfolder / library_folders_file


def parse_library_paths(
    lines: Iterable[str],
    library_subfolder: str = LIBRARY_SUBFOLDER,
) -> list[Path]:
    """Extract existing library folders from library folders file lines.

    Args:
        lines: Raw lines of the file
        library_subfolder: Folder appended to every ``path`` value

    Returns:
        ``<path>/<library_subfolder>`` for each entry whose folder exists,
        in file order, duplicates included
    """
    roots: list[Path] = []

    for line in lines:
        if PATH_TOKEN not in line.lower():
            continue

        # "path"\t\t"E:\\SteamLibrary" -> path\t\tE:\\SteamLibrary
        sanitized = line.strip().replace('"', "")
        if not sanitized.lower().startswith(PATH_TOKEN):
            continue

        fields = [field for field in sanitized.split("\t") if field]
        if len(fields) < 2:
            continue

        candidate = Path(fields[1]) / library_subfolder
        if not candidate.is_dir():
            continue

        roots.append(candidate)

    return roots


def discover_library_roots(
    install_path: Union[str, Path],
    library_subfolder: str = LIBRARY_SUBFOLDER,
    library_folders_file: str = LIBRARY_FOLDERS_FILE,
) -> list[Path]:
    """Find all library folders of a Steam installation.

    The default library below the install path always comes first and is
    included without checking that it exists. No de-duplication is done.

    Args:
        install_path: Steam install folder
        library_subfolder: Library folder name (``steamapps``)
        library_folders_file: Name of the file listing extra libraries

    Returns:
        List of library folders

    Raises:
        LibraryFoldersFileUnreadable: If the library folders file cannot be read
        NoLibrariesFound: If no library folder was found
    """
    roots = [Path(install_path) / library_subfolder]

    vdf_path = library_folders_path(install_path, library_subfolder, library_folders_file)
    try:
        text = vdf_path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise LibraryFoldersFileUnreadable(f"Could not read {vdf_path}: {e}") from e

    roots.extend(parse_library_paths(split_lines(text), library_subfolder))

    if not roots:
        raise NoLibrariesFound(
            "No game library found. This might appear if Steam has been "
            "installed on this machine but was uninstalled."
        )

    return roots
