import pytest

from steamshutdown.scanners.library_folders import (
    LibraryFoldersFileUnreadable,
    discover_library_roots,
    library_folders_path,
    parse_library_paths,
)

from conftest import library_folders_text


def test_default_root_comes_first(steam_install):
    roots = discover_library_roots(steam_install)
    assert roots[0] == steam_install / "steamapps"


def test_explicit_default_entry_is_not_deduplicated(steam_install):
    # the fixture lists the install folder itself as library "0"
    roots = discover_library_roots(steam_install)
    assert roots == [steam_install / "steamapps", steam_install / "steamapps"]


def test_extra_libraries_in_file_order(tmp_path, steam_install):
    lib_a = tmp_path / "LibA"
    lib_b = tmp_path / "LibB"
    (lib_a / "steamapps").mkdir(parents=True)
    (lib_b / "steamapps").mkdir(parents=True)
    library_folders_path(steam_install).write_text(library_folders_text(lib_b, lib_a))

    assert discover_library_roots(steam_install) == [
        steam_install / "steamapps",
        lib_b / "steamapps",
        lib_a / "steamapps",
    ]


def test_missing_library_is_dropped(tmp_path, steam_install):
    library_folders_path(steam_install).write_text(library_folders_text(tmp_path / "Gone"))
    assert discover_library_roots(steam_install) == [steam_install / "steamapps"]


def test_unreadable_library_folders_file_is_fatal(tmp_path):
    install = tmp_path / "Steam"
    (install / "steamapps").mkdir(parents=True)
    with pytest.raises(LibraryFoldersFileUnreadable):
        discover_library_roots(install)


def test_custom_subfolder(tmp_path):
    install = tmp_path / "Steam"
    lib = tmp_path / "Lib"
    (install / "SteamApps").mkdir(parents=True)
    (lib / "SteamApps").mkdir(parents=True)
    (install / "SteamApps" / "libraryfolders.vdf").write_text(library_folders_text(lib))

    roots = discover_library_roots(install, library_subfolder="SteamApps")
    assert roots == [install / "SteamApps", lib / "SteamApps"]


def test_parse_ignores_lines_without_path(tmp_path):
    (tmp_path / "steamapps").mkdir()
    lines = [
        '"LibraryFolders"',
        '{',
        f'\t"1"\t\t"{tmp_path}"',
        '}',
    ]
    assert parse_library_paths(lines) == []


def test_parse_filters_keys_not_starting_with_path(tmp_path):
    (tmp_path / "steamapps").mkdir()
    lines = [f'\t\t"contentpath"\t\t"{tmp_path}"']
    assert parse_library_paths(lines) == []


def test_parse_requires_two_fields(tmp_path):
    assert parse_library_paths(['\t\t"path"', '\t\t"path"\t\t""']) == []


def test_parse_is_case_insensitive(tmp_path):
    (tmp_path / "steamapps").mkdir()
    assert parse_library_paths([f'\t\t"Path"\t\t"{tmp_path}"']) == [tmp_path / "steamapps"]


def test_parse_heuristic_accepts_keys_starting_with_path(tmp_path):
    (tmp_path / "steamapps").mkdir()
    assert parse_library_paths([f'\t"pathological"\t\t"{tmp_path}"']) == [tmp_path / "steamapps"]
