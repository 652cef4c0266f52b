from pathlib import Path

import pytest


DOTA_MANIFEST = (
    '"AppState"\n'
    '{\n'
    '\t"appid"\t\t"570"\n'
    '\t"name"\t\t"Dota 2"\n'
    '\t"StateFlags"\t\t"4"\n'
    '}\n'
)

NESTED_MANIFEST = (
    '"AppState"\n'
    '{\n'
    '\t"appid"\t\t"440"\n'
    '\t"Universe"\t\t"1"\n'
    '\t"name"\t\t"Team Fortress 2"\n'
    '\t"StateFlags"\t\t"1026"\n'
    '\t"installdir"\t\t"Team Fortress 2"\n'
    '\t"InstalledDepots"\n'
    '\t{\n'
    '\t\t"441"\n'
    '\t\t{\n'
    '\t\t\t"manifest"\t\t"7707612755649923713"\n'
    '\t\t\t"size"\t\t"1234"\n'
    '\t\t}\n'
    '\t}\n'
    '\t"UserConfig"\n'
    '\t{\n'
    '\t\t"language"\t\t"english"\n'
    '\t}\n'
    '\t"MountedConfig"\n'
    '\t{\n'
    '\t}\n'
    '\t"LastOwner"\t\t"76561197960287930"\n'
    '}\n'
)


def manifest_text(appid: int, name: str, state: int = 4) -> str:
    return (
        '"AppState"\n'
        '{\n'
        f'\t"appid"\t\t"{appid}"\n'
        f'\t"name"\t\t"{name}"\n'
        f'\t"StateFlags"\t\t"{state}"\n'
        '}\n'
    )


def library_folders_text(*paths: Path) -> str:
    lines = ['"libraryfolders"', '{', '\t"contentstatsid"\t\t"-4321"']
    for index, path in enumerate(paths):
        lines += [
            f'\t"{index}"',
            '\t{',
            f'\t\t"path"\t\t"{path}"',
            '\t\t"label"\t\t""',
            '\t}',
        ]
    lines.append('}')
    return "\n".join(lines) + "\n"


@pytest.fixture
def steam_install(tmp_path: Path) -> Path:
    """A Steam install folder with an empty default library."""
    install = tmp_path / "Steam"
    library = install / "steamapps"
    library.mkdir(parents=True)
    (library / "libraryfolders.vdf").write_text(library_folders_text(install))
    return install


@pytest.fixture
def write_manifest():
    def _write(library: Path, appid: int, name: str, state: int = 4) -> Path:
        path = library / f"appmanifest_{appid}.acf"
        path.write_text(manifest_text(appid, name, state))
        return path
    return _write
