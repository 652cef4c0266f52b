import pytest

from steamshutdown.vdf.decode import (
    EmptyOrCorruptFile,
    MalformedManifest,
    decode_json,
    decode_manifest,
    is_empty_or_corrupt,
    split_lines,
)

from conftest import DOTA_MANIFEST, NESTED_MANIFEST


def test_decode_flat_manifest():
    assert decode_manifest(DOTA_MANIFEST) == {
        "appid": "570",
        "name": "Dota 2",
        "StateFlags": "4",
    }


def test_decode_keeps_every_scalar_pair():
    tree = decode_manifest(NESTED_MANIFEST)
    assert tree["appid"] == "440"
    assert tree["Universe"] == "1"
    assert tree["LastOwner"] == "76561197960287930"
    assert tree["InstalledDepots"]["441"] == {"manifest": "7707612755649923713", "size": "1234"}
    assert tree["UserConfig"]["language"] == "english"


def test_decode_preserves_key_order():
    tree = decode_manifest(NESTED_MANIFEST)
    assert list(tree)[:4] == ["appid", "Universe", "name", "StateFlags"]


def test_decode_windows_line_endings():
    assert decode_manifest(DOTA_MANIFEST.replace("\n", "\r\n"))["name"] == "Dota 2"


def test_decode_escaped_backslashes():
    text = (
        '"AppState"\n{\n'
        '\t"LauncherPath"\t\t"C:\\\\Program Files (x86)\\\\Steam\\\\steam.exe"\n'
        '}\n'
    )
    assert decode_manifest(text)["LauncherPath"] == "C:\\Program Files (x86)\\Steam\\steam.exe"


def test_empty_text_is_corrupt():
    with pytest.raises(EmptyOrCorruptFile):
        decode_manifest("")


def test_nul_bytes_are_corrupt():
    with pytest.raises(EmptyOrCorruptFile):
        decode_manifest("\0" * 512)


def test_is_empty_or_corrupt():
    assert is_empty_or_corrupt("")
    assert is_empty_or_corrupt("\0\0\n")
    assert is_empty_or_corrupt("\0\0\r\n")
    assert not is_empty_or_corrupt(DOTA_MANIFEST)
    assert not is_empty_or_corrupt("\n\n   \n\t\n")
    assert not is_empty_or_corrupt("\0\n\0\n")


def test_whitespace_only_text_is_malformed():
    with pytest.raises(MalformedManifest):
        decode_manifest("\n\n   \n\t\n")


def test_truncated_manifest_is_malformed():
    text = '"AppState"\n{\n\t"appid"\t\t"570"\n\t"name"\t\t"Dota 2"\n'
    with pytest.raises(MalformedManifest):
        decode_manifest(text)


def test_only_header_line_is_malformed():
    with pytest.raises(MalformedManifest):
        decode_manifest('"AppState"\n')


def test_non_object_is_malformed():
    with pytest.raises(MalformedManifest):
        decode_json('"just a string"')
    with pytest.raises(MalformedManifest):
        decode_json("[1, 2]")


def test_split_lines():
    assert split_lines("a\r\nb\rc\n") == ["a", "b", "c"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("") == []
