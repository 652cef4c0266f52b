import json

import pytest

from steamshutdown.main import main
from steamshutdown.output.state import load_state


def run_main(capsys, argv):
    main(argv)
    return json.loads(capsys.readouterr().out)


def test_scan(capsys, steam_install, write_manifest):
    library = steam_install / "steamapps"
    write_manifest(library, 570, "Dota 2")
    write_manifest(library, 440, "Team Fortress 2", state=1026)
    (library / "appmanifest_1.acf").write_text("garbage\n")

    results = run_main(capsys, ["--install-path", str(steam_install)])
    assert results["status"] == "success"
    assert results["install_path"] == str(steam_install)
    assert [app["name"] for app in results["apps"]] == ["Dota 2", "Team Fortress 2"]
    assert [app["id"] for app in results["downloading"]] == [440]
    assert len(results["warnings"]) == 1


def test_state_file(capsys, tmp_path, steam_install, write_manifest):
    write_manifest(steam_install / "steamapps", 570, "Dota 2")
    state_file = tmp_path / "state.yaml"

    results = run_main(capsys, ["--install-path", str(steam_install), "--state-file", str(state_file)])
    assert results["state_file"] == str(state_file)
    assert load_state(state_file)["apps"][0]["id"] == 570


def test_watch_with_config(capsys, tmp_path, steam_install):
    config = tmp_path / "settings.yaml"
    config.write_text(f"install_path: {steam_install}\npoll_interval_seconds: 0.01\n")

    results = run_main(capsys, ["--config", str(config), "--watch", "--max-polls", "1"])
    assert results["status"] == "success"
    assert results["apps"] == []


def test_missing_install_path_is_fatal(capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--install-path", str(tmp_path / "nowhere")])
    assert excinfo.value.code == 1
    results = json.loads(capsys.readouterr().out)
    assert results["status"] == "error"
    assert results["exception_type"] == "SteamNotInstalled"


def test_missing_library_folders_file_is_fatal(capsys, tmp_path):
    install = tmp_path / "Steam"
    (install / "steamapps").mkdir(parents=True)
    with pytest.raises(SystemExit):
        main(["--install-path", str(install)])
    results = json.loads(capsys.readouterr().out)
    assert results["exception_type"] == "LibraryFoldersFileUnreadable"
