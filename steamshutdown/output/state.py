"""State file generation for the installed app collection.

Generates state.yaml, a machine-readable snapshot of one rebuild:
    - Capture header (tool version, timestamp, install path)
    - Library folders that were scanned
    - Count summary (total, downloading, fully installed)
    - Every app with its id, name and raw StateFlags
    - Files that were skipped, with the reason

Two snapshots can be compared to see which apps appeared, disappeared
or changed state between captures.
"""

import yaml
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .. import __version__
from ..scanners.manifests import AppCollection


# SteamShutdown version
STEAMSHUTDOWN_VERSION = __version__


def build_summary_section(collection: AppCollection) -> dict[str, int]:
    """Count summary for state.yaml."""
    return {
        "total_apps": len(collection),
        "downloading": len(collection.downloading()),
        "fully_installed": sum(1 for app in collection if app.is_fully_installed),
        "skipped_files": len(collection.warnings),
    }


def build_apps_section(collection: AppCollection) -> list[dict[str, Any]]:
    """One entry per app, in collection order."""
    return [
        {
            "id": app.id,
            "name": app.name,
            "state": app.state,
            "downloading": app.is_downloading,
        }
        for app in collection
    ]


def build_state(
    collection: AppCollection,
    install_path: Optional[Path] = None,
) -> dict[str, Any]:
    """Build the state dictionary without writing it."""
    return {
        "steamshutdown": {
            "version": STEAMSHUTDOWN_VERSION,
            "capture_timestamp": datetime.now().isoformat(),
            "install_path": str(install_path) if install_path else None,
        },
        "libraries": [str(root) for root in collection.roots],
        "summary": build_summary_section(collection),
        "apps": build_apps_section(collection),
        "skipped": [dict(w) for w in collection.warnings],
    }


def generate_state(
    state_path: Path,
    collection: AppCollection,
    install_path: Optional[Path] = None,
) -> dict[str, Any]:
    """Generate the state.yaml file.

    Args:
        state_path: Where to write the file (parent folders are created)
        collection: Collection to record
        install_path: Steam install folder, recorded in the header

    Returns:
        The complete state dictionary (also written to file)
    """
    state = build_state(collection, install_path)

    state_path = Path(state_path)
    state_path.parent.mkdir(parents=True, exist_ok=True)
    with open(state_path, "w") as f:
        yaml.dump(state, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return state


def load_state(state_path: Path) -> dict[str, Any]:
    """Load a state.yaml file.

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If file is invalid YAML
    """
    with open(state_path) as f:
        return yaml.safe_load(f)


def compare_states(
    state1: dict[str, Any],
    state2: dict[str, Any]
) -> dict[str, Any]:
    """Compare two state files to find differences.

    Args:
        state1: First state (typically older)
        state2: Second state (typically newer)

    Returns:
        Dictionary with added/removed app ids and state changes
    """
    apps1 = {app["id"]: app for app in state1.get("apps", []) or []}
    apps2 = {app["id"]: app for app in state2.get("apps", []) or []}

    changed = []
    for app_id in sorted(apps1.keys() & apps2.keys()):
        before = apps1[app_id].get("state")
        after = apps2[app_id].get("state")
        if before != after:
            changed.append({
                "id": app_id,
                "name": apps2[app_id].get("name"),
                "before": before,
                "after": after,
            })

    return {
        "timestamp1": state1.get("steamshutdown", {}).get("capture_timestamp"),
        "timestamp2": state2.get("steamshutdown", {}).get("capture_timestamp"),
        "added": sorted(apps2.keys() - apps1.keys()),
        "removed": sorted(apps1.keys() - apps2.keys()),
        "state_changed": changed,
    }
