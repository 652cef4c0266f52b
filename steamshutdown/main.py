#!/usr/bin/env python3
"""SteamShutdown main entry point.

Usage:
    steamshutdown [--config settings.yaml] [--install-path PATH]
                  [--state-file state.yaml] [--watch [--max-polls N]]

This script:
    1. Loads settings (shipped defaults, then --config, then flags)
    2. Locates the Steam install folder
    3. Discovers all library folders
    4. Reads every app manifest into the sorted app collection
    5. Optionally writes state.yaml
    6. Optionally keeps polling and rebuilds on every manifest change
    7. Outputs the results as JSON on stdout

Progress goes to stderr so stdout stays valid JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .output.state import generate_state
from .scanners.library_folders import LibraryDiscoveryError
from .scanners.manifests import AppCollection
from .scanners.watcher import ManifestMonitor
from .utils.config import Settings, load_settings
from .utils.install_path import SteamNotInstalled, get_install_path


def _progress(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


def _error(message: str, **extra: Any) -> dict[str, Any]:
    return {"status": "error", "error": message, **extra}


def collection_results(collection: AppCollection) -> dict[str, Any]:
    """Results block describing one collection."""
    return {
        "libraries": [str(root) for root in collection.roots],
        "apps": [app.to_dict() for app in collection],
        "count": len(collection),
        "downloading": [app.to_dict() for app in collection.downloading()],
        "warnings": list(collection.warnings),
    }


def write_state(settings: Settings, collection: AppCollection, install_path: Path,
                results: dict[str, Any]) -> None:
    if settings.state_file is None:
        return
    try:
        generate_state(settings.state_file, collection, install_path)
        results["state_file"] = str(settings.state_file)
    except OSError as e:
        results["errors"].append(f"State generation failed: {e}")


def run(settings: Settings, watch: bool = False, max_polls: Optional[int] = None) -> dict[str, Any]:
    """Run discovery and the manifest scan.

    Args:
        settings: Resolved settings
        watch: Keep polling for changes after the first scan
        max_polls: Stop watching after this many polls (None: until interrupted)

    Returns:
        Results dictionary (``status`` is ``error`` on a fatal failure)
    """
    _progress("Locating Steam installation...")
    try:
        install_path = get_install_path(settings.install_path)
    except SteamNotInstalled as e:
        return _error(str(e), exception_type=type(e).__name__)

    _progress("Discovering library folders...")
    monitor = ManifestMonitor(
        install_path,
        library_subfolder=settings.library_subfolder,
        library_folders_file=settings.library_folders_file,
        manifest_pattern=settings.manifest_pattern,
    )
    try:
        monitor.discover()
    except LibraryDiscoveryError as e:
        return _error(str(e), exception_type=type(e).__name__)

    _progress("Reading app manifests...")
    collection = monitor.rebuild()

    results: dict[str, Any] = {
        "status": "success",
        "install_path": str(install_path),
        "errors": [],
    }
    results.update(collection_results(collection))
    write_state(settings, collection, install_path, results)

    if watch:
        _progress(f"Watching {len(monitor.roots)} library folder(s)... (Ctrl+C to stop)")

        def on_rebuild(new: AppCollection) -> None:
            _progress(f"Rebuilt: {len(new)} apps, {len(new.downloading())} downloading")
            results.update(collection_results(new))
            write_state(settings, new, install_path, results)

        try:
            monitor.run(settings.poll_interval_seconds, on_rebuild=on_rebuild, max_polls=max_polls)
        except KeyboardInterrupt:
            _progress("Stopped watching.")
        except LibraryDiscoveryError as e:
            return _error(str(e), exception_type=type(e).__name__)

    if results["errors"]:
        results["status"] = "partial"

    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="steamshutdown",
        description="List installed Steam apps and their download state.",
    )
    parser.add_argument("--config", type=Path, help="Settings YAML file")
    parser.add_argument("--install-path", type=Path, help="Steam install folder")
    parser.add_argument("--state-file", type=Path, help="Write a state.yaml snapshot here")
    parser.add_argument("--watch", action="store_true", help="Keep rebuilding on manifest changes")
    parser.add_argument("--max-polls", type=int, help="Stop watching after N polls")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for SteamShutdown."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config).with_overrides(
        install_path=args.install_path,
        state_file=args.state_file,
    )

    results = run(settings, watch=args.watch, max_polls=args.max_polls)
    print(json.dumps(results, indent=2, default=str))

    if results["status"] == "error":
        sys.exit(1)


if __name__ == "__main__":
    main()
