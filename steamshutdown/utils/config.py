"""Settings loading.

Settings live in a small YAML document. The default one ships in
``data/settings.yaml``; a user file given on the command line replaces
the values it sets. Missing or unreadable files fall back to built-in
defaults.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .constants import (
    LIBRARY_FOLDERS_FILE,
    LIBRARY_SUBFOLDER,
    MANIFEST_PATTERN,
    POLL_INTERVAL,
)


def _default_settings_path() -> Path:
    """Get the default path to settings.yaml."""
    # Go from utils/ up to the package, then to data/
    return Path(__file__).parent.parent / "data" / "settings.yaml"


@dataclass(frozen=True)
class Settings:
    """Resolved settings.

    ``install_path`` and ``state_file`` are optional; when
    ``install_path`` is None the registry (or conventional locations)
    is consulted.
    """
    install_path: Optional[Path] = None
    library_subfolder: str = LIBRARY_SUBFOLDER
    library_folders_file: str = LIBRARY_FOLDERS_FILE
    manifest_pattern: str = MANIFEST_PATTERN
    poll_interval_seconds: float = POLL_INTERVAL
    state_file: Optional[Path] = None

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def _coerce(name: str, value: Any, default: Any) -> Any:
    """Convert a raw YAML value for field ``name``, or return ``default``."""
    if value is None:
        return default

    if name in ("install_path", "state_file"):
        if isinstance(value, str) and value.strip():
            return Path(value).expanduser()
        return default

    if name == "poll_interval_seconds":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return float(value) if value > 0 else default

    if isinstance(value, str) and value:
        return value
    return default


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def settings_from_dict(data: dict[str, Any], base: Optional[Settings] = None) -> Settings:
    """Build Settings from a mapping, keeping ``base`` values for absent keys.

    Unknown keys are ignored and values of the wrong type keep the base value.
    """
    base = base or Settings()
    changes = {}
    for field in fields(Settings):
        if field.name in data:
            changes[field.name] = _coerce(field.name, data[field.name], getattr(base, field.name))
    return replace(base, **changes)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load the shipped defaults, then the user file on top.

    Args:
        config_path: Optional user settings file

    Returns:
        Resolved Settings
    """
    settings = settings_from_dict(_read_yaml(_default_settings_path()))
    if config_path is not None:
        settings = settings_from_dict(_read_yaml(Path(config_path).expanduser()), settings)
    return settings
