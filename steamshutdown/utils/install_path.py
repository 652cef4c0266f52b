"""Locate the Steam install folder.

On Windows the folder is read from the ``InstallPath`` registry value.
Other platforms have no registry entry, so the usual install locations
below the home directory are probed instead.
"""

import platform
import sys
from pathlib import Path
from typing import Optional

try:
    import winreg  # type: ignore
except ImportError:
    winreg = None  # type: ignore

from .constants import STEAM_HOME_CANDIDATES, STEAM_REGISTRY_VALUE


class SteamNotInstalled(Exception):
    """Raised when no Steam installation can be found."""
    pass


def get_steam_registry_path() -> str:
    """Registry key (below HKLM) holding Steam's install path."""
    start = "SOFTWARE\\"
    if platform.machine().endswith("64"):
        start += "Wow6432Node\\"
    return start + "Valve\\Steam"


def read_registry_install_path() -> Optional[str]:
    """Read the install path from the registry, None if unavailable."""
    if sys.platform != "win32" or not winreg:
        return None

    try:
        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, get_steam_registry_path()) as key:
            value, _ = winreg.QueryValueEx(key, STEAM_REGISTRY_VALUE)
    except OSError:
        return None

    return value if isinstance(value, str) and value else None


def probe_home_install_path(home: Optional[Path] = None) -> Optional[Path]:
    """First conventional Steam folder below ``home`` that exists."""
    home = home or Path.home()
    for candidate in STEAM_HOME_CANDIDATES:
        path = home / candidate
        if path.is_dir():
            return path
    return None


def get_install_path(override: Optional[Path] = None) -> Path:
    """Resolve the Steam install folder.

    Args:
        override: Path from settings or the command line; skips the lookup

    Returns:
        The install folder

    Raises:
        SteamNotInstalled: If no install folder is found, or the registry
            points to a folder that does not exist (typically after Steam
            was moved without being restarted)
    """
    if override is not None:
        if not Path(override).is_dir():
            raise SteamNotInstalled(f"Configured install path does not exist: {override}")
        return Path(override)

    registry_value = read_registry_install_path()
    if registry_value is not None:
        path = Path(registry_value)
        if not path.is_dir():
            raise SteamNotInstalled(
                f"Registry value {get_steam_registry_path()}\\{STEAM_REGISTRY_VALUE} "
                f"points to a missing folder: {path}. Restart Steam to refresh it, "
                f"or pass --install-path."
            )
        return path

    path = probe_home_install_path()
    if path is None:
        raise SteamNotInstalled("Steam is not installed.")
    return path
