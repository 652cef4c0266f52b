"""Utility modules shared by the scanners and the command line.

Modules:
    constants: Steam layout names and default values
    config: YAML settings loading
    install_path: Steam install folder lookup (registry or home folder)
"""

from .config import (
    Settings,
    load_settings,
    settings_from_dict,
)

from .install_path import (
    SteamNotInstalled,
    get_install_path,
    get_steam_registry_path,
    probe_home_install_path,
    read_registry_install_path,
)

__all__ = [
    # config
    'Settings',
    'load_settings',
    'settings_from_dict',
    # install_path
    'SteamNotInstalled',
    'get_install_path',
    'get_steam_registry_path',
    'probe_home_install_path',
    'read_registry_install_path',
]
