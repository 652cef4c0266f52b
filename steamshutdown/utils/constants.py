"""Centralized constants for SteamShutdown.

Default values for the settings file and the fixed names of Steam's
on-disk layout. Settings loaded from YAML override the defaults marked
as such in ``utils.config``.
"""

# =============================================================================
# STEAM LAYOUT
# =============================================================================

# Folder below the install path / a library path holding app manifests.
# Windows does not care about case, Linux and macOS installs use lowercase.
LIBRARY_SUBFOLDER = "steamapps"

# File inside the default library folder listing extra library paths
LIBRARY_FOLDERS_FILE = "libraryfolders.vdf"

# Glob matching app manifest files inside a library folder
MANIFEST_PATTERN = "*.acf"

# Registry value holding the install path (below HKLM\SOFTWARE\...\Valve\Steam)
STEAM_REGISTRY_VALUE = "InstallPath"

# Conventional install locations probed when there is no registry
# (paths relative to the user's home directory)
STEAM_HOME_CANDIDATES = (
    ".steam/steam",
    ".local/share/Steam",
    "Library/Application Support/Steam",
)

# =============================================================================
# WATCHING
# =============================================================================

# Seconds between two polls of the library folders
POLL_INTERVAL = 2.0
