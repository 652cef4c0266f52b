"""SteamShutdown: find Steam libraries and read installed app manifests."""

__version__ = "1.0.0"
