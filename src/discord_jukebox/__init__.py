"""Per-guild voice playback and playlist bot for Discord."""

__version__ = "0.1.0"
