"""SQLite persistence for playlists."""
