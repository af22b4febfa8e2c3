"""Simple Talk client: backend calls, audio playback and result rendering."""
