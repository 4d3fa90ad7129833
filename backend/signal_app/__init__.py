"""Calling layer around the signal engine: settings, storage and trade tracking."""
