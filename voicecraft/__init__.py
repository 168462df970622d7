"""VoiceCraft narration front end."""

__version__ = "0.1.0"
