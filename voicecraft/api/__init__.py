"""HTTP surface for the VoiceCraft front end."""
