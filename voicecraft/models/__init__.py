"""Domain models and view schemas."""
