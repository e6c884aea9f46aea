"""Input parsing and logging helpers."""
