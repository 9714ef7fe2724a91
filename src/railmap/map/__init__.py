"""Map rendering helpers."""
