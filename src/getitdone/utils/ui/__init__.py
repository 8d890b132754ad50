"""Rich console rendering helpers."""
