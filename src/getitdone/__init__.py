"""Get It Done - a personal task list manager."""

__version__ = "0.1.0"
