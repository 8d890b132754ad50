"""Command line commands for Get It Done."""
