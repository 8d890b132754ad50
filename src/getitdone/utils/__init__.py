"""Utility helpers for Get It Done."""
