"""Repository interfaces for Get It Done.

This package contains the abstract base class that defines the contract
for persisting the task list. This is the "Port" in the Hexagonal
Architecture.

Implementations (Adapters) are in ``getitdone.adapters``.
"""

from .repository import KeyValueStore

__all__ = ["KeyValueStore"]
