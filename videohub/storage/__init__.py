"""
Storage module for the VideoHub service.

Owns the document database connection lifecycle.
"""

from .manager import StorageManager

__all__ = ["StorageManager"]
