"""Temporary directory lifetime management."""

from .guard import CleanupGuard, delete_tree

__all__ = ["CleanupGuard", "delete_tree"]
