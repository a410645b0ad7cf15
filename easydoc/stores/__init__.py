"""Persistent stores."""

from .tag_registry import TagRegistry

__all__ = ["TagRegistry"]
