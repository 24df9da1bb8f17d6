"""Test helper utilities for wage map tests."""

from .scripted_lookup import ScriptedLookup

__all__ = ["ScriptedLookup"]
