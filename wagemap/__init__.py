"""Prevailing wage map: county-to-wage-area resolution and tier coloring."""

__version__ = "0.1.0"
