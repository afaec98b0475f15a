"""pickview - pick a path from a filtered tree, view it, optionally remove it."""

__version__ = "0.1.0"
