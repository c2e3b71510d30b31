"""Translation loaders package.

Each loader implements the Loader interface and fetches translation
documents from a specific kind of source.
"""

__all__ = ["interface", "loader", "file", "http"]
