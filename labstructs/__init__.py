"""Console programs and library classes for a file-backed hash table, search trees, a cached B-tree and a grid graph."""

__version__ = "0.1.0"