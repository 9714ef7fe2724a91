"""railmap: railway station map with search and category filtering."""

__version__ = "0.1.0"
