"""Cross-reference several versions of the same patch series."""

__version__ = "0.1.0"
