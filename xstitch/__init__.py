"""Cross-stitch pattern generation service."""

__version__ = "0.1.0"
