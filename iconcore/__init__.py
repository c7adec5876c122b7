"""Icon pack discovery and icon resolution for launcher front ends."""

__version__ = "0.1.0"
