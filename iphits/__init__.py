"""Per-address hit counts from a time-filtered access log."""

__version__ = "0.1.0"
