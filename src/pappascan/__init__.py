"""Pappascan — bubble detection and crunch metrics for fried discs."""

__version__ = "0.1.0"
