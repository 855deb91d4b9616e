"""Pappascan IO — image files in and out."""

from pappascan.io.images import read_frame, write_image

__all__ = ["read_frame", "write_image"]
