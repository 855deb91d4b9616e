"""Pappascan CLI — command-line interface."""
