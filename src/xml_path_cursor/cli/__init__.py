"""Command-line interface module for XML Path Cursor.

This module provides CLI tools for dumping document structure, enumerating
path matches and scanning for repeated elements in large XML files.
"""

from .main import main

__all__ = ["main"]
