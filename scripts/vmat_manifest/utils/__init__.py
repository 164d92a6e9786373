"""
Utility modules for path string handling.
"""

from .paths import PathUtils, SEPARATORS

__all__ = [
    "PathUtils",
    "SEPARATORS",
]
