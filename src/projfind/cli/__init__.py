"""
Command-line interface of projfind.

One command per picker (files, grep, usages, functions, todos) plus ``rank``
for ranking arbitrary lines from stdin.
"""

from .main import main

__all__ = [
    "main",
]
