"""
Entry point for ``python -m projfind.cli``.
"""

from .main import cli

if __name__ == "__main__":
    cli(prog_name="projfind")
