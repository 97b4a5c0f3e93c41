"""
CLI module for famtree.

The command-line interface providing the generate command.
"""

from cli.main import app

__all__ = ["app"]
