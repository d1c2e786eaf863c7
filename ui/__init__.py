"""
User interface modules.

This package contains user interface components:
- Command-line interface (CLI) with processing, diff, statistics and
  settings commands
"""

from .cli import CLIHandler

__all__ = [
    'CLIHandler',
]
