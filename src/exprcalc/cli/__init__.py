"""
exprcalc CLI package.

- main.py: the typer app, global options, and commands
- utils.py: version display and logging setup
"""

from exprcalc.cli.main import app, main

__all__ = ["app", "main"]
