"""
exprcalc - interactive unsigned integer calculator.

Reads arithmetic expressions one line at a time and prints their value.
"""

from exprcalc._version import get_version
from exprcalc.core.calculator import calculate

__version__ = get_version()

__all__ = ["__version__", "calculate"]
