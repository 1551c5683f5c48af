"""Command-line interface for resolving Doxygen XML output folders."""

from .main import main

__all__ = ["main"]
