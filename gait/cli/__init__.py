"""Command Line Interface"""

from gait.cli.main import main

__all__ = ["main"]
