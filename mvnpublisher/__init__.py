"""mvn-publisher package entry point."""
from __future__ import annotations

from .src.cli import main

__all__ = ["main"]
