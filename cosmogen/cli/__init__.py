"""Command-line interface for cosmogen."""

from .app import app

__all__ = ["app"]
