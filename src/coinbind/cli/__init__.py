"""CLI package."""

from coinbind.cli.app import app

__all__ = ["app"]
