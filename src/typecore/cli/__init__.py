"""Command line interface for inspecting and managing the local snapshot."""

from typecore.cli.main import app

__all__ = ["app"]
