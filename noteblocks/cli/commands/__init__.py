"""Command modules for the noteblocks CLI."""

from noteblocks.cli.commands import attach, classify, render, segments, upgrade

__all__ = ["attach", "classify", "render", "segments", "upgrade"]
