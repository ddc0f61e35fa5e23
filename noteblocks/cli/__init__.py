"""Command line interface for noteblocks."""
