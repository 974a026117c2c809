"""Command line interface for dbmeta."""

__version__ = "0.1.0"
