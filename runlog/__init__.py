"""runlog: workout screenshot logging CLI."""

__version__ = "0.1.0"
