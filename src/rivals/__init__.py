"""Rules engine for the two-player introductory card game."""

__version__ = "1.0.0"
