"""Letter Drop: a falling-letters word game."""

__version__ = "0.1.0"
