"""Retro Runner: an endless runner with a jumping kangaroo (or koala)."""

__version__ = "0.1.0"
