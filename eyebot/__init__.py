"""Puts eyes on things detected in random Commons images."""

__version__ = "0.1.0"
