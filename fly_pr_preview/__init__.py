"""Ephemeral Fly.io preview apps for pull requests."""

__version__ = "0.1.0"
