"""Bacon ipsum generation service for the editor block."""

__version__ = "1.0.0"
