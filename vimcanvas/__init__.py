"""Easing, font options, settings, window geometry, cursor and window animation logic for an editor front end."""

__version__ = "0.1.0"