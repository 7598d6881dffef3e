"""Steeplechase - side-scrolling horse jumping simulation."""

__version__ = "0.1.0"
