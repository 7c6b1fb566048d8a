"""Local Windows workstation administration jobs."""

__version__ = "0.1.0"
