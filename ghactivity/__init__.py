"""Summarise GitHub activity and export pull request and issue data as JSON."""

__version__ = "0.1.0"