"""Likes / dislikes ratio rankings of visited videos."""

__version__ = "1.0.0"
