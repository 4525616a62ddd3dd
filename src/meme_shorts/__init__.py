"""Meme shorts: produce meme videos from Reddit and schedule them on YouTube."""

__version__ = "1.0.0"
