"""Twitch relay backend - keeps Twitch credentials off the frontend"""

__version__ = "1.0.0"
