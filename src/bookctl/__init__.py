"""bookctl — build typeset books whose text embeds live repository excerpts."""

__version__ = "0.1.0"
