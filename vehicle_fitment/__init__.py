"""Vehicle-fitment resolution engine for free-text parts compatibility data."""

__version__ = "1.0.0"
