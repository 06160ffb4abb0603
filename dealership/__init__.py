"""Car dealership listing API."""

__version__ = "0.1.0"
