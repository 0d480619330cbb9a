"""Camera-driven jump trigger for game control."""

__version__ = "0.1.0"
