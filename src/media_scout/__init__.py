"""Media Scout - find the images and videos on any web page."""

__version__ = "0.1.0"
