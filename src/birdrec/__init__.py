"""birdrec: record a clip, get a bird."""

__version__ = "0.1.0"
