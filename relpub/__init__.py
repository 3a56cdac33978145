"""Release publisher for platform-keyed installer packages."""

__version__ = "0.1.0"
