"""canvasd: configuration and embedded store bootstrap for the canvas service."""

__version__ = "0.1.0"
