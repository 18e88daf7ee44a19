"""Build type, version and upload lifecycle resolution for multi-stage builds."""

__version__ = "0.1.0"
