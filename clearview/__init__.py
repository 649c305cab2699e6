"""ClearView Wipers field-service backend."""

__version__ = "1.0.0"
