"""Message types, rotation helpers, filter configuration and GPS conversions for dead reckoning."""

__version__ = "0.1.0"