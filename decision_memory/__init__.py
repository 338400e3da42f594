"""Decision Memory: client-side entity cache, sync layer and analytics for decision logs."""

__version__ = "0.1.0"
