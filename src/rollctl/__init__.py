"""rollctl — business-rules engine for roll inventory."""

__version__ = "0.1.0"
