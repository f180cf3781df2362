"""stamp - note filename generator (dated and sequential codes)."""

__version__ = "0.2.0"
