"""newsdesk - AI news digest feed and schedule control."""

__version__ = "0.1.0"
