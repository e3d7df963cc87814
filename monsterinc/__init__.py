"""Web probe result models, probe result mapping and HTTP file change monitoring."""

__version__ = "0.1.0"