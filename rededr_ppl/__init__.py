"""Process observation cache, trace event filtering, control commands and JSON handling for an EDR telemetry service."""

__version__ = "0.2.0"
__all__ = ["jsontoken", "jsonformat", "jsonvalue", "objcache", "events", "control"]