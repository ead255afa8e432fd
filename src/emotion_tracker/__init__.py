"""Simulated wearable emotion tracking: sensors, classification and session statistics."""

__version__ = "0.1.0"
