"""Export helpers for offline analysis of recorded sessions."""

from emotion_tracker.research.export import export_history_json, load_history_json

__all__ = ["export_history_json", "load_history_json"]
