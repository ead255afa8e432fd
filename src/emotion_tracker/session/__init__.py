"""In-memory session history and summary statistics."""

from emotion_tracker.session.aggregator import SessionAggregator, dominant_label

__all__ = ["SessionAggregator", "dominant_label"]
