"""Live tracking loop."""

from emotion_tracker.streaming.controller import SampleObserver, TrackingController, TrackingState

__all__ = ["SampleObserver", "TrackingController", "TrackingState"]
