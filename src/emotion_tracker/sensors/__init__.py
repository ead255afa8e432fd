"""Simulated wearable sensors."""

from emotion_tracker.sensors.simulator import SignalSimulator, UniformSource

__all__ = ["SignalSimulator", "UniformSource"]
