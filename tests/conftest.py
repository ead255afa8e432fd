"""Shared pytest fixtures."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from emotion_tracker.config import Settings
from emotion_tracker.models import EmotionLabel, Sample
from emotion_tracker.session.aggregator import SessionAggregator

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


class MidpointSource:
    """Deterministic stand-in for ``random.Random``: always the interval midpoint."""

    def uniform(self, a: float, b: float) -> float:
        return (a + b) / 2


class UpperSource:
    def uniform(self, a: float, b: float) -> float:
        return b


class LowerSource:
    def uniform(self, a: float, b: float) -> float:
        return a


class FakeClock:
    """Manually advanced clock returning timezone-aware datetimes."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_sample(
    index: int,
    emotion: EmotionLabel = EmotionLabel.CALM,
    *,
    heart_rate: float = 72.0,
    eda: float = 6.0,
    temperature: float = 36.8,
    confidence: float = 97.0,
) -> Sample:
    return Sample(
        timestamp=T0 + timedelta(seconds=30 * index),
        heart_rate=heart_rate,
        eda=eda,
        temperature=temperature,
        emotion=emotion,
        confidence=confidence,
    )


@pytest.fixture
def midpoint() -> MidpointSource:
    return MidpointSource()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(random_seed=7, log_level="DEBUG")


@pytest.fixture
def aggregator() -> SessionAggregator:
    return SessionAggregator(capacity=100)
