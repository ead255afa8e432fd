"""Shared Pydantic models and static reference data used across the tracker."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# ── Enums ─────────────────────────────────────────────────────

class EmotionLabel(str, Enum):
    """Discrete emotional states the classifier can emit."""
    CALM = "calm"
    HAPPY = "happy"
    STRESSED = "stressed"
    FOCUSED = "focused"
    NEUTRAL = "neutral"


# Arg-max ties (classifier scores, distribution counts) resolve to the
# earliest label in this sequence.
LABEL_PRIORITY: tuple[EmotionLabel, ...] = (
    EmotionLabel.CALM,
    EmotionLabel.HAPPY,
    EmotionLabel.STRESSED,
    EmotionLabel.FOCUSED,
    EmotionLabel.NEUTRAL,
)


# ── Static reference data ─────────────────────────────────────

class ChannelSpec(BaseModel):
    """Physiological bounds and random-walk parameters of one sensor channel."""
    model_config = ConfigDict(frozen=True)

    name: str
    unit: str
    baseline: float
    delta: float  # Full width of the per-step perturbation window
    lower: float
    upper: float
    precision: int

    def clamp(self, value: float) -> float:
        return max(self.lower, min(self.upper, value))


HEART_RATE = ChannelSpec(
    name="heart_rate", unit="bpm", baseline=72.0, delta=8.0, lower=50.0, upper=120.0, precision=1,
)
EDA = ChannelSpec(
    name="eda", unit="µS", baseline=6.0, delta=2.0, lower=2.0, upper=15.0, precision=2,
)
TEMPERATURE = ChannelSpec(
    name="temperature", unit="°C", baseline=36.8, delta=0.4, lower=35.5, upper=38.5, precision=1,
)

CHANNELS: tuple[ChannelSpec, ...] = (HEART_RATE, EDA, TEMPERATURE)


class EmotionMetadata(BaseModel):
    """Display information for an :class:`EmotionLabel`."""
    model_config = ConfigDict(frozen=True)

    label: EmotionLabel
    display_name: str
    color: str
    description: str


EMOTION_METADATA: dict[EmotionLabel, EmotionMetadata] = {
    EmotionLabel.CALM: EmotionMetadata(
        label=EmotionLabel.CALM,
        display_name="Calm",
        color="#10B981",
        description="Relaxed and peaceful state",
    ),
    EmotionLabel.HAPPY: EmotionMetadata(
        label=EmotionLabel.HAPPY,
        display_name="Happy",
        color="#F59E0B",
        description="Positive and joyful state",
    ),
    EmotionLabel.STRESSED: EmotionMetadata(
        label=EmotionLabel.STRESSED,
        display_name="Stressed",
        color="#EF4444",
        description="High tension and anxiety",
    ),
    EmotionLabel.FOCUSED: EmotionMetadata(
        label=EmotionLabel.FOCUSED,
        display_name="Focused",
        color="#3B82F6",
        description="Concentrated and alert",
    ),
    EmotionLabel.NEUTRAL: EmotionMetadata(
        label=EmotionLabel.NEUTRAL,
        display_name="Neutral",
        color="#6B7280",
        description="Balanced emotional state",
    ),
}


# ── Data transfer objects ─────────────────────────────────────

class RawTriple(BaseModel):
    """One unclassified reading of the three simulated channels."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    heart_rate: float = Field(alias="heartRate", ge=HEART_RATE.lower, le=HEART_RATE.upper)
    eda: float = Field(ge=EDA.lower, le=EDA.upper)
    temperature: float = Field(ge=TEMPERATURE.lower, le=TEMPERATURE.upper)


class Classification(BaseModel):
    """Label and presentation confidence produced by the classifier."""
    model_config = ConfigDict(frozen=True)

    emotion: EmotionLabel
    confidence: float = Field(ge=0, le=100)


class Sample(RawTriple):
    """A classified sensor sample as retained in the session history.

    Serialised with the field names ``timestamp``, ``heartRate``, ``eda``,
    ``temperature``, ``emotion`` and ``confidence``.
    """

    timestamp: datetime
    emotion: EmotionLabel
    confidence: float = Field(ge=0, le=100)

    @classmethod
    def from_classification(
        cls, timestamp: datetime, raw: RawTriple, result: Classification,
    ) -> Sample:
        return cls(
            timestamp=timestamp,
            heart_rate=raw.heart_rate,
            eda=raw.eda,
            temperature=raw.temperature,
            emotion=result.emotion,
            confidence=result.confidence,
        )


class ChannelAverages(BaseModel):
    """Arithmetic mean of each channel over the retained history."""
    model_config = ConfigDict(frozen=True)

    heart_rate: float
    eda: float
    temperature: float


class SessionSummary(BaseModel):
    """Derived read-only statistics of a session.

    ``averages``, ``dominant`` and ``average_confidence`` are ``None`` when
    the history is empty.
    """
    model_config = ConfigDict(frozen=True)

    sample_count: int
    averages: ChannelAverages | None = None
    distribution: dict[EmotionLabel, int]
    dominant: EmotionLabel | None = None
    average_confidence: float | None = None
    duration_minutes: int = 0
    stress_episodes: int = 0


class DeviceStatus(BaseModel):
    """Simulated wearable state shown next to the live readings."""
    battery_level: float = Field(85.0, ge=0, le=100)
    connected: bool = True
