"""Emotion classifier: fixed linear scoring over normalised physiology.

The three raw signals are centred and scaled against a fixed resting
profile, then scored against one weight vector per label:

=========  =======  =======  =======
Label      hrN      edaN     tempN
=========  =======  =======  =======
calm       -0.5     -0.3     +0.2
happy      +0.3     -0.2     +0.4
stressed   +0.8     +0.6     -0.1
focused    +0.4     +0.1     +0.1
neutral    -|hrN| - |edaN| - |tempN|
=========  =======  =======  =======

The highest score wins; equal scores resolve through
:data:`~emotion_tracker.models.LABEL_PRIORITY`.  The weights are a
hand-tuned heuristic, not a trained model.

Confidence is a presentation value drawn from ``94 + uniform(0, 6)``.  It
does not depend on the score margin and must not be read as a calibrated
probability.
"""

from __future__ import annotations

import math
import random

import structlog

from emotion_tracker.models import (
    EDA,
    HEART_RATE,
    LABEL_PRIORITY,
    TEMPERATURE,
    Classification,
    EmotionLabel,
    RawTriple,
)
from emotion_tracker.sensors.simulator import UniformSource

logger = structlog.get_logger(__name__)

# ── Normalisation (centre, spread) ────────────────────────────

_HR_NORM = (70.0, 50.0)
_EDA_NORM = (5.0, 10.0)
_TEMP_NORM = (36.5, 2.0)

# ── Linear weights (hrN, edaN, tempN) ─────────────────────────

_WEIGHTS: dict[EmotionLabel, tuple[float, float, float]] = {
    EmotionLabel.CALM: (-0.5, -0.3, 0.2),
    EmotionLabel.HAPPY: (0.3, -0.2, 0.4),
    EmotionLabel.STRESSED: (0.8, 0.6, -0.1),
    EmotionLabel.FOCUSED: (0.4, 0.1, 0.1),
}

_CONFIDENCE_FLOOR = 94.0
_CONFIDENCE_SPAN = 6.0


class InputDomainError(ValueError):
    """Raised when a classifier input is NaN or infinite."""


def normalise(heart_rate: float, eda: float, temperature: float) -> tuple[float, float, float]:
    """Centre and scale the raw signals against the resting profile."""
    return (
        (heart_rate - _HR_NORM[0]) / _HR_NORM[1],
        (eda - _EDA_NORM[0]) / _EDA_NORM[1],
        (temperature - _TEMP_NORM[0]) / _TEMP_NORM[1],
    )


def select_label(scores: dict[EmotionLabel, float]) -> EmotionLabel:
    """Arg-max over ``scores``; the earliest label in priority order wins ties."""
    best: EmotionLabel | None = None
    for label in LABEL_PRIORITY:
        if label not in scores:
            continue
        if best is None or scores[label] > scores[best]:
            best = label
    if best is None:
        raise ValueError("No scores to select from.")
    return best


class EmotionClassifier:
    """Map a (heart rate, EDA, temperature) triple to an emotion label.

    Inputs outside a channel's physiological range are clamped to it before
    scoring; non-finite inputs raise :class:`InputDomainError`.  The label is
    a pure function of the inputs.  ``rng`` (or ``seed``) only drives the
    confidence value.
    """

    def __init__(self, rng: UniformSource | None = None, seed: int | None = None) -> None:
        self._rng: UniformSource = rng if rng is not None else random.Random(seed)

    # ── Scoring ───────────────────────────────────────────────

    def scores(self, heart_rate: float, eda: float, temperature: float) -> dict[EmotionLabel, float]:
        """Return the linear score of every label for the given signals."""
        hr, eda, temp = self._prepare(heart_rate, eda, temperature)
        hr_n, eda_n, temp_n = normalise(hr, eda, temp)

        result = {
            label: w_hr * hr_n + w_eda * eda_n + w_temp * temp_n
            for label, (w_hr, w_eda, w_temp) in _WEIGHTS.items()
        }
        result[EmotionLabel.NEUTRAL] = -abs(hr_n) - abs(eda_n) - abs(temp_n)
        return result

    def classify(self, heart_rate: float, eda: float, temperature: float) -> Classification:
        emotion = select_label(self.scores(heart_rate, eda, temperature))
        return Classification(emotion=emotion, confidence=self._confidence())

    def classify_raw(self, raw: RawTriple) -> Classification:
        return self.classify(raw.heart_rate, raw.eda, raw.temperature)

    # ── Internals ─────────────────────────────────────────────

    @staticmethod
    def _prepare(heart_rate: float, eda: float, temperature: float) -> tuple[float, float, float]:
        values = (heart_rate, eda, temperature)
        channels = (HEART_RATE, EDA, TEMPERATURE)
        prepared: list[float] = []
        for channel, value in zip(channels, values):
            value = float(value)
            if not math.isfinite(value):
                raise InputDomainError(f"{channel.name} must be finite, got {value!r}.")
            clamped = channel.clamp(value)
            if clamped != value:
                logger.debug(
                    "classifier.input_clamped",
                    channel=channel.name,
                    value=value,
                    clamped=clamped,
                )
            prepared.append(clamped)
        return prepared[0], prepared[1], prepared[2]

    def _confidence(self) -> float:
        value = min(_CONFIDENCE_FLOOR + self._rng.uniform(0.0, _CONFIDENCE_SPAN), 100.0)
        return round(value, 1)
