"""Affect classification: discrete emotion labels from wearable physiology.

The classifier scores heart rate, electrodermal activity and skin
temperature against fixed per-label weight vectors (see
:mod:`emotion_tracker.affect.classifier`).  Labels are deterministic for a
given input; the attached confidence is a presentation value only.
"""

from emotion_tracker.affect.classifier import (
    EmotionClassifier,
    InputDomainError,
    normalise,
    select_label,
)

__all__ = [
    "EmotionClassifier",
    "InputDomainError",
    "normalise",
    "select_label",
]
