"""Random-walk simulator standing in for the wearable's sensor stream."""

from __future__ import annotations

import random
from typing import Protocol

from emotion_tracker.models import EDA, HEART_RATE, TEMPERATURE, ChannelSpec, RawTriple


class UniformSource(Protocol):
    """Anything exposing ``uniform(a, b)``, e.g. :class:`random.Random` or a test stub."""

    def uniform(self, a: float, b: float) -> float: ...


class SignalSimulator:
    """Produce the next heart-rate / EDA / skin-temperature reading.

    Each channel performs an independent bounded random walk: the previous
    value is perturbed by ``uniform(-delta/2, +delta/2)``, clamped to the
    channel's physiological range and rounded to the channel's precision.
    Without a previous reading the channel baselines are returned unchanged.

    Pass ``rng`` (or ``seed``) to make the walk reproducible.
    """

    def __init__(self, rng: UniformSource | None = None, seed: int | None = None) -> None:
        self._rng: UniformSource = rng if rng is not None else random.Random(seed)

    def next(self, previous: RawTriple | None = None) -> RawTriple:
        if previous is None:
            return RawTriple(
                heart_rate=HEART_RATE.baseline,
                eda=EDA.baseline,
                temperature=TEMPERATURE.baseline,
            )

        return RawTriple(
            heart_rate=self._step(HEART_RATE, previous.heart_rate),
            eda=self._step(EDA, previous.eda),
            temperature=self._step(TEMPERATURE, previous.temperature),
        )

    def walk(self, steps: int, start: RawTriple | None = None) -> list[RawTriple]:
        """Return ``steps`` consecutive readings continuing from ``start``."""
        readings: list[RawTriple] = []
        current = start
        for _ in range(steps):
            current = self.next(current)
            readings.append(current)
        return readings

    # ── Internals ─────────────────────────────────────────────

    def _step(self, channel: ChannelSpec, value: float) -> float:
        half = channel.delta / 2
        stepped = channel.clamp(value + self._rng.uniform(-half, half))
        # Bounds are exact at the channel precision, so rounding stays in range.
        return round(stepped, channel.precision)
