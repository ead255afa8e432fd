"""Rolling session history with on-demand summary statistics."""

from __future__ import annotations

import threading
from collections import Counter, deque
from statistics import fmean

import structlog

from emotion_tracker.models import (
    LABEL_PRIORITY,
    ChannelAverages,
    EmotionLabel,
    Sample,
    SessionSummary,
)

logger = structlog.get_logger(__name__)


def dominant_label(distribution: dict[EmotionLabel, int]) -> EmotionLabel | None:
    """Return the most frequent label, ties resolved by priority order.

    ``None`` when every count is zero.
    """
    best: EmotionLabel | None = None
    for label in LABEL_PRIORITY:
        count = distribution.get(label, 0)
        if count <= 0:
            continue
        if best is None or count > distribution[best]:
            best = label
    return best


def _channel_averages(history: list[Sample]) -> ChannelAverages | None:
    if not history:
        return None
    return ChannelAverages(
        heart_rate=fmean(s.heart_rate for s in history),
        eda=fmean(s.eda for s in history),
        temperature=fmean(s.temperature for s in history),
    )


class SessionAggregator:
    """Bounded, time-ordered buffer of classified samples.

    Once ``capacity`` samples are held, every append evicts the oldest one.
    All statistics are computed over the full retained history.  Empty
    histories yield ``None`` from :meth:`dominant`, :meth:`averages` and
    :meth:`average_confidence` instead of raising.

    Reads and writes are serialised by a lock, so the buffer may be shared
    with threads outside the event loop that drives the tracker.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._history: deque[Sample] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)

    # ── Mutation ──────────────────────────────────────────────

    def append(self, sample: Sample) -> None:
        """Add ``sample`` at the end, evicting the oldest sample at capacity."""
        with self._lock:
            if len(self._history) == self._capacity:
                evicted = self._history[0]
                logger.debug("session.evicted", timestamp=evicted.timestamp.isoformat())
            self._history.append(sample)

    def extend(self, samples: list[Sample]) -> None:
        for sample in samples:
            self.append(sample)

    def clear(self) -> None:
        with self._lock:
            dropped = len(self._history)
            self._history.clear()
        logger.info("session.cleared", dropped=dropped)

    # ── Queries ───────────────────────────────────────────────

    def snapshot(self) -> list[Sample]:
        """Copy of the full retained history, oldest first."""
        with self._lock:
            return list(self._history)

    def recent_window(self, n: int) -> list[Sample]:
        """Last ``n`` samples in chronological order (``n`` clamped to the history size)."""
        with self._lock:
            n = max(0, min(n, len(self._history)))
            if n == 0:
                return []
            return list(self._history)[-n:]

    def latest(self) -> Sample | None:
        with self._lock:
            return self._history[-1] if self._history else None

    def distribution(self) -> dict[EmotionLabel, int]:
        """Count of every label over the retained history (zero-filled)."""
        with self._lock:
            counts = Counter(s.emotion for s in self._history)
        return {label: counts.get(label, 0) for label in LABEL_PRIORITY}

    def dominant(self) -> EmotionLabel | None:
        return dominant_label(self.distribution())

    def averages(self) -> ChannelAverages | None:
        return _channel_averages(self.snapshot())

    def average_confidence(self) -> float | None:
        history = self.snapshot()
        if not history:
            return None
        return fmean(s.confidence for s in history)

    def summary(self) -> SessionSummary:
        """Derive every summary statistic from one consistent snapshot."""
        history = self.snapshot()
        if not history:
            return SessionSummary(
                sample_count=0,
                distribution={label: 0 for label in LABEL_PRIORITY},
            )

        counts = Counter(s.emotion for s in history)
        distribution = {label: counts.get(label, 0) for label in LABEL_PRIORITY}
        span = history[-1].timestamp - history[0].timestamp

        return SessionSummary(
            sample_count=len(history),
            averages=_channel_averages(history),
            distribution=distribution,
            dominant=dominant_label(distribution),
            average_confidence=fmean(s.confidence for s in history),
            duration_minutes=int(span.total_seconds() // 60),
            stress_episodes=distribution[EmotionLabel.STRESSED],
        )
