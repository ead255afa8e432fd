"""Tracking controller: periodic simulate → classify → record → publish loop.

Architecture
~~~~~~~~~~~~
One ``TrackingController`` exists per session.  It owns the simulated
device state (last sample cursor, battery, connection flag) and a
:class:`SessionAggregator`.  While tracking, a background asyncio task calls
:meth:`TrackingController.tick` every ``tick_interval_seconds``:

1. Draw the next raw reading from the :class:`SignalSimulator`.
2. Classify it with the :class:`EmotionClassifier`.
3. Append the resulting :class:`Sample` to the session history.
4. Notify every registered observer.

On construction the history is pre-filled with synthetic samples spaced
``bootstrap_spacing_seconds`` apart so consumers have something to show
before live tracking starts.

Integration::

    controller = TrackingController()
    unsubscribe = controller.on_sample(render)
    await controller.start()
    ...
    await controller.stop()
"""

from __future__ import annotations

import asyncio
import threading
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Callable

import structlog

from emotion_tracker.affect.classifier import EmotionClassifier
from emotion_tracker.config import Settings, get_settings
from emotion_tracker.models import DeviceStatus, RawTriple, Sample, SessionSummary
from emotion_tracker.research.export import export_history_json
from emotion_tracker.sensors.simulator import SignalSimulator
from emotion_tracker.session.aggregator import SessionAggregator

logger = structlog.get_logger(__name__)

SampleObserver = Callable[[Sample], None]


class TrackingState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TrackingController:
    """Session-scoped orchestrator for live emotion tracking.

    Parameters
    ----------
    simulator, classifier, aggregator
        Collaborators; built from settings when omitted.
    interval_seconds : float
        Period between live ticks (default from settings, 2 s).
    bootstrap_samples : int
        Number of synthetic samples recorded at construction.
    bootstrap_spacing_seconds : int
        Spacing of the synthetic timestamps, ending at "now".
    clock : callable
        Returns the current timezone-aware time; replace in tests.

    Only the background task started by :meth:`start` ticks on its own, and
    only while the state is ``TRACKING``.  :meth:`tick` is also public so a
    caller can step the session by hand; a manual tick works in either state
    and never changes it.
    """

    def __init__(
        self,
        simulator: SignalSimulator | None = None,
        classifier: EmotionClassifier | None = None,
        aggregator: SessionAggregator | None = None,
        *,
        interval_seconds: float | None = None,
        bootstrap_samples: int | None = None,
        bootstrap_spacing_seconds: int | None = None,
        clock: Callable[[], datetime] | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        seed = settings.random_seed
        self._settings = settings
        self._simulator = simulator or SignalSimulator(seed=seed)
        self._classifier = classifier or EmotionClassifier(
            seed=None if seed is None else seed + 1,
        )
        self._aggregator = aggregator or SessionAggregator(capacity=settings.history_capacity)
        self._interval = (
            settings.tick_interval_seconds if interval_seconds is None else interval_seconds
        )
        if self._interval <= 0:
            raise ValueError(f"interval_seconds must be positive, got {self._interval!r}")
        self._clock = clock or _utcnow

        self._state = TrackingState.IDLE
        self._task: asyncio.Task | None = None
        self._lock = threading.RLock()
        self._observers: list[SampleObserver] = []
        self._last_sample: Sample | None = None
        self._device = DeviceStatus(battery_level=settings.initial_battery_level)

        count = settings.bootstrap_samples if bootstrap_samples is None else bootstrap_samples
        spacing = (
            settings.bootstrap_spacing_seconds
            if bootstrap_spacing_seconds is None
            else bootstrap_spacing_seconds
        )
        self._bootstrap(count, spacing)

    # ── Properties ────────────────────────────────────────────

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def is_tracking(self) -> bool:
        return self._state is TrackingState.TRACKING

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def last_sample(self) -> Sample | None:
        return self._last_sample

    @property
    def device_status(self) -> DeviceStatus:
        return self._device.model_copy()

    # ── Lifecycle ─────────────────────────────────────────────

    async def start(self) -> None:
        """Begin periodic ticking.  No-op when already tracking."""
        if self._state is TrackingState.TRACKING:
            logger.debug("tracking.already_started")
            return
        self._state = TrackingState.TRACKING
        self._task = asyncio.create_task(self._run_loop(), name="emotion-tracker-tick")
        logger.info("tracking.started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Stop ticking; history and the last sample are kept.  No-op when idle.

        The tick task has been cancelled and awaited when this returns.
        """
        if self._state is TrackingState.IDLE:
            logger.debug("tracking.already_stopped")
            return
        self._state = TrackingState.IDLE
        task, self._task = self._task, None
        if task:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("tracking.stopped", samples=len(self._aggregator))

    def reset(self) -> None:
        """Start a fresh session: clear history, last sample and device state."""
        with self._lock:
            self._aggregator.clear()
            self._last_sample = None
            self._device = DeviceStatus(battery_level=self._settings.initial_battery_level)
        logger.info("session.reset")

    # ── Tick ──────────────────────────────────────────────────

    def tick(self) -> Sample:
        """Produce, record and publish one sample.

        Driven by the background task while tracking.  Manual calls are
        allowed in either state and leave the state unchanged.
        """
        with self._lock:
            raw = self._simulator.next(self._last_sample)
            timestamp = self._clock()
            if self._last_sample is not None and timestamp < self._last_sample.timestamp:
                timestamp = self._last_sample.timestamp
            sample = self._record(raw, timestamp)
            self._device = self._device.model_copy(
                update={
                    "battery_level": max(
                        0.0, self._device.battery_level - self._settings.battery_drain_per_tick,
                    ),
                },
            )

        logger.debug(
            "tracking.tick",
            emotion=sample.emotion.value,
            confidence=sample.confidence,
            heart_rate=sample.heart_rate,
        )
        self._publish(sample)
        return sample

    # ── Observers ─────────────────────────────────────────────

    def on_sample(self, callback: SampleObserver) -> Callable[[], None]:
        """Register ``callback`` for every new live sample.

        Returns a function that removes the registration.
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    # ── Read-only views ───────────────────────────────────────

    def get_history(self, limit: int | None = None) -> list[Sample]:
        """Copy of the history, or of its last ``limit`` samples."""
        if limit is None:
            return self._aggregator.snapshot()
        return self._aggregator.recent_window(limit)

    def get_recent(self, n: int | None = None) -> list[Sample]:
        """Trend window: the last ``n`` samples (default ``recent_window_size``)."""
        return self._aggregator.recent_window(
            self._settings.recent_window_size if n is None else n,
        )

    def get_summary(self) -> SessionSummary:
        return self._aggregator.summary()

    def export_json(self) -> str:
        return export_history_json(self._aggregator.snapshot())

    # ── Internals ─────────────────────────────────────────────

    def _record(self, raw: RawTriple, timestamp: datetime) -> Sample:
        result = self._classifier.classify_raw(raw)
        sample = Sample.from_classification(timestamp, raw, result)
        self._aggregator.append(sample)
        self._last_sample = sample
        return sample

    def _bootstrap(self, count: int, spacing_seconds: int) -> None:
        if count <= 0:
            return
        now = self._clock()
        previous: RawTriple = self._simulator.next(None)
        with self._lock:
            for i in range(count):
                raw = self._simulator.next(previous)
                timestamp = now - timedelta(seconds=(count - i) * spacing_seconds)
                previous = self._record(raw, timestamp)
        logger.info("session.bootstrapped", samples=count, spacing_seconds=spacing_seconds)

    def _publish(self, sample: Sample) -> None:
        for observer in list(self._observers):
            try:
                observer(sample)
            except Exception as exc:
                logger.error(
                    "tracking.observer_error",
                    observer=getattr(observer, "__qualname__", repr(observer)),
                    error=str(exc),
                )

    async def _run_loop(self) -> None:
        """Tick every interval until stopped."""
        while self._state is TrackingState.TRACKING:
            await asyncio.sleep(self._interval)
            if self._state is not TrackingState.TRACKING:
                break
            try:
                self.tick()
            except Exception:
                logger.exception("tracking.tick_error")
