"""Tests for the linear emotion classifier."""

from __future__ import annotations

import math

import pytest

from emotion_tracker.affect.classifier import (
    EmotionClassifier,
    InputDomainError,
    normalise,
    select_label,
)
from emotion_tracker.models import EmotionLabel, RawTriple

from conftest import LowerSource, MidpointSource, UpperSource


@pytest.fixture
def classifier() -> EmotionClassifier:
    return EmotionClassifier(rng=MidpointSource())


# ── Normalisation & scores ───────────────────────────────────


class TestScores:
    def test_normalise(self):
        hr_n, eda_n, temp_n = normalise(120.0, 15.0, 38.5)
        assert hr_n == pytest.approx(1.0)
        assert eda_n == pytest.approx(1.0)
        assert temp_n == pytest.approx(1.0)

    def test_zero_feature_point_scores_all_zero(self, classifier):
        scores = classifier.scores(70.0, 5.0, 36.5)
        assert set(scores) == set(EmotionLabel)
        for value in scores.values():
            assert value == 0

    def test_known_weights(self, classifier):
        # hrN = 0.5, edaN = 0.5, tempN = 0.5
        scores = classifier.scores(95.0, 10.0, 37.5)
        assert scores[EmotionLabel.CALM] == pytest.approx(-0.3)
        assert scores[EmotionLabel.HAPPY] == pytest.approx(0.25)
        assert scores[EmotionLabel.STRESSED] == pytest.approx(0.65)
        assert scores[EmotionLabel.FOCUSED] == pytest.approx(0.3)
        assert scores[EmotionLabel.NEUTRAL] == pytest.approx(-1.5)


# ── Label selection ──────────────────────────────────────────


class TestClassify:
    def test_zero_feature_tie_resolves_to_calm(self, classifier):
        assert classifier.classify(70.0, 5.0, 36.5).emotion == EmotionLabel.CALM

    def test_baseline_reading_is_stressed(self, classifier):
        # The simulator baseline sits above the normalisation centre on every
        # channel, where the stressed weights dominate.
        assert classifier.classify(72.0, 6.0, 36.8).emotion == EmotionLabel.STRESSED

    def test_high_arousal_is_stressed(self, classifier):
        assert classifier.classify(115.0, 14.0, 36.0).emotion == EmotionLabel.STRESSED

    def test_low_arousal_is_calm(self, classifier):
        assert classifier.classify(50.0, 2.0, 37.0).emotion == EmotionLabel.CALM

    def test_warm_and_dry_is_happy(self, classifier):
        assert classifier.classify(75.0, 3.0, 38.5).emotion == EmotionLabel.HAPPY

    def test_cool_dry_elevated_hr_is_focused(self, classifier):
        assert classifier.classify(75.0, 2.0, 35.5).emotion == EmotionLabel.FOCUSED

    def test_label_is_deterministic_with_random_confidence(self):
        classifier = EmotionClassifier(seed=11)
        labels = {classifier.classify(88.4, 9.12, 36.2).emotion for _ in range(50)}
        assert len(labels) == 1

    def test_classify_raw(self, classifier):
        raw = RawTriple(heart_rate=115.0, eda=14.0, temperature=36.0)
        assert classifier.classify_raw(raw) == classifier.classify(115.0, 14.0, 36.0)


class TestSelectLabel:
    def test_priority_breaks_ties(self):
        scores = {EmotionLabel.STRESSED: 1.0, EmotionLabel.HAPPY: 1.0, EmotionLabel.NEUTRAL: 1.0}
        assert select_label(scores) == EmotionLabel.HAPPY

    def test_highest_score_wins(self):
        scores = {EmotionLabel.CALM: 0.1, EmotionLabel.FOCUSED: 0.2}
        assert select_label(scores) == EmotionLabel.FOCUSED

    def test_empty_scores_raise(self):
        with pytest.raises(ValueError):
            select_label({})


# ── Input domain ─────────────────────────────────────────────


class TestInputDomain:
    def test_out_of_range_inputs_are_clamped(self, classifier):
        assert classifier.scores(500.0, 100.0, 50.0) == classifier.scores(120.0, 15.0, 38.5)
        assert classifier.scores(0.0, -3.0, 20.0) == classifier.scores(50.0, 2.0, 35.5)

    @pytest.mark.parametrize(
        "inputs",
        [
            (math.nan, 6.0, 36.8),
            (72.0, math.inf, 36.8),
            (72.0, 6.0, -math.inf),
        ],
    )
    def test_non_finite_inputs_raise(self, classifier, inputs):
        with pytest.raises(InputDomainError):
            classifier.classify(*inputs)

    def test_input_domain_error_is_value_error(self):
        assert issubclass(InputDomainError, ValueError)


# ── Confidence ───────────────────────────────────────────────


class TestConfidence:
    def test_midpoint_confidence(self, classifier):
        assert classifier.classify(80.0, 7.0, 36.9).confidence == 97.0

    def test_confidence_extremes(self):
        assert EmotionClassifier(rng=LowerSource()).classify(80.0, 7.0, 36.9).confidence == 94.0
        assert EmotionClassifier(rng=UpperSource()).classify(80.0, 7.0, 36.9).confidence == 100.0

    def test_random_confidence_range_and_precision(self):
        classifier = EmotionClassifier(seed=3)
        for _ in range(200):
            confidence = classifier.classify(80.0, 7.0, 36.9).confidence
            assert 94.0 <= confidence <= 100.0
            assert confidence == round(confidence, 1)
