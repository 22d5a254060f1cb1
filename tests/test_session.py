"""
test_session.py
---------------

Tests for the trial loop: contrast mapping, trial budget, response handling
and the end-of-session payload.
"""

import math
import warnings

import pytest

from psyquest.errors import DegeneratePosteriorError
from psyquest.estimator import QuestEstimator
from psyquest.session import (
    MAX_TRIALS,
    ExperimentSession,
    SessionConfig,
    SessionSummary,
    to_contrast,
)


class _FixedPlacement:
    """Always proposes the same log intensity."""

    quantile_order = 0.5

    def __init__(self, value):
        self.value = value

    def propose(self, posterior):
        return self.value


class TestToContrast:
    def test_linear(self):
        assert to_contrast(-1.0) == pytest.approx(0.1)

    def test_clipped(self):
        assert to_contrast(0.5) == 1.0
        assert to_contrast(-400.0) == 0.0
        assert to_contrast(1000.0) == 1.0
        assert to_contrast(-1.0, lower=0.2) == 0.2

    def test_unbounded(self):
        assert to_contrast(1000.0, 0.0, math.inf) == math.inf


class TestSessionConfig:
    def test_defaults(self):
        config = SessionConfig()
        assert config.max_trials == MAX_TRIALS == 20

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_trials": 0}, {"min_contrast": -0.1}, {"min_contrast": 1.0}],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SessionConfig(**kwargs)


class TestTrialLoop:
    def test_first_stimulus(self):
        session = ExperimentSession()
        log_intensity, contrast = session.next_stimulus()
        assert log_intensity == pytest.approx(-1.0, abs=0.01)
        assert contrast == pytest.approx(10**log_intensity)

    def test_pending_stimulus_is_reused(self):
        session = ExperimentSession()
        first = session.next_stimulus()
        assert session.next_stimulus() == first
        assert session.pending_stimulus == first

    def test_response_without_stimulus(self):
        session = ExperimentSession()
        with pytest.raises(RuntimeError):
            session.record_response(1)

    def test_each_stimulus_answered_once(self):
        session = ExperimentSession()
        session.next_stimulus()
        session.record_response(1)
        with pytest.raises(RuntimeError):
            session.record_response(0)
        assert session.trial_count == 1

    def test_response_updates_at_presented_intensity(self):
        session = ExperimentSession()
        log_intensity, _ = session.next_stimulus()
        outcome = session.record_response(0)
        assert outcome.intensity == log_intensity
        assert session.estimator.history[0] == outcome
        assert session.estimator.mean() > -1.0

    def test_budget(self):
        session = ExperimentSession()
        for i in range(MAX_TRIALS):
            assert not session.is_complete
            session.next_stimulus()
            session.record_response(i % 2)
        assert session.is_complete
        with pytest.raises(RuntimeError, match="complete"):
            session.next_stimulus()
        assert [t["trial"] for t in session.trials] == list(range(1, 21))

    def test_custom_budget(self):
        session = ExperimentSession(config=SessionConfig(max_trials=3))
        summary = session.run(lambda log_intensity, contrast: 1)
        assert summary.total_trials == 3

    def test_degenerate_trial_is_skipped(self, saturating_params):
        estimator = QuestEstimator(
            saturating_params, placement=_FixedPlacement(10.0), on_degenerate="raise"
        )
        session = ExperimentSession(estimator)
        before = estimator.posterior
        session.next_stimulus()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            assert session.record_response(0) is None
        assert session.skipped_trials == 1
        assert session.trial_count == 0
        assert session.pending_stimulus is None
        assert estimator.posterior is before

    def test_bad_response_keeps_trial_pending(self):
        session = ExperimentSession()
        session.next_stimulus()
        with pytest.raises(ValueError):
            session.record_response(3)
        assert session.trial_count == 0
        assert session.pending_stimulus is not None


class TestSummary:
    def test_run_and_payload(self):
        session = ExperimentSession()
        responses = iter([1, 1, 0, 1] * 5)
        summary = session.run(lambda log_intensity, contrast: next(responses))

        assert isinstance(summary, SessionSummary)
        assert summary.total_trials == 20
        assert summary.hit_rate == pytest.approx(75.0)
        assert summary.final_threshold == pytest.approx(10 ** session.estimator.mean())
        assert summary.threshold_sd == pytest.approx(session.estimator.sd())

        payload = summary.to_dict()
        assert set(payload) == {
            "finalThreshold",
            "thresholdSD",
            "totalTrials",
            "hitRate",
            "trialData",
        }
        assert len(payload["trialData"]) == 20
        assert set(payload["trialData"][0]) == {"trial", "contrast", "response"}
        assert 0.0 <= payload["trialData"][0]["contrast"] <= 1.0

    def test_empty_summary(self):
        summary = ExperimentSession().summary()
        assert summary.total_trials == 0
        assert summary.hit_rate == 0.0
        assert summary.final_threshold == pytest.approx(0.1)

    def test_from_dict_round_trip(self):
        session = ExperimentSession(config=SessionConfig(max_trials=4))
        summary = session.run(lambda log_intensity, contrast: 0)
        assert SessionSummary.from_dict(summary.to_dict()) == summary

    def test_skip_does_not_count_toward_budget(self, saturating_params):
        estimator = QuestEstimator(
            saturating_params, placement=_FixedPlacement(10.0), on_degenerate="raise"
        )
        session = ExperimentSession(estimator, SessionConfig(max_trials=2))
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            session.next_stimulus()
            session.record_response(0)
            session.next_stimulus()
            session.record_response(1)
        assert session.skipped_trials == 1
        assert session.trial_count == 1
        assert not session.is_complete

    def test_degenerate_error_type(self):
        assert issubclass(DegeneratePosteriorError, ArithmeticError)
