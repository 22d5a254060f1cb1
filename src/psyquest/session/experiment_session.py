"""
experiment_session.py
---------------------

ExperimentSession orchestrates the trial loop around a QuestEstimator.

Responsibilities
----------------
1. Ask the estimator for the next intensity and convert it to a displayable
   contrast: clip(10 ** log_intensity, min_contrast, max_contrast).
2. Feed each trial's response back exactly once, at the intensity that was
   actually presented.
3. Enforce the trial budget (20 trials in the contrast game).
4. Keep per-trial records and build the SessionSummary.

The session knows nothing about rendering, physics or input: whatever
detects a paddle hit (response 1) or a boundary miss (response 0) calls
record_response().

Degenerate updates
------------------
If the estimator raises DegeneratePosteriorError (on_degenerate="raise"),
the trial is skipped: it is not counted, no record is kept, and the next
call to next_stimulus() asks the unchanged posterior again.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from psyquest.data.dataset import TrialOutcome
from psyquest.errors import DegeneratePosteriorError
from psyquest.estimator.quest import QuestEstimator
from psyquest.model.params import QuestParams
from psyquest.session.summary import SessionSummary

MAX_TRIALS = 20


@dataclass
class SessionConfig:
    """
    Trial-loop configuration.

    Attributes
    ----------
    max_trials : int, default=20
        Number of recorded trials after which the session is complete.
    min_contrast, max_contrast : float, default=0.0, 1.0
        Bounds applied to the linear contrast shown on screen.
    """

    max_trials: int = MAX_TRIALS
    min_contrast: float = 0.0
    max_contrast: float = 1.0

    def __post_init__(self):
        """Validate configuration."""
        if self.max_trials <= 0:
            raise ValueError(f"max_trials must be positive, got {self.max_trials}")
        if not 0.0 <= self.min_contrast < self.max_contrast:
            raise ValueError(
                "contrast bounds must satisfy 0 <= min_contrast < max_contrast, "
                f"got {self.min_contrast}, {self.max_contrast}"
            )


def to_contrast(log_intensity: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Linear contrast 10 ** log_intensity, clipped to [lower, upper]."""
    linear = math.inf if log_intensity > 308 else 10.0**log_intensity
    return min(max(linear, lower), upper)


class ExperimentSession:
    """
    High-level trial-loop controller.

    Parameters
    ----------
    estimator : QuestEstimator, optional
        Estimator owned by this session. Defaults to a new estimator with
        QuestParams.default().
    config : SessionConfig, optional
        Trial budget and contrast bounds.

    Attributes
    ----------
    trials : list of dict
        {"trial", "contrast", "response"} records of the recorded trials.
    skipped_trials : int
        Trials dropped because the estimator could not absorb them.
    """

    def __init__(
        self,
        estimator: QuestEstimator | None = None,
        config: SessionConfig | None = None,
    ):
        self.estimator = estimator or QuestEstimator(QuestParams.default())
        self.config = config or SessionConfig()
        self.trials: list[dict] = []
        self.skipped_trials = 0
        # (log_intensity, contrast) shown and not yet answered
        self._pending: tuple[float, float] | None = None

    # ------------------------------------------------------------------
    # STATE
    # ------------------------------------------------------------------
    @property
    def trial_count(self) -> int:
        return len(self.trials)

    @property
    def is_complete(self) -> bool:
        return self.trial_count >= self.config.max_trials

    @property
    def pending_stimulus(self) -> tuple[float, float] | None:
        """The presented (log_intensity, contrast) awaiting a response."""
        return self._pending

    # ------------------------------------------------------------------
    # TRIAL LOOP
    # ------------------------------------------------------------------
    def next_stimulus(self) -> tuple[float, float]:
        """
        Intensity for the next trial.

        Returns
        -------
        (log_intensity, contrast) : tuple of float
            The estimator's recommendation and the clipped linear contrast.
            Asking again before a response returns the same stimulus.

        Raises
        ------
        RuntimeError
            If the trial budget is exhausted.
        """
        if self.is_complete:
            raise RuntimeError(
                f"Session complete after {self.config.max_trials} trials."
            )
        if self._pending is None:
            log_intensity = self.estimator.recommend_intensity()
            contrast = to_contrast(
                log_intensity, self.config.min_contrast, self.config.max_contrast
            )
            self._pending = (log_intensity, contrast)
        return self._pending

    def record_response(self, response: int) -> TrialOutcome | None:
        """
        Resolve the pending trial.

        Parameters
        ----------
        response : int
            1 = hit (paddle collision), 0 = miss (ball reached the bottom).

        Returns
        -------
        TrialOutcome or None
            The recorded outcome, or None when the trial was skipped.

        Raises
        ------
        RuntimeError
            If there is no pending stimulus.
        """
        if self._pending is None:
            raise RuntimeError("No pending stimulus. Call next_stimulus() first.")
        log_intensity, contrast = self._pending
        outcome = TrialOutcome(log_intensity, response)
        self._pending = None

        try:
            self.estimator.update(outcome)
        except DegeneratePosteriorError:
            self.skipped_trials += 1
            return None

        self.trials.append(
            {
                "trial": self.trial_count + 1,
                "contrast": contrast,
                "response": outcome.response,
            }
        )
        return outcome

    def run(self, respond: Callable[[float, float], int]) -> SessionSummary:
        """
        Run the remaining trials with a response callback.

        Parameters
        ----------
        respond : callable
            ``respond(log_intensity, contrast) -> 0 or 1``.

        Returns
        -------
        SessionSummary
        """
        while not self.is_complete:
            log_intensity, contrast = self.next_stimulus()
            self.record_response(respond(log_intensity, contrast))
        return self.summary()

    # ------------------------------------------------------------------
    # RESULTS
    # ------------------------------------------------------------------
    def summary(self) -> SessionSummary:
        """
        Final threshold estimate and per-trial records.

        Can be called at any time; normally after is_complete.
        """
        hits = sum(t["response"] for t in self.trials)
        hit_rate = 100.0 * hits / self.trial_count if self.trials else 0.0
        return SessionSummary(
            final_threshold=to_contrast(self.estimator.mean(), 0.0, math.inf),
            threshold_sd=self.estimator.sd(),
            total_trials=self.trial_count,
            hit_rate=hit_rate,
            trial_data=[dict(t) for t in self.trials],
        )
