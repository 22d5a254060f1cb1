"""
quest.py
--------

QuestEstimator: the adaptive QUEST staircase (Watson & Pelli, 1983).

Lifecycle
---------
1. create     : build the support grid and the Gaussian prior.
2. recommend  : present the posterior median (or another placement rule).
3. update     : multiply the posterior by the likelihood of the observed
                response and renormalize.
4. summarize  : posterior mean and standard deviation as the final threshold
                estimate and its uncertainty.

One estimator belongs to one session. It never rolls back and enforces no
trial budget; the trial loop decides when to stop.

Degenerate updates
------------------
If the normalizing constant of an update underflows to zero (every candidate
threshold declared the response impossible), the estimator either

- "floor" (default): warns with DegeneratePosteriorWarning, clamps the
  likelihood to ``likelihood_floor`` and renormalizes in log space, or
- "raise": raises DegeneratePosteriorError and leaves its posterior and
  history untouched.
"""

from __future__ import annotations

import enum
import math
import sys
import warnings
from collections.abc import Mapping

import jax.numpy as jnp

from psyquest.data.dataset import TrialHistory, TrialOutcome
from psyquest.errors import (
    DegeneratePosteriorError,
    DegeneratePosteriorWarning,
    InvalidParameterError,
)
from psyquest.inference.grid import GridInference
from psyquest.model.params import QuestParams
from psyquest.model.quest import QuestModel
from psyquest.posterior.posterior import GridPosterior
from psyquest.trial_placement.quantile import QuantilePlacement

DEGENERATE_POLICIES = ("floor", "raise")

# QUEST clamps presented intensities to this magnitude.
MAX_ABS_INTENSITY = 1e10


class EstimatorState(enum.Enum):
    """Lifecycle state of a QuestEstimator."""

    INITIALIZED = "initialized"
    UPDATED = "updated"


class QuestEstimator:
    """
    Adaptive staircase estimator of a detection threshold.

    Parameters
    ----------
    params : QuestParams or mapping
        Session parameters. Mappings are converted with
        QuestParams.from_dict().
    placement : QuantilePlacement, optional
        Rule used by recommend_intensity(). Default: posterior median.
    anchor_threshold : bool, default=False
        Shift the psychometric function so that the threshold is the
        target_performance point (see QuestModel).
    on_degenerate : {"floor", "raise"}, default="floor"
        Policy when an update's normalizer underflows.
    likelihood_floor : float, optional
        Minimum likelihood used by the "floor" policy. Default: the smallest
        positive normal double.
    track_history : bool, default=False
        When True, record the posterior mean and sd after every update.

    Raises
    ------
    InvalidParameterError
        If the parameters are invalid. No estimator is created.

    Examples
    --------
    >>> quest = QuestEstimator(QuestParams.default())
    >>> x = quest.recommend_intensity()
    >>> quest.update(x, 1)
    >>> quest.mean(), quest.sd()
    """

    def __init__(
        self,
        params: QuestParams | Mapping,
        *,
        placement: QuantilePlacement | None = None,
        anchor_threshold: bool = False,
        on_degenerate: str = "floor",
        likelihood_floor: float | None = None,
        track_history: bool = False,
    ):
        if isinstance(params, Mapping):
            params = QuestParams.from_dict(params)
        elif not isinstance(params, QuestParams):
            raise InvalidParameterError(
                f"params must be a QuestParams or a mapping, got {type(params).__name__}"
            )
        if on_degenerate not in DEGENERATE_POLICIES:
            raise ValueError(
                f"on_degenerate must be one of {DEGENERATE_POLICIES}, got {on_degenerate!r}"
            )
        if likelihood_floor is None:
            likelihood_floor = sys.float_info.min
        if not likelihood_floor > 0:
            raise ValueError(f"likelihood_floor must be > 0, got {likelihood_floor}")

        self.model = QuestModel(params, anchor_threshold=anchor_threshold)
        self.placement = placement or QuantilePlacement()
        self.on_degenerate = on_degenerate
        self.likelihood_floor = float(likelihood_floor)

        self._posterior = GridPosterior(
            self.model.support, self.model.prior.pmf(self.model.support)
        )
        self._history = TrialHistory()
        self._state = EstimatorState.INITIALIZED

        self.track_history = track_history
        # Exposed through get_history() when tracking is enabled
        self.trial_steps: list[int] = []
        self.mean_history: list[float] = []
        self.sd_history: list[float] = []

    @classmethod
    def create(cls, params: QuestParams | Mapping, **kwargs) -> QuestEstimator:
        """Create an estimator (alias of the constructor)."""
        return cls(params, **kwargs)

    # ------------------------------------------------------------------
    # ACCESSORS
    # ------------------------------------------------------------------
    @property
    def params(self) -> QuestParams:
        return self.model.params

    @property
    def posterior(self) -> GridPosterior:
        """Current threshold posterior (immutable snapshot)."""
        return self._posterior

    @property
    def history(self) -> TrialHistory:
        """Trials the posterior has been conditioned on."""
        return self._history

    @property
    def state(self) -> EstimatorState:
        return self._state

    @property
    def n_updates(self) -> int:
        return len(self._history)

    # ------------------------------------------------------------------
    # RECOMMENDATION
    # ------------------------------------------------------------------
    def recommend_intensity(self) -> float:
        """
        Log10 intensity to present on the next trial.

        Returns
        -------
        float
            The placement rule applied to the current posterior (posterior
            median by default). Has no side effects.
        """
        return self.placement.propose(self._posterior)

    def quantile(self, q: float | None = None) -> float:
        """
        Posterior quantile.

        Parameters
        ----------
        q : float, optional
            Quantile order in [0, 1]. Defaults to the placement's
            quantile_order.
        """
        if q is None:
            q = self.placement.quantile_order
        return self._posterior.quantile(q)

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------
    def update(self, intensity: float | TrialOutcome, response: int | None = None):
        """
        Condition the posterior on one trial.

        Parameters
        ----------
        intensity : float or TrialOutcome
            Presented log10 intensity (normally the last recommendation),
            or a complete TrialOutcome.
        response : int, optional
            1 = hit, 0 = miss. Required unless a TrialOutcome is given.

        Returns
        -------
        QuestEstimator
            self, to allow chaining.

        Raises
        ------
        DegeneratePosteriorError
            Only with on_degenerate="raise"; state is left unchanged.
        ValueError
            If the response is not 0/1.
        """
        if isinstance(intensity, TrialOutcome):
            if response is not None:
                raise ValueError("response must not be given together with a TrialOutcome")
            outcome = intensity
        else:
            if response is None:
                raise ValueError("response is required")
            outcome = TrialOutcome(intensity, response)

        x = min(max(outcome.intensity, -MAX_ABS_INTENSITY), MAX_ABS_INTENSITY)
        if x != outcome.intensity:
            outcome = TrialOutcome(x, outcome.response)
        lo, hi = self.model.support_bounds
        if not lo <= x <= hi:
            warnings.warn(
                f"intensity {x} lies outside the threshold support [{lo:.4f}, {hi:.4f}]",
                UserWarning,
                stacklevel=2,
            )

        likelihood = self.model.likelihood(x, outcome.response)
        try:
            posterior = self._posterior.condition(likelihood)
        except DegeneratePosteriorError as exc:
            if self.on_degenerate == "raise":
                raise DegeneratePosteriorError(
                    f"update at intensity={x}, response={outcome.response} "
                    f"left no posterior mass: {exc}"
                ) from exc
            warnings.warn(
                f"posterior underflowed at intensity={x}, response={outcome.response}; "
                f"flooring likelihood at {self.likelihood_floor:g}",
                DegeneratePosteriorWarning,
                stacklevel=2,
            )
            floored = jnp.maximum(likelihood, self.likelihood_floor)
            posterior = self._posterior.condition_log(jnp.log(floored))

        self._posterior = posterior
        self._history.add(outcome)
        self._state = EstimatorState.UPDATED

        if self.track_history:
            self.trial_steps.append(len(self._history))
            self.mean_history.append(self.mean())
            self.sd_history.append(self.sd())
        return self

    def recompute(self) -> GridPosterior:
        """
        Rebuild the posterior from the prior and the full history.

        Uses GridInference (log space, same likelihood floor as the "floor"
        policy). Replaces and returns the current posterior.
        """
        engine = GridInference(likelihood_floor=self.likelihood_floor)
        self._posterior = engine.fit(self.model, self._history)
        return self._posterior

    # ------------------------------------------------------------------
    # SUMMARIES
    # ------------------------------------------------------------------
    def mean(self) -> float:
        """Posterior mean threshold (log10 units)."""
        return self._posterior.mean()

    def sd(self) -> float:
        """Posterior standard deviation of the threshold (log10 units)."""
        return self._posterior.sd()

    standard_deviation = sd

    def mode(self) -> float:
        """Most probable threshold (log10 units)."""
        return self._posterior.mode()

    def predict_prob(self, intensity: float, threshold: float | None = None) -> float:
        """
        Probability of a hit at ``intensity``.

        Parameters
        ----------
        intensity : float
            log10 intensity.
        threshold : float, optional
            Threshold to assume. Defaults to the posterior mean.
        """
        if threshold is None:
            threshold = self.mean()
        return float(self.model.p_hit(intensity, threshold))

    def get_history(self) -> tuple[list[int], list[float], list[float]]:
        """Return (trials, means, sds) recorded when tracking was enabled."""
        return self.trial_steps, self.mean_history, self.sd_history

    def __repr__(self) -> str:
        return (
            f"QuestEstimator(state={self._state.value}, n_updates={self.n_updates}, "
            f"mean={self.mean():.4f}, sd={self.sd():.4f})"
        )


def linear_threshold(log_intensity: float) -> float:
    """Convert a log10 threshold back to linear units (10**x)."""
    return math.pow(10.0, log_intensity)
