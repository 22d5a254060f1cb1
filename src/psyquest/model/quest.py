"""
quest.py
--------

QuestModel: structural definition of the QUEST observer model.

Holds
-----
- the discretized support of candidate thresholds (fixed at creation,
  centred on the prior mean and never re-centred),
- the Gaussian prior over that support,
- the Weibull psychometric function linking a presented intensity and a
  candidate threshold to the probability of a hit.

The model is stateless with respect to trials: posteriors live in
GridPosterior objects and are evolved by QuestEstimator (sequentially) or
GridInference (in batch).
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import jax.numpy as jnp

from psyquest.model.params import QuestParams
from psyquest.model.prior import GaussianPrior
from psyquest.model.psychometric import inverse_weibull, weibull

if TYPE_CHECKING:
    from psyquest.data import TrialHistory


class QuestModel:
    """
    QUEST observer model over a discrete threshold support.

    Parameters
    ----------
    params : QuestParams
        Validated parameter set.
    anchor_threshold : bool, default=False
        If False, the likelihood uses the Weibull function at
        ``intensity - threshold`` exactly. If True, the function is shifted
        so that a candidate threshold t is the intensity at which the hit
        probability equals ``params.target_performance`` (Psychtoolbox QUEST
        convention).

    Attributes
    ----------
    support : jnp.ndarray, shape (params.n_support,)
        Strictly increasing candidate thresholds.
    prior : GaussianPrior
        Prior over the threshold.
    threshold_offset : float
        Shift added to ``intensity - threshold`` before evaluating the
        Weibull function (0.0 unless anchor_threshold is set).
    """

    def __init__(self, params: QuestParams, *, anchor_threshold: bool = False):
        self.params = params
        self.anchor_threshold = anchor_threshold
        self.prior = GaussianPrior.from_params(params)

        n = params.n_support
        steps = jnp.arange(n, dtype=jnp.float64) - (n - 1) / 2.0
        self.support = params.guess_mean + params.grain * steps

        if anchor_threshold:
            self.threshold_offset = inverse_weibull(
                params.target_performance, params.beta, params.delta, params.gamma
            )
        else:
            self.threshold_offset = 0.0

    # ------------------------------------------------------------------
    # PSYCHOMETRIC FUNCTION
    # ------------------------------------------------------------------
    def p_hit(self, intensity, threshold=None) -> jnp.ndarray:
        """
        Probability of a hit at ``intensity`` given a threshold.

        Parameters
        ----------
        intensity : float or jnp.ndarray
            Presented log10 intensity.
        threshold : float or jnp.ndarray, optional
            Candidate threshold(s). Defaults to the whole support.

        Returns
        -------
        jnp.ndarray
            Hit probabilities, broadcast over intensity and threshold.
        """
        if threshold is None:
            threshold = self.support
        p = self.params
        x = jnp.asarray(intensity, dtype=jnp.float64) - threshold + self.threshold_offset
        return weibull(x, p.beta, p.delta, p.gamma)

    def likelihood(self, intensity: float, response: int) -> jnp.ndarray:
        """
        Likelihood of one observed response for every candidate threshold.

        Parameters
        ----------
        intensity : float
            Presented log10 intensity.
        response : int
            1 for a hit, 0 for a miss.

        Returns
        -------
        jnp.ndarray, shape (n_support,)
        """
        p_hit = self.p_hit(intensity)
        return p_hit if response == 1 else 1.0 - p_hit

    def log_likelihood_from_data(
        self, data: TrialHistory, floor: float = 0.0
    ) -> jnp.ndarray:
        """
        Summed log-likelihood of a trial history for every candidate threshold.

        Parameters
        ----------
        data : TrialHistory
            Observed trials.
        floor : float, default=0.0
            Likelihoods are clamped to at least this value before the log;
            with 0.0 impossible responses contribute -inf.

        Returns
        -------
        jnp.ndarray, shape (n_support,)
        """
        if len(data) == 0:
            return jnp.zeros_like(self.support)
        intensities = jnp.asarray(data.intensities, dtype=jnp.float64)
        responses = jnp.asarray(data.responses)
        p_hit = self.p_hit(intensities[:, None], self.support[None, :])
        lik = jnp.where(responses[:, None] == 1, p_hit, 1.0 - p_hit)
        return jnp.sum(jnp.log(jnp.maximum(lik, floor)), axis=0)

    def log_posterior_from_data(self, data: TrialHistory, floor: float = 0.0) -> jnp.ndarray:
        """Unnormalized log posterior over the support."""
        return self.prior.log_prob(self.support) + self.log_likelihood_from_data(
            data, floor=floor
        )

    # ------------------------------------------------------------------
    # CONVENIENCE
    # ------------------------------------------------------------------
    def with_beta(self, beta: float) -> QuestModel:
        """Return a copy of this model with a different Weibull slope."""
        params = dataclasses.replace(self.params, beta=beta)
        return QuestModel(params, anchor_threshold=self.anchor_threshold)

    @property
    def support_bounds(self) -> tuple[float, float]:
        """Lowest and highest candidate threshold."""
        return float(self.support[0]), float(self.support[-1])

    def __repr__(self) -> str:
        return (
            f"QuestModel(n_support={self.params.n_support}, "
            f"anchor_threshold={self.anchor_threshold})"
        )
