"""
grid.py
-------

Exact Bayesian inference on the discrete threshold support.

Recomputes the posterior from the prior and a complete trial history:

    log p(t | data) = log prior(t) + sum_k log p(response_k | intensity_k, t) + const

The sum is formed in log space and normalized with log-sum-exp, so long
histories do not underflow. The result agrees with applying the same trials
one at a time through QuestEstimator.update().

Connections
-----------
- Calls QuestModel.log_posterior_from_data(data) as the objective.
- Returns a GridPosterior.
- Used by utils.diagnostics.beta_analysis to score alternative slopes.
"""

from __future__ import annotations

from jax.scipy.special import logsumexp

from psyquest.inference.base import InferenceEngine
from psyquest.posterior.posterior import GridPosterior


class GridInference(InferenceEngine):
    """
    Batch grid inference (QUEST recompute).

    Parameters
    ----------
    likelihood_floor : float, default=0.0
        Per-trial likelihoods are clamped to at least this value. With the
        default, a history that is impossible under every candidate threshold
        raises DegeneratePosteriorError.
    """

    def __init__(self, likelihood_floor: float = 0.0):
        if likelihood_floor < 0:
            raise ValueError(f"likelihood_floor must be >= 0, got {likelihood_floor}")
        self.likelihood_floor = likelihood_floor

    def fit(self, model, data) -> GridPosterior:
        """
        Compute the posterior of ``model`` given ``data``.

        Parameters
        ----------
        model : QuestModel
            Model instance.
        data : TrialHistory
            Observed trials (may be empty: returns the prior).

        Returns
        -------
        GridPosterior
        """
        log_post = model.log_posterior_from_data(data, floor=self.likelihood_floor)
        return GridPosterior.from_log_weights(model.support, log_post)

    def log_evidence(self, model, data) -> float:
        """
        Log marginal likelihood of the data under ``model``.

        The prior is normalized on the support, so evidences of models that
        share a support (e.g. different slopes) are directly comparable.
        """
        log_prior = model.prior.log_prob(model.support)
        log_prior = log_prior - logsumexp(log_prior)
        log_lik = model.log_likelihood_from_data(data, floor=self.likelihood_floor)
        return float(logsumexp(log_prior + log_lik))

    def __repr__(self) -> str:
        return f"GridInference(likelihood_floor={self.likelihood_floor})"
