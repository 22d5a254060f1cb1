"""
prior.py
--------

Prior distribution over the detection threshold.

QUEST starts from a Gaussian belief about the threshold (log10 units),
centred on the experimenter's guess. On a discrete support the prior is the
Gaussian density evaluated at each grid point, normalized to sum to one.

Connections
-----------
- QuestModel evaluates GaussianPrior.pmf(support) once at creation.
- GridInference adds GaussianPrior.log_prob(support) to the summed trial
  log-likelihoods to recompute the posterior from scratch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import jax.numpy as jnp
import jax.random as jr


@dataclass(frozen=True)
class GaussianPrior:
    """
    Gaussian prior over the threshold.

    Parameters
    ----------
    mean : float
        Prior mean (tGuess), log10 units.
    sd : float
        Prior standard deviation (tGuessSd). Must be > 0.
    """

    mean: float
    sd: float

    def __post_init__(self):
        if self.sd <= 0:
            raise ValueError(f"sd must be > 0, got {self.sd}")

    @classmethod
    def from_params(cls, params) -> GaussianPrior:
        """Prior described by a QuestParams object."""
        return cls(mean=params.guess_mean, sd=params.guess_sd)

    def log_prob(self, t: jnp.ndarray) -> jnp.ndarray:
        """
        Log density up to an additive constant.

        Parameters
        ----------
        t : jnp.ndarray
            Candidate thresholds.
        """
        z = (jnp.asarray(t, dtype=jnp.float64) - self.mean) / self.sd
        return -0.5 * z**2

    def pmf(self, support: jnp.ndarray) -> jnp.ndarray:
        """
        Normalized prior masses on a discrete support.

        Parameters
        ----------
        support : jnp.ndarray, shape (n,)
            Strictly increasing candidate thresholds.

        Returns
        -------
        jnp.ndarray, shape (n,)
            Non-negative masses summing to one.
        """
        density = jnp.exp(self.log_prob(support))
        return density / jnp.sum(density)

    def sample(self, key: Any, n: int = 1) -> jnp.ndarray:
        """Draw n thresholds from the (continuous) prior."""
        return self.mean + self.sd * jr.normal(key, shape=(n,), dtype=jnp.float64)
