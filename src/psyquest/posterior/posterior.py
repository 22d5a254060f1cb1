"""
posterior.py
------------

Concrete posterior over a discrete threshold support.

This module provides:
- GridPosterior: normalized probability masses on a fixed, strictly
  increasing grid of candidate thresholds.

Conditioning on a trial multiplies the masses by the trial likelihood and
renormalizes (Bayes' rule on a grid). GridPosterior objects are immutable;
every conditioning step returns a new instance.
"""

from __future__ import annotations

import math
from typing import Any

import jax.numpy as jnp
import jax.random as jr
from jax.scipy.special import logsumexp

from psyquest.errors import DegeneratePosteriorError
from psyquest.posterior.base_posterior import BasePosterior


class GridPosterior(BasePosterior):
    """
    Posterior masses over a discrete threshold support.

    Parameters
    ----------
    support : jnp.ndarray, shape (n,)
        Strictly increasing candidate thresholds (log10 units).
    pmf : jnp.ndarray, shape (n,)
        Non-negative masses summing to one.

    Notes
    -----
    The constructor trusts its inputs; use ``from_weights`` or
    ``from_log_weights`` to build from unnormalized values.
    """

    def __init__(self, support: jnp.ndarray, pmf: jnp.ndarray):
        self._support = jnp.asarray(support, dtype=jnp.float64)
        self._pmf = jnp.asarray(pmf, dtype=jnp.float64)
        if self._support.shape != self._pmf.shape or self._support.ndim != 1:
            raise ValueError(
                f"support and pmf must be 1-D arrays of equal length, "
                f"got {self._support.shape} and {self._pmf.shape}"
            )

    # ------------------------------------------------------------------
    # CONSTRUCTORS
    # ------------------------------------------------------------------
    @classmethod
    def from_weights(cls, support: jnp.ndarray, weights: jnp.ndarray) -> GridPosterior:
        """
        Normalize non-negative weights into a posterior.

        Raises
        ------
        DegeneratePosteriorError
            If the weights sum to zero or to a non-finite value.
        """
        weights = jnp.asarray(weights, dtype=jnp.float64)
        total = float(jnp.sum(weights))
        if not (math.isfinite(total) and total > 0.0):
            raise DegeneratePosteriorError(
                f"posterior normalizer is {total}; cannot renormalize"
            )
        return cls(support, weights / total)

    @classmethod
    def from_log_weights(
        cls, support: jnp.ndarray, log_weights: jnp.ndarray
    ) -> GridPosterior:
        """
        Normalize log weights into a posterior (log-sum-exp).

        Raises
        ------
        DegeneratePosteriorError
            If every log weight is -inf (or any is NaN).
        """
        log_weights = jnp.asarray(log_weights, dtype=jnp.float64)
        log_total = float(logsumexp(log_weights))
        if not math.isfinite(log_total):
            raise DegeneratePosteriorError(
                f"log normalizer is {log_total}; cannot renormalize"
            )
        return cls(support, jnp.exp(log_weights - log_total))

    # ------------------------------------------------------------------
    # ACCESSORS
    # ------------------------------------------------------------------
    @property
    def support(self) -> jnp.ndarray:
        """Candidate thresholds."""
        return self._support

    @property
    def pmf(self) -> jnp.ndarray:
        """Probability masses, aligned with ``support``."""
        return self._pmf

    @property
    def cdf(self) -> jnp.ndarray:
        """Cumulative masses."""
        return jnp.cumsum(self._pmf)

    def total_mass(self) -> float:
        """Sum of the masses (1 up to rounding)."""
        return float(jnp.sum(self._pmf))

    def __len__(self) -> int:
        return int(self._support.shape[0])

    # ------------------------------------------------------------------
    # CONDITIONING
    # ------------------------------------------------------------------
    def condition(self, likelihood: jnp.ndarray) -> GridPosterior:
        """
        Multiply by a likelihood and renormalize.

        Parameters
        ----------
        likelihood : jnp.ndarray, shape (n,)
            Likelihood of the observation at every support point.

        Returns
        -------
        GridPosterior
            New posterior.

        Raises
        ------
        DegeneratePosteriorError
            If the normalizing constant underflows to zero.
        """
        return GridPosterior.from_weights(self._support, self._pmf * likelihood)

    def condition_log(self, log_likelihood: jnp.ndarray) -> GridPosterior:
        """
        Condition in log space.

        Masses that are exactly zero stay zero; everything else is combined
        with ``log_likelihood`` and normalized with log-sum-exp, so the
        result does not underflow even when the plain product would.
        """
        positive = self._pmf > 0
        log_pmf = jnp.where(positive, jnp.log(jnp.where(positive, self._pmf, 1.0)), -jnp.inf)
        return GridPosterior.from_log_weights(self._support, log_pmf + log_likelihood)

    # ------------------------------------------------------------------
    # SUMMARIES
    # ------------------------------------------------------------------
    def mean(self) -> float:
        return float(jnp.sum(self._support * self._pmf))

    def variance(self) -> float:
        """Posterior variance of the threshold."""
        mu = self.mean()
        return float(jnp.sum(self._pmf * (self._support - mu) ** 2))

    def sd(self) -> float:
        return math.sqrt(max(self.variance(), 0.0))

    def mode(self) -> float:
        return float(self._support[jnp.argmax(self._pmf)])

    def quantile(self, q: float) -> float:
        """
        Interpolated quantile of the cumulative distribution.

        Only support points carrying mass (where the CDF strictly increases)
        take part in the interpolation. A posterior concentrated on a single
        point has no such pair; its mode is returned instead.

        Raises
        ------
        ValueError
            If q is outside [0, 1].
        """
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"quantile order must be in [0, 1], got {q}")
        cdf = self.cdf
        total = cdf[-1]
        idx = jnp.nonzero(self._pmf > 0)[0]
        if idx.shape[0] < 2:
            return self.mode()
        return float(jnp.interp(q * total, cdf[idx], self._support[idx]))

    # ------------------------------------------------------------------
    # SAMPLING
    # ------------------------------------------------------------------
    def sample(self, key: Any, n: int = 1) -> jnp.ndarray:
        return jr.choice(key, self._support, shape=(n,), p=self._pmf)

    def __repr__(self) -> str:
        return f"GridPosterior(n={len(self)}, mean={self.mean():.4f}, sd={self.sd():.4f})"
