"""
diagnostics.py
--------------

Posterior diagnostics.

Provides functions to check how informative a threshold posterior is:

- entropy : Shannon entropy of the grid masses (nats).
- credible_interval : equal-tailed credible interval from the CDF.
"""

from __future__ import annotations

import jax.numpy as jnp

from psyquest.posterior.posterior import GridPosterior


def entropy(posterior: GridPosterior) -> float:
    """
    Shannon entropy of the posterior masses.

    Parameters
    ----------
    posterior : GridPosterior
        Posterior to evaluate.

    Returns
    -------
    float
        Entropy in nats. Zero for a posterior concentrated on one point;
        log(n) for a uniform posterior over n points.
    """
    pmf = posterior.pmf
    terms = jnp.where(pmf > 0, pmf * jnp.log(jnp.where(pmf > 0, pmf, 1.0)), 0.0)
    return float(-jnp.sum(terms))


def credible_interval(posterior: GridPosterior, level: float = 0.95) -> tuple[float, float]:
    """
    Equal-tailed credible interval for the threshold.

    Parameters
    ----------
    posterior : GridPosterior
        Posterior to summarize.
    level : float, default=0.95
        Probability mass inside the interval.

    Returns
    -------
    (lower, upper) : tuple of float
        Interval bounds in log10 units.

    Raises
    ------
    ValueError
        If level is not in (0, 1).
    """
    if not 0.0 < level < 1.0:
        raise ValueError(f"level must be in (0, 1), got {level}")
    alpha = 1.0 - level
    return posterior.quantile(alpha / 2), posterior.quantile(1.0 - alpha / 2)
