"""
psychometric.py
---------------

Weibull psychometric function in log10-intensity space.

For an offset x = intensity - threshold (both log10 units):

    p_hit(x) = delta*gamma + (1-delta) * [gamma + (1-gamma) * (1 - exp(-10^(beta*x)))]

- gamma : guess rate (lower asymptote, chance performance).
- delta : lapse rate; a lapse yields a chance-level response, hence delta*gamma.
- beta  : slope.

The lower asymptote is gamma and the upper asymptote is 1 - delta*(1-gamma).
At x = 0 the function equals delta*gamma + (1-delta)*(1 - (1-gamma)/e), which
for the usual gamma=0.5, delta=0.01 is ~0.81: the classic QUEST choice of
pThreshold=0.82 places the threshold close to the Weibull location parameter.

All functions accept JAX arrays and broadcast.
"""

from __future__ import annotations

import math

import jax.numpy as jnp


def weibull(x: jnp.ndarray, beta: float, delta: float, gamma: float) -> jnp.ndarray:
    """
    Probability of a hit at log offset x.

    Parameters
    ----------
    x : jnp.ndarray
        intensity - threshold, in log10 units.
    beta, delta, gamma : float
        Slope, lapse rate and guess rate.

    Returns
    -------
    jnp.ndarray
        Hit probabilities, same shape as x.
    """
    x = jnp.asarray(x, dtype=jnp.float64)
    detect = 1.0 - jnp.exp(-jnp.power(10.0, beta * x))
    return delta * gamma + (1.0 - delta) * (gamma + (1.0 - gamma) * detect)


def inverse_weibull(p: float, beta: float, delta: float, gamma: float) -> float:
    """
    Log offset at which the Weibull function reaches probability p.

    Parameters
    ----------
    p : float
        Target hit probability. Must lie strictly between the asymptotes
        gamma and 1 - delta*(1-gamma).

    Returns
    -------
    float
        Offset x (log10 units) with weibull(x) == p.

    Raises
    ------
    ValueError
        If p is outside the open range of the function.
    """
    upper = 1.0 - delta * (1.0 - gamma)
    if not gamma < p < upper:
        raise ValueError(
            f"p={p} is outside the range of the psychometric function ({gamma}, {upper})"
        )
    # p = delta*gamma + (1-delta) * (1 - (1-gamma) * exp(-10^(beta*x)))
    survival = (1.0 - (p - delta * gamma) / (1.0 - delta)) / (1.0 - gamma)
    return math.log10(-math.log(survival)) / beta
