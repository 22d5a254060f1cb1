"""
base_posterior.py
-----------------

Abstract base class for posterior representations in psyquest.

Defines the common interface for posteriors over the threshold:

- GridPosterior : discrete masses on a fixed support (QUEST)

Why this matters
----------------
Placement rules, diagnostics and the session only ever ask a posterior for
summary statistics (mean, sd, quantiles) or samples. A common interface lets
them stay ignorant of how the posterior is stored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import jax.numpy as jnp


class BasePosterior(ABC):
    """
    Abstract base class for threshold posteriors.

    Notes
    -----
    - All summaries are in log10 intensity units.
    - Posteriors are values: conditioning returns a new object.
    """

    # ------------------------------------------------------------------
    # SUMMARIES
    # ------------------------------------------------------------------
    @abstractmethod
    def mean(self) -> float:
        """Posterior expectation of the threshold."""
        ...

    @abstractmethod
    def sd(self) -> float:
        """Posterior standard deviation of the threshold."""
        ...

    @abstractmethod
    def quantile(self, q: float) -> float:
        """
        Threshold value below which a fraction q of the mass lies.

        Parameters
        ----------
        q : float
            Quantile order in [0, 1].
        """
        ...

    @abstractmethod
    def mode(self) -> float:
        """Most probable threshold."""
        ...

    # ------------------------------------------------------------------
    # SAMPLING
    # ------------------------------------------------------------------
    @abstractmethod
    def sample(self, key: Any, n: int = 1) -> jnp.ndarray:
        """
        Draw thresholds from the posterior.

        Parameters
        ----------
        key : jax.Array
            PRNG key.
        n : int, default=1
            Number of samples.

        Returns
        -------
        jnp.ndarray, shape (n,)
        """
        ...

    def median(self) -> float:
        """Posterior median (0.5 quantile)."""
        return self.quantile(0.5)
