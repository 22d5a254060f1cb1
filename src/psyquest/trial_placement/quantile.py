"""
quantile.py
-----------

Posterior-summary placement for QUEST.

Each trial is presented at a single representative value of the current
threshold posterior:

- "quantile" : a quantile of the posterior CDF (median by default),
- "mean"     : the posterior mean (King-Smith et al., 1994),
- "mode"     : the most probable threshold (Watson & Pelli, 1983).

QuantilePlacement.pelli() selects the quantile order that Pelli (1987)
showed to be most informative for the psychometric function's asymptotes;
it is the default used by Psychtoolbox QUEST.
"""

from __future__ import annotations

import math

from psyquest.posterior.base_posterior import BasePosterior

PLACEMENT_METHODS = ("quantile", "mean", "mode")


class QuantilePlacement:
    """
    Recommend the next intensity from a posterior summary.

    Parameters
    ----------
    quantile_order : float, default=0.5
        Quantile used by the "quantile" method, in [0, 1].
    method : {"quantile", "mean", "mode"}, default="quantile"
        Summary statistic to present.
    """

    def __init__(self, quantile_order: float = 0.5, method: str = "quantile"):
        if method not in PLACEMENT_METHODS:
            raise ValueError(
                f"Unknown placement method: {method!r}. Use one of {PLACEMENT_METHODS}."
            )
        if not 0.0 <= quantile_order <= 1.0:
            raise ValueError(f"quantile_order must be in [0, 1], got {quantile_order}")
        self.quantile_order = float(quantile_order)
        self.method = method

    @classmethod
    def pelli(cls, model) -> QuantilePlacement:
        """
        Placement at Pelli's (1987) optimal quantile for ``model``.

        Parameters
        ----------
        model : QuestModel
            Supplies the psychometric function and the support span.
        """
        return cls(quantile_order=pelli_quantile_order(model), method="quantile")

    def propose(self, posterior: BasePosterior) -> float:
        """
        Return the log10 intensity to present next.

        Parameters
        ----------
        posterior : BasePosterior
            Current threshold posterior.

        Returns
        -------
        float
            Recommended intensity. Deterministic given the posterior.
        """
        if self.method == "mean":
            return posterior.mean()
        if self.method == "mode":
            return posterior.mode()
        return posterior.quantile(self.quantile_order)

    def __repr__(self) -> str:
        return f"QuantilePlacement(quantile_order={self.quantile_order}, method={self.method!r})"


def pelli_quantile_order(model) -> float:
    """
    Pelli's (1987) optimal quantile order for a QUEST model.

    The psychometric function is evaluated at the most extreme offsets the
    support allows (lowest intensity against highest threshold and vice
    versa), giving the low and high asymptotes pL and pH.

    Returns
    -------
    float
        Quantile order in (0, 1).
    """
    lo, hi = model.support_bounds
    p_low = float(model.p_hit(lo, hi))
    p_high = float(model.p_hit(hi, lo))
    eps = 2.220446049250313e-16

    p_e = (
        p_high * math.log(p_high + eps)
        - p_low * math.log(p_low + eps)
        + (1 - p_high + eps) * math.log(1 - p_high + eps)
        - (1 - p_low + eps) * math.log(1 - p_low + eps)
    )
    p_e = 1.0 / (1.0 + math.exp(p_e / (p_low - p_high)))
    return (p_e - p_low) / (p_high - p_low)
