"""
trial_placement
===============

Rules for choosing the next stimulus intensity from the threshold posterior.

- QuantilePlacement: present a posterior quantile (median by default), the
  posterior mean, or the posterior mode.
- pelli_quantile_order: Pelli's (1987) most informative quantile order.

Examples
--------
>>> from psyquest.trial_placement import QuantilePlacement
>>> placement = QuantilePlacement()  # posterior median
>>> intensity = placement.propose(posterior)
"""

from psyquest.trial_placement.quantile import (
    PLACEMENT_METHODS,
    QuantilePlacement,
    pelli_quantile_order,
)

__all__ = [
    "QuantilePlacement",
    "pelli_quantile_order",
    "PLACEMENT_METHODS",
]
