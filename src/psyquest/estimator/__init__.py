"""
estimator
=========

The stateful QUEST staircase.

This subpackage provides:
- QuestEstimator : create / recommend_intensity / update / mean / sd
- EstimatorState : INITIALIZED before the first update, UPDATED afterwards
- linear_threshold : 10**x conversion of log10 estimates
"""

from .quest import DEGENERATE_POLICIES, EstimatorState, QuestEstimator, linear_threshold

__all__ = [
    "QuestEstimator",
    "EstimatorState",
    "DEGENERATE_POLICIES",
    "linear_threshold",
]
