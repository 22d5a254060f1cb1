"""
utils
=====

Shared utility functions and helpers for psyquest.

This subpackage provides:
- diagnostics : threshold summaries and beta (slope) analysis.
- rng : random number handling for reproducibility.
- simulate : simulated observers and closed-loop sessions.
"""

from .diagnostics import (
    BetaAnalysis,
    beta_analysis,
    default_betas,
    print_threshold_summary,
    threshold_summary,
)
from .rng import as_key, seed, split
from .simulate import simulate_response, simulate_session

__all__ = [
    # diagnostics
    "threshold_summary",
    "print_threshold_summary",
    "beta_analysis",
    "default_betas",
    "BetaAnalysis",
    # rng
    "as_key",
    "seed",
    "split",
    # simulate
    "simulate_response",
    "simulate_session",
]
