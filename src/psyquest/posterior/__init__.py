"""
posterior
=========

Posterior representations and diagnostics.

This subpackage provides:
- BasePosterior: interface shared by threshold posteriors
- GridPosterior: normalized masses on a discrete threshold support (QUEST)
- diagnostics: entropy and credible intervals
"""

from .base_posterior import BasePosterior
from .diagnostics import credible_interval, entropy
from .posterior import GridPosterior

__all__ = [
    # Core protocol
    "BasePosterior",
    # Implementations
    "GridPosterior",
    # Diagnostics
    "entropy",
    "credible_interval",
]
