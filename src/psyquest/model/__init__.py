"""
psyquest.model
==============

Model-layer API: everything model-related in one place.

Includes
--------
- QuestParams (validated parameter set)
- GaussianPrior (prior over the threshold)
- weibull / inverse_weibull (psychometric function)
- QuestModel (support grid + likelihood)

All numerical functions use JAX arrays (jax.numpy as jnp).

Typical usage
-------------
    from psyquest.model import QuestModel, QuestParams
"""

from .params import QuestParams
from .prior import GaussianPrior
from .psychometric import inverse_weibull, weibull
from .quest import QuestModel

__all__ = [
    # Configuration
    "QuestParams",
    # Prior
    "GaussianPrior",
    # Psychometric function
    "weibull",
    "inverse_weibull",
    # Model
    "QuestModel",
]
