"""
inference
=========

Inference engines for the QUEST model.

This subpackage provides strategies for computing the threshold posterior
from observed trials.

Implementations
---------------
- GridInference : exact Bayesian recomputation on the discrete support.

Sequential (per-trial) updating lives in psyquest.estimator.QuestEstimator.
"""

from .base import InferenceEngine
from .grid import GridInference

# Registry for string-based inference selection
INFERENCE_ENGINES = {
    "grid": GridInference,
}

__all__ = [
    "InferenceEngine",
    "GridInference",
    "INFERENCE_ENGINES",
]
