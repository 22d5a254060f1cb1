"""
base.py
-------

Abstract base class for inference engines.

All inference engines must implement a `fit(model, data)` method
that returns a posterior object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class InferenceEngine(ABC):
    """
    Abstract interface for inference engines.

    Methods
    -------
    fit(model, data) -> posterior
        Compute the posterior of a model given observed trials.
    """

    @abstractmethod
    def fit(self, model: Any, data: Any) -> Any:
        """
        Fit model to data.

        Parameters
        ----------
        model : QuestModel
            Observer model (support, prior, likelihood).
        data : TrialHistory
            Observed trials.

        Returns
        -------
        BasePosterior
            Posterior over the threshold.
        """
        ...
