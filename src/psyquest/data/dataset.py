"""
dataset.py
-----------

Core data containers for psyquest.

defines:
- TrialOutcome: one presented intensity and the binary response to it
- TrialHistory: append-only record of a session's outcomes

Notes
-----
- Outcomes are produced by the trial loop (paddle collision = hit,
  boundary miss = miss) and handed to the estimator; they are the only
  message the estimator consumes.
- Data is stored in Python lists and exposed as NumPy arrays.
  Convert to jax.numpy (jnp) only when passing into QuestModel.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def _as_response(resp) -> int:
    """Coerce a response to 0/1, rejecting anything else."""
    if isinstance(resp, (bool, np.bool_)):
        return int(resp)
    if isinstance(resp, (int, np.integer)) and int(resp) in (0, 1):
        return int(resp)
    if isinstance(resp, (float, np.floating)) and float(resp) in (0.0, 1.0):
        return int(resp)
    raise ValueError(f"response must be 0 (miss) or 1 (hit), got {resp!r}")


@dataclass(frozen=True)
class TrialOutcome:
    """
    Result of a single trial.

    Attributes
    ----------
    intensity : float
        Presented stimulus intensity, log10 units.
    response : int
        1 = detected (hit), 0 = missed.
    """

    intensity: float
    response: int

    def __post_init__(self):
        object.__setattr__(self, "intensity", float(self.intensity))
        object.__setattr__(self, "response", _as_response(self.response))
        if math.isnan(self.intensity):
            raise ValueError("intensity must not be NaN")


class TrialHistory:
    """
    Container for the outcomes of a session.

    Attributes
    ----------
    outcomes : list[TrialOutcome]
        Outcomes in presentation order.
    """

    def __init__(self) -> None:
        self.outcomes: list[TrialOutcome] = []

    def add(self, outcome: TrialOutcome) -> None:
        """
        append a single outcome.

        Parameters
        ----------
        outcome : TrialOutcome
        """
        self.outcomes.append(outcome)

    def add_trial(self, intensity: float, response: int) -> TrialOutcome:
        """Append a trial given as raw values and return its outcome."""
        outcome = TrialOutcome(intensity, response)
        self.add(outcome)
        return outcome

    @property
    def intensities(self) -> np.ndarray:
        """Presented intensities, shape (n_trials,)."""
        return np.array([o.intensity for o in self.outcomes], dtype=np.float64)

    @property
    def responses(self) -> np.ndarray:
        """Responses, shape (n_trials,)."""
        return np.array([o.response for o in self.outcomes], dtype=np.int64)

    def to_numpy(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Return intensities, responses as numpy arrays.

        Returns
        -------
        intensities : np.ndarray
        responses : np.ndarray
        """
        return self.intensities, self.responses

    @property
    def hit_rate(self) -> float:
        """Fraction of hits (0.0 for an empty history)."""
        if not self.outcomes:
            return 0.0
        return float(np.mean(self.responses))

    def __len__(self) -> int:
        """Return number of trials."""
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)

    def __getitem__(self, index):
        return self.outcomes[index]

    @classmethod
    def from_arrays(cls, intensities, responses) -> TrialHistory:
        """
        Construct a TrialHistory from parallel arrays.

        Parameters
        ----------
        intensities : array, shape (n_trials,)
            Presented log10 intensities.
        responses : array, shape (n_trials,)
            0/1 responses.

        Examples
        --------
        >>> history = TrialHistory.from_arrays([-1.0, -1.2], [1, 0])
        >>> len(history)
        2
        """
        intensities = np.asarray(intensities, dtype=np.float64)
        responses = np.asarray(responses)
        if intensities.ndim != 1 or intensities.shape != responses.shape:
            raise ValueError(
                "intensities and responses must be 1-D arrays of equal length, "
                f"got {intensities.shape} and {responses.shape}"
            )
        history = cls()
        for intensity, response in zip(intensities, responses):
            history.add_trial(float(intensity), response.item())
        return history

    def tail(self, n: int) -> TrialHistory:
        """
        Return last n trials as a new TrialHistory.
        """
        new_history = TrialHistory()
        new_history.outcomes = self.outcomes[-n:] if n > 0 else []
        return new_history

    def copy(self) -> TrialHistory:
        """
        Create a copy of this history (outcomes are immutable).
        """
        new_history = TrialHistory()
        new_history.outcomes = list(self.outcomes)
        return new_history
