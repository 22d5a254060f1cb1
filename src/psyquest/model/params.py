"""
params.py
---------

Validated parameter set for the QUEST estimator.

A QuestParams object is fixed for a whole session. It carries both the prior
over the threshold (guess_mean, guess_sd), the Weibull psychometric function
(target_performance, beta, delta, gamma) and the discretization of the
threshold axis (grain, range). All values are in log10 intensity units where
applicable.

Connections
-----------
- QuestModel builds its support grid and prior from these values.
- QuestEstimator accepts either a QuestParams or a plain mapping, which is
  converted with QuestParams.from_dict().
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from psyquest.errors import InvalidParameterError

# Names accepted by from_dict(), including the QUEST/jsQUEST spellings.
_ALIASES = {
    "tGuess": "guess_mean",
    "guessMean": "guess_mean",
    "tGuessSd": "guess_sd",
    "guessSd": "guess_sd",
    "pThreshold": "target_performance",
    "targetPerformance": "target_performance",
    "p_threshold": "target_performance",
}


def _as_real(name: str, value: Any) -> float:
    """Convert a real scalar (Python, NumPy or 0-d array) to float."""
    if isinstance(value, (bool, str, bytes)):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(
            f"{name} must be a real number, got {value!r}"
        ) from exc


@dataclass(frozen=True)
class QuestParams:
    """
    Parameters of a QUEST session.

    Parameters
    ----------
    guess_mean : float
        Prior mean of the threshold (log10 intensity).
    guess_sd : float
        Prior standard deviation of the threshold. Must be > 0.
    target_performance : float
        Detection probability that defines "threshold", e.g. 0.82.
        Must satisfy gamma < target_performance < 1 and lie below the upper
        asymptote 1 - delta * (1 - gamma).
    beta : float
        Weibull slope. Must be > 0.
    delta : float
        Lapse rate in [0, 1).
    gamma : float
        Guess rate in [0, 1).
    grain : float
        Step of the discretized support. Must be > 0.
    range : float
        Half-width of the support around guess_mean. Must be > grain.

    Raises
    ------
    InvalidParameterError
        If any constraint is violated.
    """

    guess_mean: float
    guess_sd: float
    target_performance: float = 0.82
    beta: float = 3.5
    delta: float = 0.01
    gamma: float = 0.5
    grain: float = 0.01
    range: float = 4.0

    def __post_init__(self):
        """Validate all fields; nothing is built from an invalid set."""
        for name, value in asdict(self).items():
            value = _as_real(name, value)
            object.__setattr__(self, name, value)
            if not math.isfinite(value):
                raise InvalidParameterError(f"{name} must be finite, got {value}")

        if self.guess_sd <= 0:
            raise InvalidParameterError(f"guess_sd must be > 0, got {self.guess_sd}")
        if self.grain <= 0:
            raise InvalidParameterError(f"grain must be > 0, got {self.grain}")
        if self.range <= self.grain:
            raise InvalidParameterError(
                f"range must be > grain, got range={self.range}, grain={self.grain}"
            )
        if self.beta <= 0:
            raise InvalidParameterError(f"beta must be > 0, got {self.beta}")
        if not 0 <= self.delta < 1:
            raise InvalidParameterError(f"delta must be in [0, 1), got {self.delta}")
        if not 0 <= self.gamma < 1:
            raise InvalidParameterError(f"gamma must be in [0, 1), got {self.gamma}")
        if not self.gamma < self.target_performance < 1:
            raise InvalidParameterError(
                "target_performance must satisfy gamma < target_performance < 1, "
                f"got gamma={self.gamma}, target_performance={self.target_performance}"
            )
        if self.target_performance >= self.upper_asymptote:
            raise InvalidParameterError(
                f"target_performance={self.target_performance} is unreachable: "
                f"the psychometric function saturates at {self.upper_asymptote}"
            )

    @classmethod
    def default(cls) -> QuestParams:
        """Parameters of the contrast-detection game (threshold guess 10% contrast)."""
        return cls(
            guess_mean=math.log10(0.1),
            guess_sd=0.5,
            target_performance=0.82,
            beta=3.5,
            delta=0.01,
            gamma=0.5,
            grain=0.01,
            range=4.0,
        )

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> QuestParams:
        """
        Build parameters from a mapping.

        Accepts the snake_case field names as well as the QUEST spellings
        (tGuess, tGuessSd, pThreshold) and camelCase names.

        Raises
        ------
        InvalidParameterError
            For unknown or duplicated keys, or invalid values.
        """
        fields = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in config.items():
            name = _ALIASES.get(key, key)
            if name not in fields:
                raise InvalidParameterError(f"Unknown QUEST parameter: {key!r}")
            if name in kwargs:
                raise InvalidParameterError(f"Parameter {name!r} given more than once")
            kwargs[name] = value
        try:
            return cls(**kwargs)
        except TypeError as exc:  # missing required fields
            raise InvalidParameterError(str(exc)) from exc

    def to_dict(self) -> dict[str, float]:
        """Return the parameters as a snake_case dictionary."""
        return asdict(self)

    @property
    def upper_asymptote(self) -> float:
        """Hit probability at arbitrarily high intensity."""
        return 1.0 - self.delta * (1.0 - self.gamma)

    @property
    def n_support(self) -> int:
        """Number of candidate thresholds in the discretized support."""
        return int(round(2 * self.range / self.grain)) + 1
