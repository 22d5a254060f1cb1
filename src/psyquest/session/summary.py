"""
summary.py
----------

End-of-session results.

SessionSummary is what the trial loop hands to its reporting collaborator:
the final threshold in linear units, its uncertainty in log10 units, and the
per-trial records. ``to_dict()`` produces the game's results payload:

    {
        "finalThreshold": ...,   # 10 ** posterior mean
        "thresholdSD": ...,      # posterior sd, log10 units
        "totalTrials": ...,
        "hitRate": ...,          # percent
        "trialData": [{"trial": 1, "contrast": 0.1, "response": 1}, ...],
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SessionSummary:
    """
    Final threshold estimate and trial records of a session.

    Attributes
    ----------
    final_threshold : float
        Threshold in linear units (10 ** posterior mean).
    threshold_sd : float
        Posterior standard deviation, log10 units.
    total_trials : int
        Number of recorded trials.
    hit_rate : float
        Percentage of hits (0-100).
    trial_data : list of dict
        One {"trial", "contrast", "response"} record per trial.
    """

    final_threshold: float
    threshold_sd: float
    total_trials: int
    hit_rate: float
    trial_data: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the results payload (camelCase keys)."""
        return {
            "finalThreshold": self.final_threshold,
            "thresholdSD": self.threshold_sd,
            "totalTrials": self.total_trials,
            "hitRate": self.hit_rate,
            "trialData": [dict(t) for t in self.trial_data],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> SessionSummary:
        """Inverse of to_dict()."""
        return cls(
            final_threshold=float(payload["finalThreshold"]),
            threshold_sd=float(payload["thresholdSD"]),
            total_trials=int(payload["totalTrials"]),
            hit_rate=float(payload["hitRate"]),
            trial_data=[dict(t) for t in payload.get("trialData", [])],
        )
