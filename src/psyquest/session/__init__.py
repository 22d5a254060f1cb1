"""
session
=======

Trial-loop orchestration.

This subpackage provides:
- ExperimentSession : asks the estimator for stimuli, feeds responses back,
  enforces the trial budget and builds the results.
- SessionConfig : trial budget (20) and contrast bounds.
- SessionSummary : final threshold, its sd, hit rate and per-trial records.
"""

from .experiment_session import MAX_TRIALS, ExperimentSession, SessionConfig, to_contrast
from .summary import SessionSummary

__all__ = [
    "ExperimentSession",
    "SessionConfig",
    "SessionSummary",
    "MAX_TRIALS",
    "to_contrast",
]
