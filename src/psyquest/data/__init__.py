"""
psyquest.data
=============

submodule for handling trial data.

Includes:
- dataset: TrialOutcome, TrialHistory
- io: save/load trial histories (CSV) and session results (JSON)
"""

from .dataset import TrialHistory, TrialOutcome
from .io import load_history_csv, load_summary_json, save_history_csv, save_summary_json

__all__ = [
    "TrialOutcome",
    "TrialHistory",
    "save_history_csv",
    "load_history_csv",
    "save_summary_json",
    "load_summary_json",
]
