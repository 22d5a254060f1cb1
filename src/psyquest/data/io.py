"""
io.py
-----

I/O utilities for saving and loading psyquest data.

Supports:
- CSV for human-readable trial logs (trial, intensity, response)
- JSON for session results, in the payload shape the game hands to its
  reporting sink (finalThreshold, thresholdSD, totalTrials, hitRate, trialData)

Notes
-----
- Posterior state is never persisted; only histories and summaries are.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .dataset import TrialHistory

if TYPE_CHECKING:
    from psyquest.session.summary import SessionSummary

PathLike = Union[str, Path]

CSV_HEADER = ["trial", "intensity", "response"]


def save_history_csv(history: TrialHistory, path: PathLike) -> None:
    """
    Save a TrialHistory to a CSV file.

    Parameters
    ----------
    history : TrialHistory
    path : str or Path
    """
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for i, outcome in enumerate(history, start=1):
            writer.writerow([i, repr(outcome.intensity), outcome.response])


def load_history_csv(path: PathLike) -> TrialHistory:
    """
    Load a TrialHistory from a CSV file.

    Rows are re-ordered by their trial number.

    Parameters
    ----------
    path : str or Path

    Returns
    -------
    TrialHistory
    """
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        missing = set(CSV_HEADER) - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path}: missing CSV columns {sorted(missing)}")
        rows = sorted(reader, key=lambda row: int(row["trial"]))

    history = TrialHistory()
    for row in rows:
        history.add_trial(float(row["intensity"]), int(row["response"]))
    return history


def save_summary_json(summary: SessionSummary, path: PathLike) -> None:
    """
    Save a session summary as the JSON results payload.
    """
    with open(path, "w") as f:
        json.dump(summary.to_dict(), f, indent=2)


def load_summary_json(path: PathLike) -> SessionSummary:
    """
    Load a session summary written by save_summary_json().
    """
    from psyquest.session.summary import SessionSummary

    with open(path) as f:
        return SessionSummary.from_dict(json.load(f))
