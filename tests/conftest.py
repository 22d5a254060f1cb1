"""
Central pytest configuration for this project.

This file is automatically discovered by pytest and is intended for:

- **Fixtures**: reusable objects or setup logic shared across multiple test files.

Notes
-----
- Contributors should
  install the package in editable mode (`pip install -e .[test]`) so that imports are resolved
  consistently in local dev and CI environments.
- Keep this file focused on test setup. Do not add application logic here.
"""

import pytest

from psyquest.estimator import QuestEstimator
from psyquest.model import QuestParams

# Twenty scripted (presented log10 intensity, response) pairs.
SCRIPTED_INTENSITIES = [
    -1.0, -1.05, -1.1, -1.2, -1.15, -1.25, -1.3, -1.2, -1.35, -1.3,
    -1.25, -1.4, -1.3, -1.35, -1.2, -1.3, -1.25, -1.35, -1.3, -1.28,
]
SCRIPTED_RESPONSES = [1, 1, 1, 0, 1, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 1, 0, 0, 1, 1]


@pytest.fixture
def game_params():
    """Parameters of the contrast game: tGuess=-1, tGuessSd=0.5, pThreshold=0.82, ..."""
    return QuestParams(
        guess_mean=-1.0,
        guess_sd=0.5,
        target_performance=0.82,
        beta=3.5,
        delta=0.01,
        gamma=0.5,
        grain=0.01,
        range=4.0,
    )


@pytest.fixture
def quest(game_params):
    """Fresh estimator with the game parameters."""
    return QuestEstimator(game_params)


@pytest.fixture
def scripted_trials():
    """The scripted 20-trial session as a list of (intensity, response)."""
    return list(zip(SCRIPTED_INTENSITIES, SCRIPTED_RESPONSES))


@pytest.fixture
def small_params():
    """Small support (201 points) for fast tests."""
    return QuestParams(guess_mean=-1.0, guess_sd=0.5, grain=0.01, range=1.0)


@pytest.fixture
def saturating_params():
    """No lapses and no guessing: a miss far above threshold is impossible."""
    return QuestParams(
        guess_mean=-1.0,
        guess_sd=0.5,
        target_performance=0.5,
        beta=3.5,
        delta=0.0,
        gamma=0.0,
        grain=0.01,
        range=1.0,
    )
