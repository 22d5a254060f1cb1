"""
simulate.py
-----------

Simulated observers for QUEST.

A simulated observer has a known true threshold and answers each trial by
drawing from the model's psychometric function at that threshold. Running the
estimator against such an observer is the standard way to check that the
staircase converges (QuestSimulate in Psychtoolbox).

Examples
--------
>>> from psyquest.model import QuestParams
>>> from psyquest.utils.rng import seed
>>> quest = simulate_session(QuestParams.default(), true_threshold=-1.2,
...                          n_trials=40, key=seed(0))
>>> quest.mean()
"""

from __future__ import annotations

from typing import Any

import jax.random as jr

from psyquest.estimator.quest import QuestEstimator
from psyquest.model.params import QuestParams
from psyquest.model.quest import QuestModel
from psyquest.utils.rng import as_key, split


def _as_model(observer) -> QuestModel:
    if isinstance(observer, QuestModel):
        return observer
    if isinstance(observer, QuestEstimator):
        return observer.model
    if isinstance(observer, QuestParams):
        return QuestModel(observer)
    raise TypeError(
        "observer must be a QuestModel, QuestEstimator or QuestParams, "
        f"got {type(observer).__name__}"
    )


def simulate_response(observer, true_threshold: float, intensity: float, key: Any) -> int:
    """
    Draw one response from a simulated observer.

    Parameters
    ----------
    observer : QuestModel, QuestEstimator or QuestParams
        Supplies the psychometric function (slope, lapse, guess rate).
    true_threshold : float
        The observer's threshold (log10 units).
    intensity : float
        Presented log10 intensity.
    key : jax.Array or int
        PRNG key or integer seed.

    Returns
    -------
    int
        1 (hit) with probability p_hit(intensity - true_threshold), else 0.
    """
    model = _as_model(observer)
    p_hit = model.p_hit(intensity, true_threshold)
    return int(jr.bernoulli(as_key(key), p_hit))


def simulate_session(
    params: QuestParams,
    true_threshold: float,
    n_trials: int = 20,
    *,
    key: Any,
    **estimator_kwargs,
) -> QuestEstimator:
    """
    Run a closed-loop QUEST session against a simulated observer.

    Parameters
    ----------
    params : QuestParams
        Session parameters (shared by estimator and observer).
    true_threshold : float
        The simulated observer's threshold (log10 units).
    n_trials : int, default=20
        Number of trials.
    key : jax.Array or int
        PRNG key or integer seed.
    **estimator_kwargs
        Passed to QuestEstimator (placement, anchor_threshold, ...).

    Returns
    -------
    QuestEstimator
        The estimator after ``n_trials`` updates.
    """
    if n_trials < 0:
        raise ValueError(f"n_trials must be >= 0, got {n_trials}")
    quest = QuestEstimator(params, **estimator_kwargs)
    key = as_key(key)
    for _ in range(n_trials):
        key, subkey = split(key)
        intensity = quest.recommend_intensity()
        response = simulate_response(quest, true_threshold, intensity, subkey)
        quest.update(intensity, response)
    return quest
