"""
test_convergence.py
-------------------

Statistical behaviour of the staircase against simulated observers.

Every simulation is seeded, so these tests are deterministic; the thresholds
are loose enough that they hold for almost any seed set.
"""

import jax.random as jr
import pytest

from psyquest.model import QuestModel, QuestParams
from psyquest.utils.rng import seed
from psyquest.utils.simulate import simulate_response, simulate_session

N_SEEDS = 24
N_TRIALS = 30
TRUE_THRESHOLD = -1.0  # log10(0.1)


@pytest.fixture(scope="module")
def sessions():
    params = QuestParams.default()
    return [
        simulate_session(
            params, TRUE_THRESHOLD, N_TRIALS, key=seed(s), track_history=True
        )
        for s in range(N_SEEDS)
    ]


def test_estimates_converge_to_true_threshold(sessions):
    errors = [abs(q.mean() - TRUE_THRESHOLD) for q in sessions]
    within = sum(e <= 0.3 for e in errors)
    assert within / len(errors) >= 0.7
    assert sum(errors) / len(errors) < 0.25


def test_confidence_grows_on_average(sessions):
    """Mean posterior sd over seeds shrinks as trials accumulate."""

    def mean_sd_after(k):
        return sum(q.get_history()[2][k - 1] for q in sessions) / len(sessions)

    sd5, sd10, sd30 = mean_sd_after(5), mean_sd_after(10), mean_sd_after(N_TRIALS)
    assert 0.5 > sd5 > sd10 > sd30


def test_every_session_stays_normalized(sessions):
    for q in sessions:
        assert q.posterior.total_mass() == pytest.approx(1.0, abs=1e-9)
        assert len(q.history) == N_TRIALS


def test_shifted_observer_is_tracked():
    """Prior centred at -1, observer at -1.5: the estimate moves toward -1.5."""
    params = QuestParams.default()
    means = [
        simulate_session(params, -1.5, 40, key=seed(100 + s)).mean() for s in range(8)
    ]
    average = sum(means) / len(means)
    assert abs(average - (-1.5)) < 0.2


def test_simulate_response_frequency():
    params = QuestParams.default()
    model = QuestModel(params)
    p = float(model.p_hit(-1.0, -1.0))
    keys = jr.split(seed(7), 400)
    hits = [simulate_response(model, -1.0, -1.0, k) for k in keys]
    assert set(hits) <= {0, 1}
    assert sum(hits) / len(hits) == pytest.approx(p, abs=0.08)


def test_simulate_response_rejects_unknown_observer():
    with pytest.raises(TypeError):
        simulate_response("observer", -1.0, -1.0, seed(0))


def test_simulate_session_zero_trials():
    quest = simulate_session(QuestParams.default(), -1.0, 0, key=seed(0))
    assert len(quest.history) == 0
    with pytest.raises(ValueError):
        simulate_session(QuestParams.default(), -1.0, -1, key=seed(0))


def test_seed_and_key_are_interchangeable():
    a = simulate_session(QuestParams.default(), -1.0, 3, key=5)
    b = simulate_session(QuestParams.default(), -1.0, 3, key=seed(5))
    assert a.history.outcomes == b.history.outcomes


def test_as_key_rejects_bool():
    from psyquest.utils.rng import as_key

    with pytest.raises(TypeError):
        as_key(True)
