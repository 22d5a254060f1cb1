"""
QUEST contrast game: simulate a 20-trial session and visualize the staircase
----------------------------------------------------------------------------

This script runs the adaptive staircase of the contrast-detection game
against a simulated observer and plots what the estimator does:

1. Create a QuestEstimator with the game parameters
   (tGuess=-1, tGuessSd=0.5, pThreshold=0.82, beta=3.5, delta=0.01,
   gamma=0.5, grain=0.01, range=4).
2. Each trial, present the posterior median as the ball contrast and draw a
   hit (paddle collision) or miss (ball reached the bottom) from the
   observer's Weibull psychometric function at its true threshold.
3. Feed the outcome back, and after 20 trials report the results payload.

For each trial, the observer hits with probability
    p_hit = delta*gamma + (1-delta)*(gamma + (1-gamma)*(1 - exp(-10^(beta*(x - T)))))
where x is the presented log10 contrast and T the true log10 threshold.

Note:
- The estimator and the observer share the same psychometric function
  (a well-specified setting), so the posterior mean should land near T.
"""

from __future__ import annotations

import json
import os
import sys

import jax.random as jr
import matplotlib.pyplot as plt
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../../../src")))
# --8<-- [start:imports]
from psyquest.estimator import QuestEstimator
from psyquest.model import QuestParams
from psyquest.session import ExperimentSession, SessionConfig
from psyquest.utils import print_threshold_summary, simulate_response

# --8<-- [end:imports]

PLOTS_DIR = os.path.join(os.path.dirname(__file__), "plots")
TRUE_LOG_THRESHOLD = -1.3  # observer's contrast threshold ~0.05

# ---------- 1) Estimator + session ----------
# --8<-- [start:session]
params = QuestParams(
    guess_mean=-1.0,
    guess_sd=0.5,
    target_performance=0.82,
    beta=3.5,
    delta=0.01,
    gamma=0.5,
    grain=0.01,
    range=4.0,
)
quest = QuestEstimator(params, track_history=True)
session = ExperimentSession(quest, SessionConfig(max_trials=20))
# --8<-- [end:session]

# ---------- 2) Trial loop ----------
# --8<-- [start:loop]
key = jr.PRNGKey(0)
snapshots = [np.asarray(quest.posterior.pmf)]
while not session.is_complete:
    log_intensity, contrast = session.next_stimulus()
    key, subkey = jr.split(key)
    hit = simulate_response(quest, TRUE_LOG_THRESHOLD, log_intensity, subkey)
    session.record_response(hit)
    snapshots.append(np.asarray(quest.posterior.pmf))
# --8<-- [end:loop]

summary = session.summary()
print(json.dumps(summary.to_dict(), indent=2))
print_threshold_summary(quest)

# ---------- 3) Plots ----------
steps, means, sds = (np.asarray(v) for v in quest.get_history())
intensities, responses = quest.history.to_numpy()
support = np.asarray(quest.posterior.support)

fig, axes = plt.subplots(1, 2, figsize=(12, 5))

ax = axes[0]
trials = np.arange(1, len(intensities) + 1)
ax.plot(trials, intensities, "-", c="gray", alpha=0.5)
ax.scatter(trials[responses == 1], intensities[responses == 1], s=30, c="#1b9e77", label="Hit")
ax.scatter(trials[responses == 0], intensities[responses == 0], s=30, c="#d95f02", label="Miss")
ax.plot(steps, means, c="k", label="Posterior mean")
ax.fill_between(steps, means - sds, means + sds, color="k", alpha=0.1, label="±1 sd")
ax.axhline(TRUE_LOG_THRESHOLD, ls="--", c="tab:blue", label="True threshold")
ax.set_xlabel("Trial")
ax.set_ylabel("log10 contrast")
ax.set_title("Staircase")
ax.legend(loc="upper right", frameon=True, facecolor="white", edgecolor="gray")
ax.grid(True, alpha=0.3)

ax = axes[1]
window = (support > -2.5) & (support < 0.5)
for k in (0, 5, 10, 20):
    ax.plot(support[window], snapshots[k][window], label=f"after {k} trials")
ax.axvline(TRUE_LOG_THRESHOLD, ls="--", c="tab:blue")
ax.set_xlabel("Threshold (log10 contrast)")
ax.set_ylabel("Posterior mass")
ax.set_title("Posterior")
ax.legend(loc="upper right", frameon=True, facecolor="white", edgecolor="gray")
ax.grid(True, alpha=0.3)
plt.tight_layout()

os.makedirs(PLOTS_DIR, exist_ok=True)
path = os.path.join(PLOTS_DIR, "quest_pong_simulation.png")
fig.savefig(path, dpi=200, bbox_inches="tight")
print(f"    Saved staircase plot to {path}")
plt.show()
