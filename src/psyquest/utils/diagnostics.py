"""
diagnostics.py
--------------

Threshold reports and slope analysis.

Provides tools for:
- Threshold summaries (mean, sd, median, mode, credible interval, entropy)
- Human-readable end-of-session reports
- Beta analysis: joint estimation of threshold and Weibull slope from a
  completed history (QuestBetaAnalysis in Psychtoolbox)

Examples
--------
>>> from psyquest.utils.diagnostics import threshold_summary
>>> summary = threshold_summary(quest)
>>> print(f"{summary['linear_threshold']:.4f} ± {summary['sd']:.4f}")

>>> from psyquest.utils.diagnostics import beta_analysis
>>> result = beta_analysis(quest.params, quest.history)
>>> result.beta_mean, result.beta_sd
"""

from __future__ import annotations

import dataclasses
import math
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

import jax.numpy as jnp
from jax.nn import softmax

from psyquest.errors import DegeneratePosteriorError, InvalidParameterError
from psyquest.inference.grid import GridInference
from psyquest.model.params import QuestParams
from psyquest.model.quest import QuestModel
from psyquest.posterior.diagnostics import credible_interval, entropy

if TYPE_CHECKING:
    from psyquest.data import TrialHistory
    from psyquest.estimator import QuestEstimator


def threshold_summary(
    estimator: QuestEstimator, level: float = 0.95
) -> dict[str, float]:
    """
    Summary statistics of an estimator's threshold posterior.

    Parameters
    ----------
    estimator : QuestEstimator
        Estimator to summarize.
    level : float, default=0.95
        Credible interval mass.

    Returns
    -------
    dict
        Keys: "mean", "sd", "median", "mode", "ci_lower", "ci_upper",
        "entropy", "linear_threshold" (10 ** mean), "n_trials".
    """
    posterior = estimator.posterior
    lower, upper = credible_interval(posterior, level)
    mean = posterior.mean()
    return {
        "mean": mean,
        "sd": posterior.sd(),
        "median": posterior.median(),
        "mode": posterior.mode(),
        "ci_lower": lower,
        "ci_upper": upper,
        "entropy": entropy(posterior),
        "linear_threshold": math.pow(10.0, mean),
        "n_trials": len(estimator.history),
    }


def print_threshold_summary(estimator: QuestEstimator, level: float = 0.95) -> None:
    """
    Print a human-readable threshold summary.

    Examples
    --------
    >>> print_threshold_summary(quest)
    Threshold Summary (20 trials):
      log10 threshold: -1.043 ± 0.164
      95% CI: [-1.371, -0.729]
      median: -1.040   mode: -1.040
      linear threshold: 0.09058
    """
    s = threshold_summary(estimator, level)
    print(f"Threshold Summary ({s['n_trials']} trials):")
    print(f"  log10 threshold: {s['mean']:.3f} ± {s['sd']:.3f}")
    print(f"  {100 * level:.0f}% CI: [{s['ci_lower']:.3f}, {s['ci_upper']:.3f}]")
    print(f"  median: {s['median']:.3f}   mode: {s['mode']:.3f}")
    print(f"  linear threshold: {s['linear_threshold']:.5f}")


@dataclass(frozen=True)
class BetaAnalysis:
    """
    Result of beta_analysis().

    Attributes
    ----------
    betas : jnp.ndarray
        Slopes considered.
    probabilities : jnp.ndarray
        Posterior probability of each slope (uniform prior over the grid).
    beta_mean, beta_sd : float
        Posterior mean and sd of the slope.
    threshold_mean, threshold_sd : float
        Threshold mean and sd marginalized over slopes (log10 units).
    """

    betas: jnp.ndarray
    probabilities: jnp.ndarray
    beta_mean: float
    beta_sd: float
    threshold_mean: float
    threshold_sd: float


def default_betas() -> jnp.ndarray:
    """Slopes 2 ** (i / 4) for i = 1..16, as in Psychtoolbox."""
    return jnp.power(2.0, jnp.arange(1, 17, dtype=jnp.float64) / 4.0)


def beta_analysis(
    params: QuestParams,
    history: TrialHistory,
    betas=None,
    *,
    anchor_threshold: bool = False,
    likelihood_floor: float | None = None,
) -> BetaAnalysis:
    """
    Estimate the Weibull slope jointly with the threshold.

    For every candidate slope the history's evidence is computed on the
    threshold grid; slopes are weighted by their evidence and the threshold
    posterior is marginalized over them.

    Parameters
    ----------
    params : QuestParams
        Session parameters; only ``beta`` is varied.
    history : TrialHistory
        Completed trials.
    betas : array-like, optional
        Candidate slopes (> 0). Default: default_betas().
    anchor_threshold : bool, default=False
        Must match the estimator that produced the history.
    likelihood_floor : float, optional
        Minimum per-trial likelihood. Default: the smallest positive normal
        double, as in QuestEstimator, so histories containing trials the
        estimator floored remain scoreable.

    Returns
    -------
    BetaAnalysis

    Raises
    ------
    InvalidParameterError
        If a candidate slope is not positive.
    DegeneratePosteriorError
        If the history is impossible under every candidate slope.
    """
    betas = default_betas() if betas is None else jnp.asarray(betas, dtype=jnp.float64)
    if betas.ndim != 1 or betas.shape[0] == 0:
        raise InvalidParameterError("betas must be a non-empty 1-D sequence")

    if likelihood_floor is None:
        likelihood_floor = sys.float_info.min

    engine = GridInference(likelihood_floor=likelihood_floor)
    log_evidence = []
    means = []
    variances = []
    for beta in betas:
        model = QuestModel(
            dataclasses.replace(params, beta=float(beta)),
            anchor_threshold=anchor_threshold,
        )
        evidence = engine.log_evidence(model, history)
        log_evidence.append(evidence)
        if not math.isfinite(evidence):
            # zero weight below; placeholders keep the arrays aligned
            means.append(0.0)
            variances.append(0.0)
            continue
        posterior = engine.fit(model, history)
        means.append(posterior.mean())
        variances.append(posterior.variance())

    if not any(math.isfinite(e) for e in log_evidence):
        raise DegeneratePosteriorError(
            "history has zero likelihood under every candidate slope"
        )
    probabilities = softmax(jnp.asarray(log_evidence))
    means = jnp.asarray(means)
    variances = jnp.asarray(variances)

    beta_mean = float(jnp.sum(probabilities * betas))
    beta_var = float(jnp.sum(probabilities * (betas - beta_mean) ** 2))
    threshold_mean = float(jnp.sum(probabilities * means))
    threshold_var = float(
        jnp.sum(probabilities * (variances + means**2)) - threshold_mean**2
    )
    return BetaAnalysis(
        betas=betas,
        probabilities=probabilities,
        beta_mean=beta_mean,
        beta_sd=math.sqrt(max(beta_var, 0.0)),
        threshold_mean=threshold_mean,
        threshold_sd=math.sqrt(max(threshold_var, 0.0)),
    )
