"""
psyquest
========

Adaptive threshold estimation with the QUEST staircase.

This package implements the QUEST procedure (Watson & Pelli, 1983) used by a
Pong-like contrast-detection game: before each trial the estimator recommends
a stimulus intensity (log10 contrast), and after each hit or miss it updates
a discrete Bayesian posterior over the player's detection threshold. At the
end of a session the posterior mean and standard deviation give the threshold
estimate and its uncertainty.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. QuestParams (model/params.py):
   - Validated parameter set: prior guess and sd, target performance,
     Weibull slope, lapse and guess rates, grid step and half-width.

2. QuestModel (model/quest.py):
   - Discrete support of candidate thresholds centred on the prior guess.
   - Gaussian prior over that support (model/prior.py).
   - Weibull psychometric function (model/psychometric.py).

3. GridPosterior (posterior/posterior.py):
   - Normalized masses over the support; mean, sd, quantiles, mode.

4. QuestEstimator (estimator/quest.py):
   - create -> recommend_intensity -> update -> mean / sd.

5. ExperimentSession (session/experiment_session.py):
   - The trial-loop contract: contrast conversion, 20-trial budget,
     per-trial records and the results payload.

Unified import style
--------------------
Top-level:
  from psyquest import QuestEstimator, QuestParams, ExperimentSession

Subpackages:
  from psyquest.model import QuestModel, QuestParams, GaussianPrior, weibull
  from psyquest.posterior import GridPosterior, entropy, credible_interval
  from psyquest.inference import GridInference
  from psyquest.trial_placement import QuantilePlacement
  from psyquest.data import TrialOutcome, TrialHistory
  from psyquest.utils import simulate_session, beta_analysis, threshold_summary

Data flow
---------
- UI/physics events produce TrialOutcome(intensity, response) values.
- QuestEstimator.update(outcome) multiplies the posterior by
      p_hit(t)      if response == 1
      1 - p_hit(t)  if response == 0
  for every candidate threshold t, then renormalizes.
- GridInference.fit(model, history) recomputes the same posterior in batch.

Precision
---------
Importing psyquest enables JAX double precision for the whole process
(``jax.config.update("jax_enable_x64", True)``). Posterior masses on the
default grid span roughly 1e-14 to 1 and are renormalized every trial, which
float32 does not resolve. Code that needs float32 elsewhere in the same
process should pass explicit ``dtype=jnp.float32``.

----------------------------------------------------------------------
"""

import jax

# Grid posteriors are renormalized every trial; keep them in double precision.
jax.config.update("jax_enable_x64", True)

# Re-export subpackages for unified import style (e.g., psyquest.model)
from . import data as data  # noqa: E402
from . import estimator as estimator  # noqa: E402
from . import inference as inference  # noqa: E402
from . import model as model  # noqa: E402
from . import posterior as posterior  # noqa: E402
from . import session as session  # noqa: E402
from . import trial_placement as trial_placement  # noqa: E402
from . import utils as utils  # noqa: E402
from .data.dataset import TrialHistory, TrialOutcome  # noqa: E402

# Estimator
from .errors import (  # noqa: E402
    DegeneratePosteriorError,
    DegeneratePosteriorWarning,
    InvalidParameterError,
)
from .estimator.quest import EstimatorState, QuestEstimator  # noqa: E402
from .inference.grid import GridInference  # noqa: E402
from .model.params import QuestParams  # noqa: E402
from .model.prior import GaussianPrior  # noqa: E402
from .model.quest import QuestModel  # noqa: E402

# Posterior
from .posterior.posterior import GridPosterior  # noqa: E402

# Experiment orchestration
from .session.experiment_session import ExperimentSession, SessionConfig  # noqa: E402
from .session.summary import SessionSummary  # noqa: E402
from .trial_placement.quantile import QuantilePlacement  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    # Core model
    "QuestParams",
    "QuestModel",
    "GaussianPrior",
    # Estimator
    "QuestEstimator",
    "EstimatorState",
    "QuantilePlacement",
    "GridInference",
    # Posterior
    "GridPosterior",
    # Errors
    "InvalidParameterError",
    "DegeneratePosteriorError",
    "DegeneratePosteriorWarning",
    # Session orchestration
    "ExperimentSession",
    "SessionConfig",
    "SessionSummary",
    # Data handling
    "TrialOutcome",
    "TrialHistory",
    # Subpackages
    "model",
    "estimator",
    "inference",
    "posterior",
    "trial_placement",
    "utils",
    "data",
    "session",
]
