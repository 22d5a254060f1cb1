"""
errors.py
---------

Exception and warning types raised by psyquest.

- InvalidParameterError: bad estimator configuration (fatal at creation).
- DegeneratePosteriorError: the posterior normalizer underflowed during an
  update and the estimator was asked to raise instead of flooring.
- DegeneratePosteriorWarning: the same condition, recovered by flooring the
  likelihood and renormalizing.
"""


class InvalidParameterError(ValueError):
    """
    Raised when a QUEST parameter set violates its constraints.

    Raised before any estimator state is built, so a failed creation never
    leaves a partially initialized object behind.
    """


class DegeneratePosteriorError(ArithmeticError):
    """
    Raised when a Bayesian update drives every posterior mass to zero.

    Only raised with ``on_degenerate="raise"``. The estimator keeps its
    previous posterior, so the caller may skip the trial and continue.
    """


class DegeneratePosteriorWarning(RuntimeWarning):
    """Emitted when an update was recovered by flooring the likelihood."""
