def test_top_level_api_imports():
    import psyquest as p

    for name in [
        "QuestParams",
        "QuestModel",
        "GaussianPrior",
        "QuestEstimator",
        "GridPosterior",
        "GridInference",
        "QuantilePlacement",
        "ExperimentSession",
        "SessionSummary",
        "TrialOutcome",
        "TrialHistory",
        "InvalidParameterError",
        "DegeneratePosteriorError",
    ]:
        assert hasattr(p, name)


def test_float64_enabled():
    import jax.numpy as jnp

    import psyquest  # noqa: F401

    assert jnp.zeros(1).dtype == jnp.float64


def test_version():
    import psyquest

    assert isinstance(psyquest.__version__, str)


def test_import_enables_double_precision_globally():
    import jax

    import psyquest

    assert jax.config.jax_enable_x64
    assert "jax_enable_x64" in psyquest.__doc__
