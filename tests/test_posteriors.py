"""
test_posteriors.py
-----------------

Tests for GridPosterior and posterior diagnostics.
"""

import math

import jax.numpy as jnp
import jax.random as jr
import pytest

from psyquest.errors import DegeneratePosteriorError
from psyquest.posterior import BasePosterior, GridPosterior, credible_interval, entropy


@pytest.fixture
def support():
    return jnp.linspace(-2.0, 0.0, 201)


@pytest.fixture
def uniform(support):
    return GridPosterior.from_weights(support, jnp.ones_like(support))


class TestGridPosterior:
    def test_is_base_posterior(self, uniform):
        assert isinstance(uniform, BasePosterior)

    def test_uniform_summaries(self, uniform):
        assert uniform.mean() == pytest.approx(-1.0, abs=1e-12)
        # sd of a discrete uniform over n points spaced h: h * sqrt((n^2 - 1) / 12)
        assert uniform.sd() == pytest.approx(0.01 * math.sqrt((201**2 - 1) / 12), rel=1e-9)
        assert uniform.total_mass() == pytest.approx(1.0, abs=1e-12)
        assert len(uniform) == 201

    def test_median_of_uniform(self, uniform):
        assert uniform.median() == pytest.approx(-1.0, abs=0.01)

    def test_quantiles_are_monotone(self, uniform):
        qs = [uniform.quantile(q) for q in (0.05, 0.25, 0.5, 0.75, 0.95)]
        assert qs == sorted(qs)

    def test_quantile_bounds(self, uniform):
        with pytest.raises(ValueError):
            uniform.quantile(1.5)
        with pytest.raises(ValueError):
            uniform.quantile(-0.1)

    def test_delta_posterior_quantile(self, support):
        """A posterior with all mass on one point must not divide by zero."""
        pmf = jnp.zeros_like(support).at[150].set(1.0)
        post = GridPosterior(support, pmf)
        assert post.quantile(0.5) == pytest.approx(float(support[150]))
        assert post.mode() == pytest.approx(float(support[150]))
        assert post.sd() == pytest.approx(0.0, abs=1e-12)
        assert math.isfinite(post.quantile(0.0))
        assert math.isfinite(post.quantile(1.0))

    def test_delta_on_first_point(self, support):
        pmf = jnp.zeros_like(support).at[0].set(1.0)
        post = GridPosterior(support, pmf)
        assert math.isfinite(post.quantile(0.5))

    def test_mode(self, support):
        weights = jnp.exp(-0.5 * ((support + 0.5) / 0.1) ** 2)
        post = GridPosterior.from_weights(support, weights)
        assert post.mode() == pytest.approx(-0.5, abs=1e-9)

    def test_condition_renormalizes(self, uniform, support):
        likelihood = jnp.where(support > -1.0, 0.9, 0.1)
        post = uniform.condition(likelihood)
        assert post.total_mass() == pytest.approx(1.0, abs=1e-12)
        assert post.mean() > uniform.mean()
        # the original is untouched
        assert uniform.mean() == pytest.approx(-1.0, abs=1e-12)

    def test_condition_zero_likelihood_raises(self, uniform, support):
        with pytest.raises(DegeneratePosteriorError):
            uniform.condition(jnp.zeros_like(support))

    def test_condition_log_matches_condition(self, uniform, support):
        likelihood = 0.2 + 0.6 * jnp.exp(-((support + 1.3) ** 2))
        a = uniform.condition(likelihood)
        b = uniform.condition_log(jnp.log(likelihood))
        assert jnp.allclose(a.pmf, b.pmf, atol=1e-15)

    def test_condition_log_survives_underflow(self, uniform, support):
        log_likelihood = jnp.full_like(support, -1e4).at[10].set(-9e3)
        post = uniform.condition_log(log_likelihood)
        assert post.total_mass() == pytest.approx(1.0, abs=1e-12)
        assert post.mode() == pytest.approx(float(support[10]))

    def test_from_log_weights_all_neg_inf_raises(self, support):
        with pytest.raises(DegeneratePosteriorError):
            GridPosterior.from_log_weights(support, jnp.full_like(support, -jnp.inf))

    def test_shape_mismatch(self, support):
        with pytest.raises(ValueError):
            GridPosterior(support, jnp.ones(3))

    def test_sample(self, support):
        pmf = jnp.zeros_like(support).at[42].set(1.0)
        samples = GridPosterior(support, pmf).sample(jr.PRNGKey(0), 5)
        assert samples.shape == (5,)
        assert jnp.allclose(samples, support[42])


class TestDiagnostics:
    def test_entropy_uniform(self, uniform):
        assert entropy(uniform) == pytest.approx(math.log(201), rel=1e-9)

    def test_entropy_delta(self, support):
        pmf = jnp.zeros_like(support).at[3].set(1.0)
        assert entropy(GridPosterior(support, pmf)) == pytest.approx(0.0, abs=1e-12)

    def test_credible_interval(self, uniform):
        lo, hi = credible_interval(uniform, 0.9)
        assert lo < uniform.median() < hi
        assert lo == pytest.approx(-1.9, abs=0.02)
        assert hi == pytest.approx(-0.1, abs=0.02)

    def test_credible_interval_level(self, uniform):
        with pytest.raises(ValueError):
            credible_interval(uniform, 1.0)
