import logging

import numpy as np
import pytest

from bayes_coin.beta_bernoulli import BetaParameters, InvalidParameter, update
from bayes_coin.sampler import SampleComparison, compare_to_posterior, run_inference


@pytest.fixture(scope="module")
def coin():
    # 30 heads, 10 tails
    flips = np.array([1] * 30 + [0] * 10)
    posterior = update(BetaParameters(1, 1), flips)[-1]
    return flips, posterior


def test_hmc_matches_closed_form(coin):
    flips, posterior = coin
    samples = run_inference(flips, prior=(1, 1), num_samples=1000, num_warmup=300,
                            step_size=0.1, num_steps=10, seed=0)
    assert samples.shape == (1000,)
    assert np.all((samples > 0) & (samples < 1))

    comparison = compare_to_posterior(samples, posterior)
    assert comparison.exact_mean == pytest.approx(31 / 42)
    assert comparison.mean_error < 0.03
    assert comparison.sample_variance == pytest.approx(comparison.exact_variance, rel=0.5)


def test_nuts_matches_closed_form(coin):
    flips, posterior = coin
    samples = run_inference(flips, num_samples=500, num_warmup=200, kernel="nuts",
                            adapt_step_size=True, seed=2)
    assert compare_to_posterior(samples, posterior).mean_error < 0.03


def test_no_flips_samples_the_prior():
    samples = run_inference([], prior=(2, 2), num_samples=500, num_warmup=200, step_size=0.2, seed=0)
    assert samples.mean() == pytest.approx(0.5, abs=0.06)


@pytest.mark.parametrize("kwargs", [
    {"num_samples": 0},
    {"step_size": 0.0},
    {"num_steps": -1},
    {"num_warmup": -5},
    {"kernel": "gibbs"},
    {"prior": (0, 1)},
])
def test_invalid_hyperparameters(kwargs):
    with pytest.raises(InvalidParameter):
        run_inference([1, 0, 1], **kwargs)


def test_compare_exact_draws():
    posterior = BetaParameters(31, 11)
    rng = np.random.default_rng(0)
    samples = rng.beta(posterior.alpha, posterior.beta, size=5000)

    comparison = compare_to_posterior(samples, posterior)
    assert isinstance(comparison, SampleComparison)
    assert comparison.num_samples == 5000
    assert comparison.mean_error < 0.005
    assert comparison.ks_statistic < 0.03
    assert comparison.ks_pvalue > 0.01


def test_compare_detects_wrong_posterior():
    rng = np.random.default_rng(0)
    samples = rng.beta(5, 5, size=2000)
    comparison = compare_to_posterior(samples, BetaParameters(30, 10))
    assert comparison.mean_error > 0.2
    assert comparison.ks_pvalue < 1e-6


def test_compare_requires_samples():
    with pytest.raises(InvalidParameter):
        compare_to_posterior([], BetaParameters(1, 1))


def test_log_reports_leapfrog_steps_for_hmc_only(caplog):
    flips = [1, 0, 1, 1]
    with caplog.at_level(logging.INFO, logger="bayes_coin.sampler"):
        run_inference(flips, num_samples=20, num_warmup=10, num_steps=7, kernel="hmc")
        run_inference(flips, num_samples=20, num_warmup=10, num_steps=7, kernel="nuts")
    hmc_line, nuts_line = [r.getMessage() for r in caplog.records if r.getMessage().startswith("Running")]
    assert hmc_line.startswith("Running HMC") and "num_steps=7" in hmc_line
    assert nuts_line.startswith("Running NUTS") and "num_steps" not in nuts_line
