"""
MCMC posterior for the coin's bias
==================================

The same Beta-Bernoulli model as the closed-form updater, written as a
NumPyro program and sampled with Hamiltonian Monte Carlo. The sampler is
used as a black box: it takes the model, the flips, and three scalar
hyperparameters (number of samples, step size, number of leapfrog steps)
and returns draws of p. ``compare_to_posterior`` checks those draws
against the exact conjugate posterior.
"""

import logging
from dataclasses import dataclass

import numpy as np
import jax.numpy as jnp
import jax.random as random
import numpyro
import numpyro.distributions as dist
from numpyro.infer import HMC, MCMC, NUTS
from scipy.stats import beta as beta_dist
from scipy.stats import kstest

from .beta_bernoulli import (
    InvalidParameter,
    as_beta,
    check_non_negative_int,
    check_positive,
    encode_flips,
    mean,
    variance,
)
from .config import KERNELS

logger = logging.getLogger(__name__)


# --- NumPyro model ---
def coin_model(flips=None, prior_alpha=1.0, prior_beta=1.0):
    p = numpyro.sample("p", dist.Beta(prior_alpha, prior_beta))
    if flips is None or len(flips) == 0:
        return
    with numpyro.plate("data", len(flips)):
        numpyro.sample("obs", dist.Bernoulli(probs=p), obs=flips)


# --- Inference runner ---
def run_inference(
    flips,
    prior=(1.0, 1.0),
    num_samples=500,
    step_size=0.05,
    num_steps=10,
    num_warmup=200,
    seed=1,
    kernel="hmc",
    adapt_step_size=False,
):
    """Sample the posterior of p given the flips; returns the draws as a numpy array."""
    prior = as_beta(prior)
    flips = encode_flips(flips)
    check_positive("num_samples", num_samples, integer=True)
    check_positive("step_size", step_size)
    check_positive("num_steps", num_steps, integer=True)
    check_non_negative_int("num_warmup", num_warmup)
    if kernel not in KERNELS:
        raise InvalidParameter(f"kernel must be one of {KERNELS}, got {kernel!r}")

    if kernel == "nuts":
        transition = NUTS(coin_model, step_size=step_size, adapt_step_size=adapt_step_size)
        trajectory = ""
    else:
        transition = HMC(coin_model, step_size=step_size, num_steps=int(num_steps), adapt_step_size=adapt_step_size)
        trajectory = f", num_steps={int(num_steps)}"

    logger.info(
        "Running %s on %d flips: %d warmup, %d samples, step_size=%g%s",
        kernel.upper(), len(flips), num_warmup, num_samples, step_size, trajectory,
    )
    mcmc = MCMC(transition, num_warmup=int(num_warmup), num_samples=int(num_samples), progress_bar=False)
    mcmc.run(
        random.PRNGKey(seed),
        flips=jnp.asarray(flips.astype(np.int32)),
        prior_alpha=float(prior.alpha),
        prior_beta=float(prior.beta),
    )
    samples = np.asarray(mcmc.get_samples()["p"])
    logger.debug("Sampled p: mean=%.4f std=%.4f", samples.mean(), samples.std())
    return samples


@dataclass(frozen=True)
class SampleComparison:
    """Sampler output measured against the exact Beta posterior."""

    num_samples: int
    sample_mean: float
    sample_variance: float
    exact_mean: float
    exact_variance: float
    ks_statistic: float
    ks_pvalue: float

    @property
    def mean_error(self):
        return abs(self.sample_mean - self.exact_mean)


def compare_to_posterior(samples, posterior):
    """Compare posterior draws of p with the closed-form Beta posterior."""
    posterior = as_beta(posterior)
    samples = np.asarray(samples, dtype=float).ravel()
    if samples.size == 0:
        raise InvalidParameter("samples must not be empty")

    ks = kstest(samples, beta_dist(posterior.alpha, posterior.beta).cdf)
    return SampleComparison(
        num_samples=int(samples.size),
        sample_mean=float(np.mean(samples)),
        sample_variance=float(np.var(samples)),
        exact_mean=mean(posterior),
        exact_variance=variance(posterior),
        ks_statistic=float(ks.statistic),
        ks_pvalue=float(ks.pvalue),
    )
