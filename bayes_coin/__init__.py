"""Bayesian updating of a coin's bias, in closed form and with NumPyro MCMC."""

from .beta_bernoulli import (
    BetaParameters,
    DomainError,
    InvalidParameter,
    credible_interval,
    density,
    mean,
    posterior_table,
    update,
    variance,
)
from .observations import as_flips, simulate_flips

__version__ = "0.1.0"
