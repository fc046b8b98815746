"""
Sequential Beta-Bernoulli Updating
==================================

Closed-form Bayesian updating of a coin's bias p.

The Beta distribution is the conjugate prior of the Bernoulli likelihood, so
after observing the first i flips the posterior is again a Beta:

    alpha_i = alpha_0 + heads(i)
    beta_i  = beta_0  + tails(i)

No sampling is involved and the result is exact. The whole sequence of
posteriors is a prefix sum over the 0/1-encoded flips.
"""

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy.stats import beta as beta_dist


class InvalidParameter(ValueError):
    """Raised for non-positive Beta parameters or malformed observations."""


class DomainError(ValueError):
    """Raised when a density is requested outside [0, 1]."""


@dataclass(frozen=True)
class BetaParameters:
    """
    Shape parameters of a Beta distribution over the probability of heads.

    Parameters
    ----------
    alpha : float
        Prior pseudo-count of heads plus observed heads. Must be > 0.
    beta : float
        Prior pseudo-count of tails plus observed tails. Must be > 0.
    """

    alpha: float
    beta: float

    def __post_init__(self):
        for name in ("alpha", "beta"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
                raise InvalidParameter(f"{name} must be a real number, got {value!r}")
            # ints are always finite
            if isinstance(value, (float, np.floating)) and not math.isfinite(value):
                raise InvalidParameter(f"{name} must be a finite number > 0, got {value!r}")
            if value <= 0:
                raise InvalidParameter(f"{name} must be a finite number > 0, got {value!r}")

    def __iter__(self):
        yield self.alpha
        yield self.beta


def as_beta(params):
    if isinstance(params, BetaParameters):
        return params
    try:
        a, b = params
    except (TypeError, ValueError):
        raise InvalidParameter(f"expected BetaParameters or an (alpha, beta) pair, got {params!r}") from None
    return BetaParameters(a, b)


def check_positive(name, value, integer=False):
    if integer and int(value) != value:
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    if not value > 0:
        raise InvalidParameter(f"{name} must be > 0, got {value!r}")


def check_non_negative_int(name, value):
    if int(value) != value or value < 0:
        raise InvalidParameter(f"{name} must be a non-negative integer, got {value!r}")


def encode_flips(observations):
    """Encode coin flips as a 0/1 int array, rejecting anything that is not binary."""
    flips = np.asarray(observations)
    if flips.size == 0:
        return np.zeros(0, dtype=np.int64)
    if flips.ndim != 1:
        raise InvalidParameter(f"observations must be one-dimensional, got shape {flips.shape}")
    if flips.dtype == bool:
        return flips.astype(np.int64)
    if not np.issubdtype(flips.dtype, np.number) or not np.all((flips == 0) | (flips == 1)):
        raise InvalidParameter("observations must be 0/1 or boolean values")
    return flips.astype(np.int64)


def update(prior, observations):
    """
    Posterior beliefs after each prefix of the observations.

    Element 0 is the prior, element i the posterior after the first i flips.
    """
    prior = as_beta(prior)
    flips = encode_flips(observations)

    heads = np.concatenate(([0], np.cumsum(flips)))
    seen = np.arange(len(heads))
    tails = seen - heads

    return [
        BetaParameters(prior.alpha + int(h), prior.beta + int(t))
        for h, t in zip(heads, tails)
    ]


def mean(b):
    """Posterior mean of p."""
    b = as_beta(b)
    return b.alpha / (b.alpha + b.beta)


def variance(b):
    """Posterior variance of p."""
    b = as_beta(b)
    total = b.alpha + b.beta
    return (b.alpha * b.beta) / (total ** 2 * (total + 1))


def density(b, x):
    """
    Beta(alpha, beta) pdf evaluated at x.

    A scalar x returns a float, an array returns an array of the same shape.
    Raises DomainError if any x lies outside [0, 1].
    """
    b = as_beta(b)
    try:
        values = np.asarray(x, dtype=float)
    except (TypeError, ValueError):
        raise DomainError(f"density needs numbers in [0, 1], got {x!r}") from None
    if not np.all((values >= 0.0) & (values <= 1.0)):
        raise DomainError(f"density is only defined on [0, 1], got {x!r}")
    pdf = beta_dist.pdf(values, b.alpha, b.beta)
    if pdf.ndim == 0:
        return float(pdf)
    return pdf


def credible_interval(b, mass=0.95):
    """Equal-tailed credible interval holding ``mass`` of the posterior."""
    b = as_beta(b)
    if not 0.0 < mass < 1.0:
        raise InvalidParameter(f"mass must lie in (0, 1), got {mass!r}")
    tail = (1.0 - mass) / 2.0
    lower = beta_dist.ppf(tail, b.alpha, b.beta)
    upper = beta_dist.ppf(1.0 - tail, b.alpha, b.beta)
    return float(lower), float(upper)


def posterior_table(prior, observations, mass=0.95):
    """
    One row per prefix length with the posterior and its summaries.

    Columns: n, heads, tails, alpha, beta, mean, variance, lower, upper.
    """
    if not 0.0 < mass < 1.0:
        raise InvalidParameter(f"mass must lie in (0, 1), got {mass!r}")
    prior = as_beta(prior)
    posteriors = update(prior, observations)

    alphas = np.array([p.alpha for p in posteriors], dtype=float)
    betas = np.array([p.beta for p in posteriors], dtype=float)
    totals = alphas + betas
    tail = (1.0 - mass) / 2.0

    table = pd.DataFrame({
        "n": np.arange(len(posteriors)),
        "heads": (alphas - prior.alpha).round().astype(int),
        "tails": (betas - prior.beta).round().astype(int),
        "alpha": alphas,
        "beta": betas,
        "mean": alphas / totals,
        "variance": (alphas * betas) / (totals ** 2 * (totals + 1)),
        "lower": beta_dist.ppf(tail, alphas, betas),
        "upper": beta_dist.ppf(1.0 - tail, alphas, betas),
    })
    return table
