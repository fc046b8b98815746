"""Coin-flip data: simulated Bernoulli draws and user-supplied sequences."""

import logging

import numpy as np
import jax.random as random
import numpyro.distributions as dist

from .beta_bernoulli import InvalidParameter, encode_flips

logger = logging.getLogger(__name__)

_FLIP_CHARS = {"H": 1, "T": 0, "1": 1, "0": 0}


def simulate_flips(true_p, num_flips, seed=0):
    """
    Draw independent coin flips with probability of heads ``true_p``.

    All flips are generated up front from a single PRNG key, so the first n
    flips of a longer run are exactly the dataset of a shorter one.

    Parameters
    ----------
    true_p : float
        Probability of heads, in [0, 1].
    num_flips : int
        Number of flips to draw.
    seed : int
        Seed for ``jax.random.PRNGKey``.

    Returns
    -------
    numpy.ndarray of int, shape (num_flips,)
        1 for heads, 0 for tails.
    """
    if not 0.0 <= true_p <= 1.0:
        raise InvalidParameter(f"true_p must lie in [0, 1], got {true_p!r}")
    if int(num_flips) != num_flips or num_flips < 0:
        raise InvalidParameter(f"num_flips must be a non-negative integer, got {num_flips!r}")

    rng_key = random.PRNGKey(seed)
    flips = dist.Bernoulli(probs=true_p).sample(rng_key, (int(num_flips),))
    flips = np.asarray(flips, dtype=np.int64)

    logger.debug("Simulated %d flips with p=%.2f (seed=%d): %d heads", len(flips), true_p, seed, flips.sum())
    return flips


def as_flips(values):
    """
    Encode user-supplied flips as a 0/1 integer array.

    Accepts booleans, 0/1 integers, or a string such as ``"HTTH"`` or
    ``"1001"`` (whitespace and commas are ignored).
    """
    if isinstance(values, str):
        chars = [c for c in values.upper() if not c.isspace() and c != ","]
        unknown = sorted(set(chars) - set(_FLIP_CHARS))
        if unknown:
            raise InvalidParameter(f"unrecognised flip characters: {''.join(unknown)}")
        return np.array([_FLIP_CHARS[c] for c in chars], dtype=np.int64)

    return encode_flips(values)
