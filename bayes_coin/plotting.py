"""
Plots for the coin-flip tutorial
================================

1. Beta densities for increasing pseudo-counts
2. Prior vs posterior for a given number of flips
3. Histogram of sampler draws against the exact posterior (SVG)
4. Animated posterior as more flips arrive (GIF)
"""

import logging

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.animation as animation
from scipy.stats import gaussian_kde

from . import config
from .beta_bernoulli import as_beta, credible_interval, density, encode_flips, mean, update

logger = logging.getLogger(__name__)


def _grid(grid_points):
    return np.linspace(0, 1, grid_points)


def _finite_max(*curves):
    peaks = [np.max(y[np.isfinite(y)]) for y in curves if np.any(np.isfinite(y))]
    return max(peaks) if peaks else 1.0


def plot_beta_family(params=None, path=None, grid_points=500):
    """
    Overlay Beta densities for several (alpha, beta) pairs.

    Increasing both parameters together keeps the mean and shrinks the variance.
    """
    if params is None:
        params = config.BETA_FAMILY
    x = _grid(grid_points)

    fig, ax = plt.subplots(figsize=(8, 5))
    for a, b in params:
        y = density((a, b), x)
        ax.plot(x, y, label=f"Beta({a},{b})")

    ax.set_title("Beta distributions: Increasing parameters together decrease variance", pad=20)
    ax.set_xlabel("Probability of heads (p)")
    ax.set_ylabel("Density")
    ax.legend()
    ax.grid(True, alpha=0.3)

    if path is not None:
        fig.savefig(path, dpi=300)
        logger.info("Saved Beta family plot to %s", path)
    return fig


def draw_posterior(ax, prior, posterior, n, x=None, true_p=None, samples=None,
                   mass=config.CREDIBLE_MASS, ylim=None):
    """
    Draw prior and posterior of p after ``n`` flips onto ``ax``.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Axes to draw on. It is cleared first.
    prior, posterior : BetaParameters or (alpha, beta)
        Belief before any flip and after ``n`` flips.
    n : int
        Number of flips the posterior is based on.
    x : array-like, optional
        Grid on [0, 1]. Defaults to ``config.GRID_POINTS`` points.
    true_p : float, optional
        True probability of heads, drawn as a reference line.
    samples : array-like, optional
        Sampler draws of p, shown as a kernel density estimate.
    mass : float
        Probability mass of the credible intervals in the legend.
    ylim : float, optional
        Upper y-limit; chosen from the curves when omitted.
    """
    prior = as_beta(prior)
    posterior = as_beta(posterior)
    if x is None:
        x = _grid(config.GRID_POINTS)

    ax.clear()

    # --- Posterior (exact) ---
    y_post = density(posterior, x)
    ax.fill_between(x, y_post, alpha=0.5, color='skyblue', label="Posterior Distribution (Beta)")
    ax.plot(x, y_post, color='blue')
    curves = [y_post]

    # --- Posterior KDE of sampler draws ---
    if samples is not None and len(samples) > 1 and np.std(samples) > 0:
        y_kde = gaussian_kde(np.asarray(samples, dtype=float))(x)
        ax.plot(x, y_kde, color='green', linestyle='-.', label="Posterior Samples (KDE)")
        curves.append(y_kde)

    # --- Prior PDF ---
    y_prior = density(prior, x)
    ax.fill_between(x, y_prior, alpha=0.3, color='orange', label="Prior Distribution (Beta)")
    ax.plot(x, y_prior, 'orange', linestyle='--')
    curves.append(y_prior)

    # --- Vertical lines ---
    post_lower, post_upper = credible_interval(posterior, mass)
    prior_lower, prior_upper = credible_interval(prior, mass)
    if true_p is not None:
        ax.axvline(true_p, color='red', linestyle='--', label=f"True p = {true_p:.2f}")
    ax.axvline(mean(posterior), color='blue', linestyle='--',
               label=f"Posterior p = {mean(posterior):.2f} [{post_lower:.2f}, {post_upper:.2f}]")
    ax.axvline(mean(prior), color='gray', linestyle=':',
               label=f"Prior p = {mean(prior):.2f} [{prior_lower:.2f}, {prior_upper:.2f}]")

    # --- Axis titles and limits ---
    if ylim is None:
        ylim = 1.1 * _finite_max(*curves)
    ax.set_title(f"Posterior after {n} flips")
    ax.set_xlabel("p (coin bias)")
    ax.set_ylabel("Density")
    ax.set_xlim(0, 1)
    ax.set_ylim(0, ylim)
    ax.grid(True)
    ax.legend(loc="upper left")
    return ax


def save_sample_histogram(samples, posterior, path, bins=50, true_p=None):
    """Histogram of sampler draws with the exact posterior density on top."""
    posterior = as_beta(posterior)
    samples = np.asarray(samples, dtype=float)
    x = _grid(config.GRID_POINTS)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.hist(samples, bins=bins, density=True, alpha=0.5, color='skyblue', label=f"MCMC samples (n={len(samples)})")
    ax.plot(x, density(posterior, x), color='blue',
            label=f"Exact posterior Beta({posterior.alpha:g},{posterior.beta:g})")
    if true_p is not None:
        ax.axvline(true_p, color='red', linestyle='--', label=f"True p = {true_p:.2f}")

    ax.set_title("MCMC samples vs. closed-form posterior", pad=20)
    ax.set_xlabel("p (coin bias)")
    ax.set_ylabel("Density")
    ax.set_xlim(0, 1)
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.savefig(path)
    logger.info("Saved sample histogram to %s", path)
    return fig


def frame_sizes(num_flips, start=config.ANIMATION_START, step=config.ANIMATION_STEP):
    """Number of flips shown in each animation frame."""
    if num_flips <= start:
        return [num_flips]
    sizes = list(range(start, num_flips + 1, step))
    if sizes[-1] != num_flips:
        sizes.append(num_flips)
    return sizes


def animate_posterior(flips, prior, path=None, start=config.ANIMATION_START, step=config.ANIMATION_STEP,
                      true_p=None, sampler=None, fps=config.ANIMATION_FPS,
                      grid_points=config.GRID_POINTS, mass=config.CREDIBLE_MASS):
    """
    Animate the posterior of p as more flips are observed.

    Each frame shows the exact posterior after ``n`` flips, for
    ``n = start, start + step, ...``. If ``sampler`` is given it is called as
    ``sampler(flips[:n])`` for every frame and its draws are overlaid as a KDE.

    Returns the ``FuncAnimation``; it is also saved as a GIF when ``path`` is given.
    """
    prior = as_beta(prior)
    flips = encode_flips(flips)
    posteriors = update(prior, flips)
    sizes = frame_sizes(len(flips), start, step)
    x = _grid(grid_points)

    # Fixed y-limit so the frames are comparable; the last posterior is the sharpest
    ylim = 1.1 * _finite_max(density(posteriors[sizes[-1]], x), density(prior, x))

    fig, ax = plt.subplots(figsize=(8, 5))

    def init_plot():
        ax.set_title("Posterior Distribution of p")
        ax.set_xlabel("p (coin bias)")
        ax.set_ylabel("Density")
        ax.set_xlim(0, 1)
        ax.set_ylim(0, ylim)
        ax.grid(True)
        return []

    def animate(frame):
        n = sizes[frame]
        samples = sampler(flips[:n]) if sampler is not None else None
        draw_posterior(ax, prior, posteriors[n], n, x=x, true_p=true_p,
                       samples=samples, mass=mass, ylim=ylim)
        logger.debug("Rendered frame %d/%d (n=%d)", frame + 1, len(sizes), n)
        return []

    ani = animation.FuncAnimation(
        fig, animate, init_func=init_plot,
        frames=len(sizes),
        interval=20,
        blit=False,
        repeat=False
    )

    if path is not None:
        ani.save(path, writer="pillow", fps=fps)
        logger.info("Saved posterior animation (%d frames) to %s", len(sizes), path)
    return ani
