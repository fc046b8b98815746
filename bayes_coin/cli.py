"""
Coin-Flip Tutorial Runner.

1. Simulate flips of a biased coin
2. Update a Beta prior in closed form after every flip
3. Sample the same posterior with NumPyro MCMC and compare
4. Save plots (Beta family, sample histogram, optional animation)
"""
import argparse
import functools
import logging
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .beta_bernoulli import DomainError, InvalidParameter, credible_interval, mean, posterior_table, update, variance
from .config import KERNELS, Settings
from .logging_config import setup_logging
from .observations import simulate_flips
from .plotting import animate_posterior, plot_beta_family, save_sample_histogram
from .sampler import compare_to_posterior, run_inference

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="bayes-coin",
        description="Bayesian updating of a coin's bias: closed form vs. MCMC",
    )
    parser.add_argument('--true-p', type=float, help="True probability of heads")
    parser.add_argument('--flips', dest='num_flips', type=int, help="Number of simulated flips")
    parser.add_argument('--alpha', dest='prior_alpha', type=float, help="Prior alpha")
    parser.add_argument('--beta', dest='prior_beta', type=float, help="Prior beta")
    parser.add_argument('--seed', dest='flip_seed', type=int, help="Seed for the simulated flips")
    parser.add_argument('--sampler-seed', type=int, help="Seed for the MCMC run")
    parser.add_argument('--num-samples', type=int, help="MCMC samples kept after warmup")
    parser.add_argument('--num-warmup', type=int, help="MCMC warmup iterations")
    parser.add_argument('--step-size', type=float, help="Leapfrog step size")
    parser.add_argument('--num-steps', type=int, help="Leapfrog steps per HMC trajectory")
    parser.add_argument('--kernel', choices=KERNELS, help="MCMC transition kernel")
    parser.add_argument('--output-dir', help="Directory for the CSV table and plots")
    parser.add_argument('--no-sampler', action='store_true', help="Skip the MCMC comparison")
    parser.add_argument('--animate', action='store_true', help="Also render the posterior animation GIF")
    parser.add_argument('--log-level', default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument('--log-file', help="Also write a rotating log file")
    return parser


def settings_from_args(args):
    return Settings().with_overrides(
        true_p=args.true_p,
        num_flips=args.num_flips,
        prior_alpha=args.prior_alpha,
        prior_beta=args.prior_beta,
        flip_seed=args.flip_seed,
        sampler_seed=args.sampler_seed,
        num_samples=args.num_samples,
        num_warmup=args.num_warmup,
        step_size=args.step_size,
        num_steps=args.num_steps,
        kernel=args.kernel,
        output_dir=args.output_dir,
    )


def run(settings, use_sampler=True, animate=False):
    """Run the tutorial with the given settings and return the paths written."""
    os.makedirs(settings.output_dir, exist_ok=True)
    written = {}

    # --- Data ---
    flips = simulate_flips(settings.true_p, settings.num_flips, seed=settings.flip_seed)
    logger.info("Simulated %d flips with true p = %.2f: %d heads, %d tails",
                len(flips), settings.true_p, int(flips.sum()), len(flips) - int(flips.sum()))

    # --- Closed-form updating ---
    prior = settings.prior
    posterior = update(prior, flips)[-1]
    lower, upper = credible_interval(posterior, settings.credible_mass)
    logger.info("Prior Beta(%g, %g): mean %.4f", prior.alpha, prior.beta, mean(prior))
    logger.info("Posterior Beta(%g, %g): mean %.4f, variance %.6f, %d%% interval [%.4f, %.4f]",
                posterior.alpha, posterior.beta, mean(posterior), variance(posterior),
                round(settings.credible_mass * 100), lower, upper)

    table = posterior_table(prior, flips, mass=settings.credible_mass)
    written["table"] = os.path.join(settings.output_dir, "posterior_table.csv")
    table.to_csv(written["table"], index=False)

    written["beta_family"] = os.path.join(settings.output_dir, "beta_distributions.png")
    plt.close(plot_beta_family(settings.beta_family, written["beta_family"]))

    # --- MCMC comparison ---
    sampler = None
    if use_sampler:
        sampler = functools.partial(
            run_inference,
            prior=prior,
            num_samples=settings.num_samples,
            step_size=settings.step_size,
            num_steps=settings.num_steps,
            num_warmup=settings.num_warmup,
            seed=settings.sampler_seed,
            kernel=settings.kernel,
        )
        samples = sampler(flips)
        comparison = compare_to_posterior(samples, posterior)
        logger.info("MCMC mean %.4f vs exact %.4f (abs error %.4f)",
                    comparison.sample_mean, comparison.exact_mean, comparison.mean_error)
        logger.info("MCMC variance %.6f vs exact %.6f; KS statistic %.4f (p = %.3f)",
                    comparison.sample_variance, comparison.exact_variance,
                    comparison.ks_statistic, comparison.ks_pvalue)

        written["histogram"] = os.path.join(settings.output_dir, "posterior_samples.svg")
        plt.close(save_sample_histogram(samples, posterior, written["histogram"], true_p=settings.true_p))

    # --- Animation ---
    if animate:
        written["animation"] = os.path.join(settings.output_dir, "posterior.gif")
        animate_posterior(
            flips, prior, written["animation"],
            start=settings.animation_start, step=settings.animation_step,
            true_p=settings.true_p, sampler=sampler, fps=settings.animation_fps,
            grid_points=settings.grid_points, mass=settings.credible_mass,
        )
        plt.close("all")

    return written


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        settings = settings_from_args(args)
        written = run(settings, use_sampler=not args.no_sampler, animate=args.animate)
    except (InvalidParameter, DomainError) as e:
        logger.error("Error: %s", e)
        return 2

    for name, path in written.items():
        logger.info("Wrote %s: %s", name, path)
    return 0
