"""
Settings for the coin-flip tutorial.

Module-level constants are the defaults; ``Settings`` bundles them so the
command line can override individual values.
"""

from dataclasses import dataclass, field, fields, replace

from .beta_bernoulli import BetaParameters, InvalidParameter, check_non_negative_int, check_positive

# --- Data ---
TRUE_P = 0.70
NUM_FLIPS = 500
FLIP_SEED = 0

# --- Prior (uniform) ---
PRIOR_ALPHA = 1
PRIOR_BETA = 1

# --- Sampler ---
SAMPLER_SEED = 1
KERNELS = ("hmc", "nuts")
KERNEL = "hmc"
NUM_WARMUP = 200
NUM_SAMPLES = 500
STEP_SIZE = 0.05
NUM_LEAPFROG_STEPS = 10

# --- Plots ---
GRID_POINTS = 2050
CREDIBLE_MASS = 0.95
ANIMATION_START = 50
ANIMATION_STEP = 50
ANIMATION_FPS = 10
BETA_FAMILY = [
    (1, 1),
    (2, 2),
    (5, 5),
    (10, 10),
    (20, 20),
    (50, 50),
    (500, 500),
]

OUTPUT_DIR = "output"


@dataclass(frozen=True)
class Settings:
    true_p: float = TRUE_P
    num_flips: int = NUM_FLIPS
    flip_seed: int = FLIP_SEED
    prior_alpha: float = PRIOR_ALPHA
    prior_beta: float = PRIOR_BETA
    sampler_seed: int = SAMPLER_SEED
    kernel: str = KERNEL
    num_warmup: int = NUM_WARMUP
    num_samples: int = NUM_SAMPLES
    step_size: float = STEP_SIZE
    num_steps: int = NUM_LEAPFROG_STEPS
    grid_points: int = GRID_POINTS
    credible_mass: float = CREDIBLE_MASS
    animation_start: int = ANIMATION_START
    animation_step: int = ANIMATION_STEP
    animation_fps: int = ANIMATION_FPS
    beta_family: tuple = field(default_factory=lambda: tuple(BETA_FAMILY))
    output_dir: str = OUTPUT_DIR

    def __post_init__(self):
        if not 0.0 <= self.true_p <= 1.0:
            raise InvalidParameter(f"true_p must lie in [0, 1], got {self.true_p!r}")
        if self.num_flips < 0:
            raise InvalidParameter(f"num_flips must be >= 0, got {self.num_flips!r}")
        if not 0.0 < self.credible_mass < 1.0:
            raise InvalidParameter(f"credible_mass must lie in (0, 1), got {self.credible_mass!r}")
        if self.animation_start < 1 or self.animation_step < 1:
            raise InvalidParameter("animation_start and animation_step must be >= 1")
        check_positive("num_samples", self.num_samples, integer=True)
        check_non_negative_int("num_warmup", self.num_warmup)
        check_positive("step_size", self.step_size)
        check_positive("num_steps", self.num_steps, integer=True)
        if self.kernel not in KERNELS:
            raise InvalidParameter(f"kernel must be one of {KERNELS}, got {self.kernel!r}")
        BetaParameters(self.prior_alpha, self.prior_beta)

    @property
    def prior(self):
        return BetaParameters(self.prior_alpha, self.prior_beta)

    def with_overrides(self, **overrides):
        """Return a copy with the given fields replaced; ``None`` values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise TypeError(f"unknown settings: {', '.join(unknown)}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
