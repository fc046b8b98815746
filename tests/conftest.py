import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from bayes_coin.observations import simulate_flips


@pytest.fixture
def flips():
    """200 reproducible flips of a coin with p = 0.7."""
    return simulate_flips(0.7, 200, seed=0)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
