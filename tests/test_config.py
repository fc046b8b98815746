import pytest

from bayes_coin import config
from bayes_coin.beta_bernoulli import BetaParameters, InvalidParameter
from bayes_coin.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.true_p == config.TRUE_P
    assert settings.prior == BetaParameters(1, 1)
    assert settings.num_samples == config.NUM_SAMPLES
    assert settings.beta_family[0] == (1, 1)


def test_with_overrides_ignores_none():
    settings = Settings().with_overrides(true_p=0.4, num_flips=None, prior_alpha=2)
    assert settings.true_p == 0.4
    assert settings.num_flips == config.NUM_FLIPS
    assert settings.prior == BetaParameters(2, 1)


def test_with_overrides_unknown_field():
    with pytest.raises(TypeError):
        Settings().with_overrides(colour="red")


@pytest.mark.parametrize("overrides", [
    {"true_p": 1.2},
    {"num_flips": -1},
    {"prior_alpha": 0},
    {"prior_beta": -2},
    {"credible_mass": 1.0},
    {"animation_step": 0},
    {"num_samples": 0},
    {"num_warmup": -1},
    {"step_size": 0.0},
    {"num_steps": 2.5},
    {"kernel": "gibbs"},
])
def test_invalid_settings(overrides):
    with pytest.raises(InvalidParameter):
        Settings().with_overrides(**overrides)
