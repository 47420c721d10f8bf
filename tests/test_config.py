"""
Unit tests for brain configuration.

Tests BrainConfig validation, presets and create_config.
"""

import pytest

from babybrain import BrainConfig, PRESETS, create_config
from babybrain.config import DEFAULT_SEED_VOCABULARY, HYPERPARAMETER_NAMES


class TestBrainConfig:
    """Test BrainConfig dataclass."""

    def test_defaults(self):
        """Test default hyperparameters."""
        config = BrainConfig()

        assert config.lr_exc == 0.05
        assert config.lr_inh == 0.03
        assert 0.0 < config.forget < 1.0
        assert config.seed_vocabulary == DEFAULT_SEED_VOCABULARY

    def test_forget_must_be_open_unit_interval(self):
        """Test that forget outside (0, 1) is rejected."""
        with pytest.raises(ValueError):
            BrainConfig(forget=1.0)
        with pytest.raises(ValueError):
            BrainConfig(forget=0.0)

    def test_leak_validated(self):
        with pytest.raises(ValueError):
            BrainConfig(leak=1.5)

    def test_negative_bounds_rejected(self):
        with pytest.raises(ValueError):
            BrainConfig(exc_max=-1.0)

    def test_seed_vocabulary_becomes_tuple(self):
        """Test that a list seed vocabulary is frozen to a tuple."""
        config = BrainConfig(seed_vocabulary=["a", "b"])

        assert config.seed_vocabulary == ("a", "b")

    def test_hyperparameters(self):
        """Test that exactly the five learning hyperparameters are exported."""
        hyper = BrainConfig().hyperparameters()

        assert tuple(hyper) == HYPERPARAMETER_NAMES

    def test_with_hyperparameters(self):
        config = BrainConfig(leak=0.1).with_hyperparameters({'lr_exc': 0.2})

        assert config.lr_exc == 0.2
        assert config.leak == 0.1

    def test_with_unknown_hyperparameter(self):
        with pytest.raises(ValueError):
            BrainConfig().with_hyperparameters({'leak': 0.2})


class TestCreateConfig:
    """Test presets and overrides."""

    @pytest.mark.parametrize("preset", sorted(PRESETS))
    def test_presets_build(self, preset):
        """Test that every preset produces a valid config."""
        assert isinstance(create_config(preset), BrainConfig)

    def test_overrides(self):
        config = create_config("calm", lr_exc=0.5)

        assert config.lr_exc == 0.5
        assert config.lr_inh == PRESETS["calm"]["lr_inh"]

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            create_config("teenager")

    def test_unknown_parameter(self):
        with pytest.raises(ValueError):
            create_config("baby", learning_rate=0.1)
