"""Shared fixtures for the baby brain tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from babybrain import Brain, BrainConfig, BrainPersistence, Conversation


@pytest.fixture
def brain():
    """Fresh brain with the seed vocabulary and a fixed babble seed."""
    return Brain(seed=0)


@pytest.fixture
def bare_brain():
    """Brain without the seed vocabulary."""
    return Brain(seed=0, plant_seed_vocabulary=False)


@pytest.fixture
def quiet_config():
    """Config without oscillation or co-fire reinforcement, for exact arithmetic."""
    return BrainConfig(
        oscillation_amplitude=0.0,
        threshold_oscillation=0.0,
        cofire_reinforcement=False,
    )


@pytest.fixture
def persistence(tmp_path):
    return BrainPersistence(str(tmp_path / "baby.brain"))


@pytest.fixture
def conversation(brain):
    return Conversation(brain=brain)
