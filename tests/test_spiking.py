"""
Unit tests for the vectorized tick engine.
"""

import numpy as np
import pytest

from babybrain import BrainConfig, Modulator, Neuron, Neurotransmitter, Synapse
from babybrain.spiking import SpikingState


def make_state(potentials, edges, config, refractory=None):
    refractory = refractory or [0] * len(potentials)
    neurons = [Neuron(v=v, refractory=r) for v, r in zip(potentials, refractory)]
    words = [f"w{i}" for i in range(len(neurons))]
    return SpikingState(words, neurons, edges, config, Modulator())


class TestIntegration:
    """Test the integration phase."""

    def test_proxy_reads_potential(self, quiet_config):
        """Test that only neighbours above 0.9 contribute input."""
        state = make_state([1.5, 0.0], [(0, 1, Synapse(0.5))], quiet_config)

        assert np.allclose(state.synaptic_input(), [0.0, 0.5])

    def test_snapshot_read(self, quiet_config):
        """Test that a neuron raised above 0.9 this tick does not drive others this tick."""
        edges = [(0, 1, Synapse(0.6)), (1, 2, Synapse(0.6))]
        state = make_state([1.5, 0.5, 0.0], edges, quiet_config)
        state.integrate()

        assert state.v[1] > 0.9
        assert state.v[2] == 0.0

    def test_inhibition_floors_at_zero(self, quiet_config):
        edges = [(0, 1, Synapse(2.0, Neurotransmitter.GABA))]
        state = make_state([1.5, 0.1], edges, quiet_config)
        state.integrate()

        assert state.v[1] == 0.0

    def test_dopamine_synapse_is_silent(self, quiet_config):
        edges = [(0, 1, Synapse(2.0, Neurotransmitter.DOPAMINE))]
        state = make_state([1.5, 0.0], edges, quiet_config)

        assert np.allclose(state.synaptic_input(), 0.0)

    def test_refractory_exclusion(self, quiet_config):
        """Test that a refractory neuron neither integrates nor fires."""
        edges = [(0, 1, Synapse(1.0))]
        state = make_state([1.5, 5.0], edges, quiet_config, refractory=[0, 1])
        state.integrate()

        assert state.v[1] == 5.0
        fired = state.fire(0)
        assert 1 not in fired
        assert 0 in fired


class TestFiring:
    """Test fire / countdown / stabilize."""

    def test_fire_resets(self, quiet_config):
        state = make_state([1.2, 0.5], [], quiet_config)
        fired = state.fire(0)

        assert list(fired) == [0]
        assert state.v[0] == 0.0
        assert state.refractory[0] == quiet_config.refractory_period
        assert state.fired_count[0] == 1

    def test_countdown(self, quiet_config):
        state = make_state([0.0, 0.0], [], quiet_config, refractory=[2, 0])
        state.countdown()

        assert list(state.refractory) == [1, 0]

    def test_ceiling(self, quiet_config):
        state = make_state([3.0], [], quiet_config, refractory=[1])
        state.stabilize(0, np.array([], dtype=np.int64))

        assert state.v[0] == quiet_config.potential_ceiling

    def test_cofire_reinforcement(self):
        config = BrainConfig(oscillation_amplitude=0.0, threshold_oscillation=0.0)
        syn = Synapse(0.5)
        state = make_state([2.0, 2.0], [(0, 1, syn)], config)
        state.step(0)

        # lr_exc * dopamine = 0.05 * 0.5
        assert syn.strength == pytest.approx(0.525)
        assert state.weight[0] == pytest.approx(0.525)

    def test_cofire_reinforcement_disabled(self, quiet_config):
        syn = Synapse(0.5)
        state = make_state([2.0, 2.0], [(0, 1, syn)], quiet_config)
        state.step(0)

        assert syn.strength == 0.5

    def test_circadian_scales_hormones(self):
        config = BrainConfig(circadian=True)
        state = make_state([0.0], [], config)
        state.stabilize(0, np.array([], dtype=np.int64))

        # sin(0) -> factor 0.5
        assert state.modulator.dopamine == pytest.approx(0.25)


class TestRun:
    """Test the tick loop."""

    def test_quiescence(self, quiet_config):
        """Test that two silent ticks stop the loop."""
        state = make_state([0.0, 0.0], [(0, 1, Synapse(0.5))], quiet_config)

        assert state.run(10) == [set(), set()]

    def test_zero_ticks(self, quiet_config):
        assert make_state([0.0], [], quiet_config).run(0) == []

    def test_history_bounded(self, quiet_config):
        state = make_state([5.0, 5.0], [(0, 1, Synapse(3.0))], quiet_config)

        assert len(state.run(3)) <= 3

    def test_write_back(self, quiet_config):
        state = make_state([1.2], [], quiet_config)
        state.step(0)
        state.write_back()

        neuron = state.neurons[0]
        assert neuron.v == 0.0
        assert neuron.fired_count == 1
        assert neuron.refractory == quiet_config.refractory_period - 1
