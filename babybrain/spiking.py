"""
Tick engine for the word network

Runs the leaky-integrate-and-fire simulation on numpy arrays gathered from
the neuron arena. Each tick:

1. integrate - every non-refractory neuron leaks and sums
   proxy(neighbour) * signed_weight over its synapses, where the proxy is
   1 when the neighbour's potential is above 0.9. All inputs come from the
   potentials as they were at the start of the tick.
2. fire - non-refractory neurons above threshold spike, reset to 0 and go
   refractory.
3. countdown - refractory counters tick down.
4. stabilize - ceiling clamp, co-fire reinforcement, slow oscillation and
   (optionally) circadian hormone scaling.

Key insight: the proxy reads raw potential, not this tick's spikes, so a
neuron that just fired (v reset to 0) stops driving its neighbours.
"""

import logging
import math
from typing import List, Sequence, Set, TYPE_CHECKING

import numpy as np

from .neuron import Neuron
from .synapse import Synapse

if TYPE_CHECKING:
    from .config import BrainConfig
    from .modulator import Modulator

logger = logging.getLogger(__name__)


class SpikingState:
    """
    Array view of the network for one run of the tick loop.

    The neuron set is fixed for the lifetime of a state: neurons are created
    before the run and nothing is added during it.
    """

    def __init__(
        self,
        words: Sequence[str],
        neurons: Sequence[Neuron],
        edges: Sequence[tuple],
        config: 'BrainConfig',
        modulator: 'Modulator'
    ):
        """
        Args:
            words: Word for each handle
            neurons: Neuron for each handle
            edges: (handle_a, handle_b, Synapse) triples
            config: Brain configuration
            modulator: Shared hormone state (read, and scaled if circadian)
        """
        self.words = list(words)
        self.neurons = list(neurons)
        self.config = config
        self.modulator = modulator

        self.v = np.array([n.v for n in self.neurons], dtype=np.float64)
        self.threshold = np.array([n.threshold for n in self.neurons], dtype=np.float64)
        self.leak = np.array([n.leak for n in self.neurons], dtype=np.float64)
        self.refractory = np.array([n.refractory for n in self.neurons], dtype=np.int64)
        self.fired_count = np.array([n.fired_count for n in self.neurons], dtype=np.int64)

        self.synapses: List[Synapse] = [syn for _, _, syn in edges]
        self.src = np.array([a for a, _, _ in edges], dtype=np.int64)
        self.dst = np.array([b for _, b, _ in edges], dtype=np.int64)
        self.weight = np.array([syn.signed_weight for syn in self.synapses], dtype=np.float64)

    @property
    def size(self) -> int:
        return len(self.neurons)

    # ------------------------------------------------------------------
    # Tick phases
    # ------------------------------------------------------------------

    def synaptic_input(self) -> np.ndarray:
        """Summed input per neuron from the current potentials."""
        n = self.size
        if n == 0 or len(self.weight) == 0:
            return np.zeros(n)
        proxy = (self.v > self.config.proxy_threshold).astype(np.float64)
        into_src = np.bincount(self.src, weights=self.weight * proxy[self.dst], minlength=n)
        into_dst = np.bincount(self.dst, weights=self.weight * proxy[self.src], minlength=n)
        return into_src + into_dst

    def integrate(self) -> None:
        inputs = self.synaptic_input()
        active = self.refractory == 0
        updated = np.maximum(self.v * (1.0 - self.leak) + inputs, 0.0)
        self.v = np.where(active, updated, self.v)

    def fire(self, tick: int) -> np.ndarray:
        """Spike, reset and go refractory. Returns the handles that fired."""
        offset = self.config.threshold_oscillation * math.sin(self.config.oscillation_frequency * tick)
        mask = (self.refractory == 0) & (self.v > self.threshold + offset)
        self.v[mask] = 0.0
        self.refractory[mask] = self.config.refractory_period
        self.fired_count[mask] += 1
        return np.flatnonzero(mask)

    def countdown(self) -> None:
        self.refractory[self.refractory > 0] -= 1

    def stabilize(self, tick: int, fired: np.ndarray) -> None:
        cfg = self.config

        if cfg.potential_ceiling is not None:
            np.minimum(self.v, cfg.potential_ceiling, out=self.v)

        if cfg.cofire_reinforcement and len(fired) > 1 and len(self.weight):
            self._reinforce_cofired(fired)

        drive = cfg.oscillation_amplitude * math.sin(cfg.oscillation_frequency * tick)
        if drive:
            idle = self.refractory == 0
            self.v[idle] = np.maximum(self.v[idle] + drive, 0.0)

        if cfg.circadian:
            factor = (math.sin(tick / cfg.circadian_period) + 1.0) / 2.0
            self.modulator.apply_circadian(factor)

    def _reinforce_cofired(self, fired: np.ndarray) -> None:
        cfg = self.config
        fired_mask = np.zeros(self.size, dtype=bool)
        fired_mask[fired] = True
        both = np.flatnonzero(fired_mask[self.src] & fired_mask[self.dst])
        amount = cfg.lr_exc * max(self.modulator.dopamine, 0.1)
        for k in both:
            syn = self.synapses[k]
            syn.potentiate(amount)
            syn.decay_and_clamp(1.0, cfg.exc_max, cfg.inh_max)
            self.weight[k] = syn.signed_weight

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def step(self, tick: int) -> Set[str]:
        self.integrate()
        fired = self.fire(tick)
        self.countdown()
        self.stabilize(tick, fired)
        return {self.words[i] for i in fired}

    def run(self, max_ticks: int) -> List[Set[str]]:
        """
        Tick until max_ticks or until two consecutive ticks are silent.
        """
        history: List[Set[str]] = []
        previous_empty = False

        for tick in range(max_ticks):
            fired = self.step(tick)
            history.append(fired)
            logger.debug("Tick %d: fired=%s", tick, sorted(fired))

            if not fired and previous_empty:
                logger.debug("Quiescent, stopping early at tick %d", tick)
                break
            previous_empty = not fired

        return history

    def write_back(self) -> None:
        """Copy membrane state back into the Neuron objects."""
        for i, neuron in enumerate(self.neurons):
            neuron.v = float(self.v[i])
            neuron.refractory = int(self.refractory[i])
            neuron.fired_count = int(self.fired_count[i])
