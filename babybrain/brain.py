"""
Baby Brain - a self-modifying associative memory

Words become neurons, words heard together become synapses. Every
interaction runs a short spiking simulation, strengthens what co-fired
(Hebbian, scaled by dopamine), inhibits what co-fired under stress, and
then answers by walking the strongest associations of the excited words.

There is no pretraining: the brain starts with six words and learns
everything else online.

Cycle (driven by session.Conversation):
    update_modulator_from_feedback -> run_spiking -> learn_from_spikes
    -> generate_reply -> apply_feedback -> save
"""

import logging
import random
from itertools import combinations
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .config import BrainConfig, HYPERPARAMETER_NAMES
from .feedback import (
    FeedbackPolarity,
    classify_explicit,
    classify_implicit,
    detect_mood_cue,
    detect_neurotransmitter,
)
from .modulator import Modulator
from .neuron import Neuron
from .neurotransmitter import Molecule, Neurotransmitter
from .spiking import SpikingState
from .synapse import Synapse, SynapseKey, synapse_key
from .vocabulary import Vocabulary

logger = logging.getLogger(__name__)


BABBLE_PLACEHOLDER = "ba... ba..."
SNAPSHOT_VERSION = 1


class SnapshotError(ValueError):
    """A snapshot record is missing fields or holds invalid values."""


class Brain:
    """
    Sparse graph of word neurons driven by LIF ticks and Hebbian learning.

    Attributes:
        config: Hyperparameters and stabilization policies
        vocabulary: Word <-> handle interning table
        neurons: word -> Neuron (iterates in handle order)
        synapses: canonical (word, word) -> Synapse
        modulator: Global hormone levels
    """

    def __init__(
        self,
        config: Optional[BrainConfig] = None,
        seed: Optional[int] = None,
        plant_seed_vocabulary: bool = True
    ):
        self.config = config or BrainConfig()
        self.vocabulary = Vocabulary()
        self._arena: List[Neuron] = []
        self.neurons: Dict[str, Neuron] = {}
        self.synapses: Dict[SynapseKey, Synapse] = {}
        self._incident: Dict[str, Set[SynapseKey]] = {}
        self.modulator = Modulator()

        # Only used for babbling
        self.rng = random.Random(seed)

        self.total_ticks = 0
        self.last_history: List[Set[str]] = []

        if plant_seed_vocabulary:
            self._plant_seed_vocabulary()

    def _plant_seed_vocabulary(self) -> None:
        words = self.config.seed_vocabulary
        for word in words:
            self.ensure_neuron(word)
        for a, b in combinations(words, 2):
            if a != b:
                self.ensure_synapse(a, b)

    # =========================================================================
    # Hyperparameters
    # =========================================================================

    @property
    def lr_exc(self) -> float:
        return self.config.lr_exc

    @property
    def lr_inh(self) -> float:
        return self.config.lr_inh

    @property
    def exc_max(self) -> float:
        return self.config.exc_max

    @property
    def inh_max(self) -> float:
        return self.config.inh_max

    @property
    def forget(self) -> float:
        return self.config.forget

    # =========================================================================
    # Materialization
    # =========================================================================

    def ensure_neuron(self, word: str, composition: Sequence[Molecule] = ()) -> int:
        """
        Get-or-create the neuron for `word`; returns its handle.

        `composition` only applies when the neuron is created here.
        """
        if word in self.vocabulary:
            return self.vocabulary.handle(word)

        handle = self.vocabulary.intern(word)
        neuron = Neuron(
            threshold=self.config.initial_threshold,
            leak=self.config.leak,
            composition=list(composition),
        )
        self._arena.append(neuron)
        self.neurons[word] = neuron
        self._incident[word] = set()
        return handle

    def ensure_synapse(
        self,
        a: str,
        b: str,
        neurotransmitter: Neurotransmitter = Neurotransmitter.GLUTAMATE
    ) -> SynapseKey:
        """
        Get-or-create the synapse between two distinct words.

        Both endpoint neurons are created if missing.

        Raises:
            ValueError: if a == b
        """
        key = synapse_key(a, b)
        if key not in self.synapses:
            self.ensure_neuron(a)
            self.ensure_neuron(b)
            self.synapses[key] = Synapse(
                strength=self.config.initial_strength,
                neurotransmitter=neurotransmitter,
            )
            self._incident[key[0]].add(key)
            self._incident[key[1]].add(key)
        return key

    def neuron_at(self, handle: int) -> Neuron:
        return self._arena[handle]

    def synapse(self, a: str, b: str) -> Optional[Synapse]:
        if a == b:
            return None
        return self.synapses.get(synapse_key(a, b))

    def neighbours(self, word: str) -> Iterator[Tuple[str, Synapse]]:
        """(other word, synapse) for every synapse incident to `word`."""
        for key in sorted(self._incident.get(word, ())):
            other = key[1] if key[0] == word else key[0]
            yield other, self.synapses[key]

    # =========================================================================
    # Spiking
    # =========================================================================

    def inject_input(self, words: Iterable[str]) -> Set[str]:
        """
        Add the input bias to each word's potential.

        Injection alone never fires anything, so the returned set is always
        empty.
        """
        for word in words:
            self.ensure_neuron(word)
            self.neurons[word].v += self.config.input_bias
        return set()

    def run_spiking(self, seed_words: Sequence[str], max_ticks: Optional[int] = None) -> List[Set[str]]:
        """
        Wire up the seed words, inject them and tick the network.

        Args:
            seed_words: Words to excite (duplicates are harmless)
            max_ticks: Upper bound on ticks, defaults to config.max_ticks

        Returns:
            One set of fired words per simulated tick
        """
        if max_ticks is None:
            max_ticks = self.config.max_ticks
        seed_words = list(seed_words)
        logger.debug("run_spiking seeds=%s max_ticks=%d", seed_words, max_ticks)

        for word in seed_words:
            self.ensure_neuron(word)
        for a, b in combinations(seed_words, 2):
            if a != b:
                self.ensure_synapse(a, b)

        self.inject_input(seed_words)

        state = self._spiking_state()
        history = state.run(max_ticks)
        state.write_back()

        self.total_ticks += len(history)
        self.last_history = history
        return history

    def _spiking_state(self) -> SpikingState:
        handle = self.vocabulary.handle
        edges = [
            (handle(a), handle(b), syn)
            for (a, b), syn in self.synapses.items()
        ]
        return SpikingState(
            words=list(self.vocabulary),
            neurons=self._arena,
            edges=edges,
            config=self.config,
            modulator=self.modulator,
        )

    # =========================================================================
    # Learning
    # =========================================================================

    def learn_from_spikes(self, history: Sequence[Set[str]]) -> None:
        """
        Hebbian reinforcement, stress-gated inhibition, forgetting,
        homeostasis, then hormone decay.

        Reinforcement and inhibition read the modulator before it decays.
        """
        cfg = self.config
        dopamine = max(self.modulator.dopamine, 0.1)
        stress = self.modulator.stress

        # Co-firing strengthens
        gain = cfg.lr_exc * dopamine
        for fired in history:
            for a, b in combinations(sorted(fired), 2):
                key = self.ensure_synapse(a, b)
                self.synapses[key].potentiate(gain)

        # Stress inhibits what fired together last
        if stress > 0.2 and history:
            penalty = cfg.lr_inh * stress
            for a, b in combinations(sorted(history[-1]), 2):
                syn = self.synapse(a, b)
                if syn is not None:
                    syn.depress(penalty)

        for syn in self.synapses.values():
            syn.decay_and_clamp(cfg.forget, cfg.exc_max, cfg.inh_max)

        for neuron in self._arena:
            neuron.apply_homeostasis(cfg)

        self.modulator.decay()
        logger.debug(
            "Learned from %d ticks: %d neurons, %d synapses",
            len(history), len(self.neurons), len(self.synapses)
        )

    # =========================================================================
    # Feedback
    # =========================================================================

    def update_modulator_from_feedback(self, text: str) -> FeedbackPolarity:
        """Read the user's tone and adjust hormones."""
        polarity = classify_implicit(text)
        self.modulator.apply_implicit_feedback(polarity)

        cue = detect_mood_cue(text)
        if cue:
            self.modulator.apply_mood_cue(cue)

        transmitter = detect_neurotransmitter(text)
        if transmitter is not None:
            self.modulator.adjust_for_neurotransmitter(transmitter)

        logger.debug("Implicit feedback %s -> %s", polarity.value, self.modulator.levels())
        return polarity

    def apply_feedback(self, feedback_text: str, last_reply_words: Sequence[str]) -> FeedbackPolarity:
        """
        Reward or punish the associations used in the last reply.

        Only synapses that already exist between reply words are touched.
        Nothing happens for replies shorter than two words or feedback that
        is neither positive nor negative.
        """
        if len(last_reply_words) < 2:
            return FeedbackPolarity.NEUTRAL

        polarity = classify_explicit(feedback_text)
        if polarity is FeedbackPolarity.NEUTRAL:
            return polarity

        cfg = self.config
        words = list(dict.fromkeys(last_reply_words))
        for a, b in combinations(words, 2):
            syn = self.synapse(a, b)
            if syn is None:
                continue
            if polarity is FeedbackPolarity.POSITIVE:
                syn.potentiate(2 * cfg.lr_exc)
            else:
                syn.depress(2 * cfg.lr_inh)
            syn.decay_and_clamp(1.0, cfg.exc_max, cfg.inh_max)

        if polarity is FeedbackPolarity.POSITIVE:
            self.modulator.reward()
        else:
            self.modulator.punish()

        logger.debug("Explicit feedback %s on %s", polarity.value, list(last_reply_words))
        return polarity

    # =========================================================================
    # Reply
    # =========================================================================

    def pick_concepts(self, seed_words: Sequence[str], k: Optional[int] = None) -> List[str]:
        """
        Strongest associations of the excited seed words.

        A seed only contributes if its potential is above
        config.reply_activation; candidates are its neighbours over synapses
        stronger than config.reply_min_strength, ranked by summed
        (exc - inh) to all seeds.
        """
        cfg = self.config
        k = cfg.reply_top_k if k is None else k
        seeds = list(dict.fromkeys(seed_words))
        seed_set = set(seeds)

        candidates: Set[str] = set()
        for word in seeds:
            neuron = self.neurons.get(word)
            if neuron is None or neuron.v <= cfg.reply_activation:
                continue
            for other, syn in self.neighbours(word):
                if syn.strength > cfg.reply_min_strength and other not in seed_set:
                    candidates.add(other)

        if not candidates:
            return []

        scores = {}
        for candidate in candidates:
            score = 0.0
            for seed in seeds:
                syn = self.synapse(candidate, seed)
                if syn is not None:
                    score += syn.excitatory - syn.inhibitory
            scores[candidate] = score

        ranked = sorted(candidates, key=lambda w: (-scores[w], w))
        return ranked[:k]

    def generate_reply(self, seed_words: Sequence[str], rng: Optional[random.Random] = None) -> str:
        """
        Associative reply, or babble when nothing is associated.

        Leaves the network and modulator untouched. Babbling draws from `rng`
        when given, otherwise from `self.rng`, which is not part of a snapshot.
        """
        concepts = self.pick_concepts(seed_words)
        if concepts:
            return " ".join(concepts)
        return self.babble(seed_words, rng)

    def babble(self, seed_words: Sequence[str], rng: Optional[random.Random] = None) -> str:
        if not seed_words:
            return BABBLE_PLACEHOLDER
        return (rng or self.rng).choice(list(seed_words))

    # =========================================================================
    # Snapshot
    # =========================================================================

    def get_snapshot(self) -> Dict[str, Any]:
        """Full state as a plain record (JSON-compatible)."""
        return {
            'version': SNAPSHOT_VERSION,
            'neurons': {word: neuron.to_dict() for word, neuron in self.neurons.items()},
            'synapses': [
                {'a': a, 'b': b, **syn.to_dict()}
                for (a, b), syn in self.synapses.items()
            ],
            'modulator': self.modulator.as_dict(),
            'hyperparameters': self.config.hyperparameters(),
        }

    @classmethod
    def from_snapshot(
        cls,
        record: Dict[str, Any],
        config: Optional[BrainConfig] = None,
        seed: Optional[int] = None
    ) -> "Brain":
        """
        Rebuild a brain from get_snapshot() output.

        Stabilization policies come from `config`; the five learning
        hyperparameters come from the record.

        Raises:
            SnapshotError: malformed record
        """
        if not isinstance(record, dict):
            raise SnapshotError(f"Snapshot must be a mapping, got {type(record).__name__}")
        missing = [k for k in ('neurons', 'synapses', 'modulator') if k not in record]
        if missing:
            raise SnapshotError(f"Snapshot missing fields: {missing}")

        base = config or BrainConfig()
        try:
            hyper = {
                k: v for k, v in record.get('hyperparameters', {}).items()
                if k in HYPERPARAMETER_NAMES
            }
            brain = cls(config=base.with_hyperparameters(hyper), seed=seed, plant_seed_vocabulary=False)

            for word, fields in record['neurons'].items():
                word = str(word)
                handle = brain.ensure_neuron(word)
                restored = Neuron.from_dict(fields)
                brain._arena[handle] = restored
                brain.neurons[word] = restored

            for entry in record['synapses']:
                a, b = str(entry['a']), str(entry['b'])
                key = brain.ensure_synapse(a, b)
                brain.synapses[key] = Synapse.from_dict(entry)

            brain.modulator = Modulator.from_dict(record['modulator'])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"Invalid snapshot: {e}") from e

        return brain

    def save(self, filepath: str) -> str:
        """Save brain state to file."""
        from .persistence import BrainPersistence
        return BrainPersistence(filepath).save(self)

    @classmethod
    def load(cls, filepath: str, config: Optional[BrainConfig] = None) -> "Brain":
        """Load brain state from file."""
        from .persistence import BrainPersistence
        return BrainPersistence(filepath, config=config).load()

    # =========================================================================
    # Introspection
    # =========================================================================

    def strongest_synapses(self, limit: int = 10) -> List[Tuple[SynapseKey, Synapse]]:
        ranked = sorted(
            self.synapses.items(),
            key=lambda item: (-abs(item[1].signed_weight), item[0])
        )
        return ranked[:limit]

    def get_dashboard_data(self) -> Dict[str, Any]:
        """Summary for the CLI dashboard and the GUI inspector."""
        potentials = [n.v for n in self.neurons.values()]
        return {
            'chemicals': self.modulator.levels(),
            'mood': self.modulator.mood(),
            'neurons': {
                'total': len(self.neurons),
                'active': sum(1 for v in potentials if v > self.config.proxy_threshold),
                'refractory': sum(1 for n in self.neurons.values() if n.is_refractory),
                'mean_threshold': (
                    sum(n.threshold for n in self.neurons.values()) / len(self.neurons)
                    if self.neurons else 0.0
                ),
            },
            'synapses': {
                'total': len(self.synapses),
                'excitatory': sum(1 for s in self.synapses.values() if s.excitatory > 0),
                'inhibitory': sum(1 for s in self.synapses.values() if s.inhibitory > 0),
            },
            'ticks': self.total_ticks,
        }

    def __repr__(self):
        return (f"Brain(neurons={len(self.neurons)}, synapses={len(self.synapses)}, "
                f"mood={self.modulator.mood()})")
