"""
Neuromodulator state

Five global hormone levels owned by the brain:
- dopamine: scales positive (excitatory) learning
- stress: gates and scales inhibitory learning
- serotonin: mood stability
- noradrenaline: attention / arousal
- endorphins: pleasure, stress relief

Each level lives in [floor, 1] and decays multiplicatively back toward its
basal floor after every learning pass.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from .feedback import FeedbackPolarity
from .neurotransmitter import Neurotransmitter

logger = logging.getLogger(__name__)


HORMONES = ("dopamine", "stress", "serotonin", "noradrenaline", "endorphins")

# Basal levels: decay never goes below these
FLOORS: Dict[str, float] = {
    'dopamine': 0.1,
    'stress': 0.05,
    'serotonin': 0.1,
    'noradrenaline': 0.05,
    'endorphins': 0.1,
}

# Multiplicative decay per learning pass
DECAY: Dict[str, float] = {
    'dopamine': 0.90,
    'stress': 0.90,
    'serotonin': 0.95,
    'noradrenaline': 0.92,
    'endorphins': 0.93,
}

# Implicit feedback
FEEDBACK_BOOST = 0.7
FEEDBACK_DAMP = 0.6
NEUTRAL_DECAY = 0.95

# Explicit feedback on a reply
REWARD_BOOST = 1.0
PUNISH_BOOST = 1.0

TRANSMITTER_NUDGE = 0.05


@dataclass
class Modulator:
    """Global hormone levels."""
    dopamine: float = 0.5
    stress: float = 0.1
    serotonin: float = 0.5
    noradrenaline: float = 0.3
    endorphins: float = 0.3

    def __post_init__(self):
        self.clamp()

    def levels(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in HORMONES}

    def clamp(self) -> None:
        """Keep every hormone within [floor, 1]."""
        for name in HORMONES:
            value = float(getattr(self, name))
            setattr(self, name, min(1.0, max(FLOORS[name], value)))

    def adjust(self, hormone: str, delta: float) -> None:
        if hormone not in FLOORS:
            raise ValueError(f"Unknown hormone: {hormone!r}")
        setattr(self, hormone, getattr(self, hormone) + delta)
        self.clamp()

    def decay(self) -> None:
        """Relax every hormone toward its basal floor."""
        before = self.levels()
        for name in HORMONES:
            setattr(self, name, max(getattr(self, name) * DECAY[name], FLOORS[name]))
        self.clamp()
        logger.debug("Modulator decay: %s -> %s", _fmt(before), _fmt(self.levels()))

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def apply_implicit_feedback(self, polarity: FeedbackPolarity) -> None:
        if polarity is FeedbackPolarity.POSITIVE:
            self.dopamine += FEEDBACK_BOOST
            self.stress *= FEEDBACK_DAMP
        elif polarity is FeedbackPolarity.NEGATIVE:
            self.stress += FEEDBACK_BOOST
            self.dopamine *= FEEDBACK_DAMP
        elif polarity is FeedbackPolarity.NEUTRAL:
            self.dopamine *= NEUTRAL_DECAY
            self.stress *= NEUTRAL_DECAY
        else:
            raise AssertionError(f"Unhandled feedback polarity {polarity}")
        self.clamp()

    def reward(self) -> None:
        self.dopamine += REWARD_BOOST
        self.clamp()

    def punish(self) -> None:
        self.stress += PUNISH_BOOST
        self.clamp()

    def apply_mood_cue(self, deltas: Dict[str, float]) -> None:
        for hormone, delta in deltas.items():
            setattr(self, hormone, getattr(self, hormone) + delta)
        self.clamp()

    def adjust_for_neurotransmitter(self, transmitter: Neurotransmitter) -> None:
        """Nudge the hormone associated with a transmitter named by the user."""
        if transmitter is Neurotransmitter.GLUTAMATE or transmitter is Neurotransmitter.DOPAMINE:
            self.dopamine += TRANSMITTER_NUDGE
        elif transmitter is Neurotransmitter.GABA:
            self.stress += TRANSMITTER_NUDGE
        elif transmitter is Neurotransmitter.ACETYLCHOLINE:
            self.serotonin += TRANSMITTER_NUDGE
        else:
            raise AssertionError(f"Unhandled transmitter {transmitter}")
        self.clamp()

    # ------------------------------------------------------------------
    # Rhythms
    # ------------------------------------------------------------------

    def apply_circadian(self, factor: float) -> None:
        """Day favours dopamine and serotonin, night favours stress."""
        factor = min(1.0, max(0.0, factor))
        self.dopamine *= factor
        self.serotonin *= factor
        self.stress *= 1.0 - factor
        self.clamp()

    def mood(self) -> str:
        """Coarse label for dashboards."""
        if self.stress > 0.5 and self.stress >= self.dopamine:
            return "anxious"
        if self.dopamine > 0.6:
            return "happy"
        if self.noradrenaline > 0.5:
            return "alert"
        if self.serotonin > 0.6:
            return "calm"
        return "neutral"

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def as_dict(self) -> Dict[str, float]:
        return self.levels()

    @classmethod
    def from_dict(cls, data: Dict) -> "Modulator":
        defaults = cls()
        return cls(**{
            name: float(data.get(name, getattr(defaults, name)))
            for name in HORMONES
        })


def _fmt(levels: Dict[str, float]) -> str:
    return ", ".join(f"{name}={value:.2f}" for name, value in levels.items())
