"""
Synapses between word pairs

A synapse is stored once per unordered pair under its canonical key. Weight
material is a non-negative strength plus a transmitter tag; the excitatory
and inhibitory "channels" the learning rules talk about are views of that
single signed quantity.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .neurotransmitter import Neurotransmitter, Polarity, SYNAPTIC_TRANSMITTERS


SynapseKey = Tuple[str, str]


def synapse_key(a: str, b: str) -> SynapseKey:
    """Canonical key for the unordered pair {a, b}: smaller word first."""
    if a == b:
        raise ValueError(f"Self-loop synapses are not allowed: {a!r}")
    return (a, b) if a <= b else (b, a)


@dataclass
class Synapse:
    """
    Connection between two word neurons.

    Attributes:
        strength: Non-negative magnitude
        neurotransmitter: Glutamate (excitatory), GABA (inhibitory) or
            Dopamine (modulatory only)
    """
    strength: float = 0.5
    neurotransmitter: Neurotransmitter = Neurotransmitter.GLUTAMATE

    def __post_init__(self):
        if self.strength < 0:
            raise ValueError("Synapse strength must be non-negative")

    def __setattr__(self, name, value):
        # Checked on every assignment, __init__ included
        if name == 'neurotransmitter' and value not in SYNAPTIC_TRANSMITTERS:
            raise ValueError(f"{value} cannot tag a synapse")
        super().__setattr__(name, value)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def polarity(self) -> Polarity:
        return self.neurotransmitter.polarity

    @property
    def excitatory(self) -> float:
        return self.strength if self.polarity is Polarity.EXCITATORY else 0.0

    @property
    def inhibitory(self) -> float:
        return self.strength if self.polarity is Polarity.INHIBITORY else 0.0

    @property
    def signed_weight(self) -> float:
        """Contribution per active neighbour: +strength, -strength or 0."""
        return self.neurotransmitter.sign * self.strength

    # ------------------------------------------------------------------
    # Plasticity
    # ------------------------------------------------------------------

    def _set_net(self, net: float) -> None:
        if net >= 0:
            self.strength = net
            self.neurotransmitter = Neurotransmitter.GLUTAMATE
        else:
            self.strength = -net
            self.neurotransmitter = Neurotransmitter.GABA

    def potentiate(self, amount: float) -> None:
        """Increase the excitatory contribution by `amount`."""
        if self.polarity is Polarity.MODULATORY:
            self.strength += amount
        else:
            self._set_net(self.signed_weight + amount)

    def depress(self, amount: float) -> None:
        """Increase the inhibitory contribution by `amount`."""
        if self.polarity is Polarity.MODULATORY:
            self.strength = max(0.0, self.strength - amount)
        else:
            self._set_net(self.signed_weight - amount)

    def decay_and_clamp(self, forget: float, exc_max: float, inh_max: float) -> None:
        """Slow forgetting followed by clamping each channel to its bound."""
        self.strength *= forget
        polarity = self.polarity
        if polarity is Polarity.INHIBITORY:
            self.strength = min(max(self.strength, 0.0), inh_max)
        elif polarity is Polarity.EXCITATORY or polarity is Polarity.MODULATORY:
            self.strength = min(max(self.strength, 0.0), exc_max)
        else:
            raise AssertionError(f"Unhandled polarity {polarity}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            'strength': self.strength,
            'neurotransmitter': self.neurotransmitter.value,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Synapse":
        return cls(
            strength=float(data.get('strength', 0.0)),
            neurotransmitter=Neurotransmitter.from_name(
                str(data.get('neurotransmitter', 'Glutamate'))
            ),
        )
