"""
Neurotransmitters and neuron chemistry

A synapse's transmitter decides how it talks to its neighbour:
- Glutamate pushes the target's potential up (excitatory)
- GABA pulls it down (inhibitory)
- Dopamine only modulates, it never enters integration

Acetylcholine is recognised in user text as a hormone cue but is never
placed on a synapse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Polarity(Enum):
    """How a transmitter contributes to membrane integration"""
    EXCITATORY = "excitatory"
    INHIBITORY = "inhibitory"
    MODULATORY = "modulatory"


class Neurotransmitter(Enum):
    """Transmitter tag carried by every synapse"""
    GLUTAMATE = "Glutamate"
    GABA = "GABA"
    DOPAMINE = "Dopamine"
    ACETYLCHOLINE = "Acetylcholine"

    @property
    def polarity(self) -> Polarity:
        return _POLARITY[self]

    @property
    def sign(self) -> int:
        """+1, -1 or 0 depending on polarity"""
        polarity = self.polarity
        if polarity is Polarity.EXCITATORY:
            return 1
        if polarity is Polarity.INHIBITORY:
            return -1
        if polarity is Polarity.MODULATORY:
            return 0
        raise AssertionError(f"Unhandled polarity {polarity}")

    @classmethod
    def from_name(cls, name: str) -> "Neurotransmitter":
        """Parse a transmitter name case-insensitively."""
        key = name.strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown neurotransmitter: {name!r}")

    def __str__(self) -> str:
        return self.value


_POLARITY: Dict[Neurotransmitter, Polarity] = {
    Neurotransmitter.GLUTAMATE: Polarity.EXCITATORY,
    Neurotransmitter.GABA: Polarity.INHIBITORY,
    Neurotransmitter.DOPAMINE: Polarity.MODULATORY,
    Neurotransmitter.ACETYLCHOLINE: Polarity.MODULATORY,
}

# Transmitters a synapse may carry
SYNAPTIC_TRANSMITTERS = (
    Neurotransmitter.GLUTAMATE,
    Neurotransmitter.GABA,
    Neurotransmitter.DOPAMINE,
)


class MoleculeRole(Enum):
    """Biological role of a molecule in a neuron's composition"""
    EXCITATORY = "excitatory"
    INHIBITORY = "inhibitory"
    ENERGY = "energy"
    SIGNALING = "signaling"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str) -> "MoleculeRole":
        key = name.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.OTHER


@dataclass
class Molecule:
    """
    One chemical tag on a neuron.

    Attributes:
        name: Molecule name (e.g. "Glucose", "ATP")
        concentration: Concentration in mol/L
        role: What the molecule does for the neuron
    """
    name: str
    concentration: float = 0.0
    role: MoleculeRole = MoleculeRole.OTHER

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'concentration': self.concentration,
            'role': self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Molecule":
        return cls(
            name=str(data['name']),
            concentration=float(data.get('concentration', 0.0)),
            role=MoleculeRole.from_name(str(data.get('role', 'other'))),
        )
