"""
Word neurons

One leaky-integrate-and-fire unit per word. Membrane state is driven by the
tick engine in spiking.py; this module only owns the data and the slow
homeostatic threshold adaptation.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TYPE_CHECKING

from .neurotransmitter import Molecule, MoleculeRole

if TYPE_CHECKING:
    from .config import BrainConfig


@dataclass
class Neuron:
    """
    Leaky-integrate-and-fire neuron keyed by a word.

    Attributes:
        v: Membrane potential (reset to 0 on fire, never negative)
        threshold: Firing threshold, adapted homeostatically
        leak: Fraction of potential lost per tick
        refractory: Ticks left before the neuron may integrate or fire
        fired_count: Spikes since the last homeostatic reset
        composition: Optional chemical tags biasing threshold adaptation
    """
    v: float = 0.0
    threshold: float = 1.0
    leak: float = 0.08
    refractory: int = 0
    fired_count: int = 0
    composition: List[Molecule] = field(default_factory=list)

    @property
    def is_refractory(self) -> bool:
        return self.refractory > 0

    def chemical_role(self) -> Optional[MoleculeRole]:
        """EXCITATORY if any molecule is excitatory, INHIBITORY if any is inhibitory, else None."""
        roles = {m.role for m in self.composition}
        if MoleculeRole.EXCITATORY in roles:
            return MoleculeRole.EXCITATORY
        if MoleculeRole.INHIBITORY in roles:
            return MoleculeRole.INHIBITORY
        return None

    def apply_homeostasis(self, config: 'BrainConfig') -> None:
        """
        Keep the long-run firing rate bounded.

        Busy neurons get harder to fire, silent ones slowly get easier. The
        chemical role then pulls the threshold toward its resting bound:
        excitatory neurons relax down toward ~0.8, everything else drifts up
        toward ~1.2.
        """
        if self.fired_count > config.homeostasis_fire_limit:
            self.threshold += config.threshold_raise
            self.fired_count = 0
        elif self.fired_count == 0 and self.threshold > config.threshold_floor:
            self.threshold -= config.threshold_relax

        if self.chemical_role() is MoleculeRole.EXCITATORY:
            bound = config.excitatory_threshold_bound
            if self.threshold > bound:
                self.threshold = max(self.threshold * config.excitatory_threshold_factor, bound)
        else:
            bound = config.inhibitory_threshold_bound
            if self.threshold < bound:
                self.threshold = min(self.threshold * config.inhibitory_threshold_factor, bound)

        self.threshold = max(self.threshold, config.threshold_floor)

    def to_dict(self) -> Dict:
        return {
            'v': self.v,
            'threshold': self.threshold,
            'leak': self.leak,
            'refractory': self.refractory,
            'fired_count': self.fired_count,
            'composition': [m.to_dict() for m in self.composition],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Neuron":
        refractory = int(data.get('refractory', 0))
        fired_count = int(data.get('fired_count', 0))
        if refractory < 0 or fired_count < 0:
            raise ValueError("refractory and fired_count must be non-negative")
        return cls(
            v=max(0.0, float(data.get('v', 0.0))),
            threshold=float(data.get('threshold', 1.0)),
            leak=float(data.get('leak', 0.08)),
            refractory=refractory,
            fired_count=fired_count,
            composition=[Molecule.from_dict(m) for m in data.get('composition', [])],
        )
