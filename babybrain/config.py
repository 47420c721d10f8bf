"""
Brain configuration

Every constant the engine uses lives here so experiments only ever touch
one dataclass. Presets change numbers, never behaviour.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, Tuple


# Hyperparameters that travel with a snapshot
HYPERPARAMETER_NAMES = ("lr_exc", "lr_inh", "exc_max", "inh_max", "forget")

DEFAULT_SEED_VOCABULARY = ("maman", "papa", "bébé", "amour", "calme", "joie")


@dataclass
class BrainConfig:
    """
    Configuration for the baby brain.

    Use create_config(preset, **overrides) to customize any parameter.
    """
    # ==========================================================================
    # LEARNING
    # ==========================================================================
    lr_exc: float = 0.05
    lr_inh: float = 0.03
    exc_max: float = 3.0
    inh_max: float = 2.0
    forget: float = 0.999

    # ==========================================================================
    # NEURON DEFAULTS
    # ==========================================================================
    initial_threshold: float = 1.0
    leak: float = 0.08
    threshold_floor: float = 0.6
    refractory_period: int = 2
    input_bias: float = 0.6

    # ==========================================================================
    # SYNAPSE DEFAULTS
    # ==========================================================================
    initial_strength: float = 0.5

    # ==========================================================================
    # ACTIVITY CUTOFFS
    # ==========================================================================
    proxy_threshold: float = 0.9      # neighbour counts as "active" above this
    reply_activation: float = 0.5     # seed must be this excited to associate
    reply_min_strength: float = 0.1
    reply_top_k: int = 3

    # ==========================================================================
    # HOMEOSTASIS
    # ==========================================================================
    homeostasis_fire_limit: int = 200
    threshold_raise: float = 0.02
    threshold_relax: float = 0.001
    excitatory_threshold_bound: float = 0.8
    excitatory_threshold_factor: float = 0.98
    inhibitory_threshold_bound: float = 1.2
    inhibitory_threshold_factor: float = 1.02

    # ==========================================================================
    # STABILIZATION POLICIES
    # ==========================================================================
    potential_ceiling: float = 1.5
    cofire_reinforcement: bool = True
    oscillation_amplitude: float = 0.05
    threshold_oscillation: float = 0.01
    oscillation_frequency: float = 0.1
    circadian: bool = False
    circadian_period: float = 100.0

    # ==========================================================================
    # SIMULATION
    # ==========================================================================
    max_ticks: int = 30
    seed_vocabulary: Tuple[str, ...] = field(default=DEFAULT_SEED_VOCABULARY)

    def __post_init__(self):
        if not 0.0 < self.forget < 1.0:
            raise ValueError(f"forget must be in (0, 1), got {self.forget}")
        if not 0.0 < self.leak < 1.0:
            raise ValueError(f"leak must be in (0, 1), got {self.leak}")
        if self.exc_max < 0 or self.inh_max < 0:
            raise ValueError("exc_max and inh_max must be non-negative")
        if self.refractory_period < 0:
            raise ValueError("refractory_period must be >= 0")
        if self.max_ticks < 0:
            raise ValueError("max_ticks must be >= 0")
        self.seed_vocabulary = tuple(self.seed_vocabulary)

    def hyperparameters(self) -> Dict[str, float]:
        """The five learning hyperparameters stored in every snapshot."""
        return {name: getattr(self, name) for name in HYPERPARAMETER_NAMES}

    def with_hyperparameters(self, values: Dict[str, float]) -> "BrainConfig":
        unknown = set(values) - set(HYPERPARAMETER_NAMES)
        if unknown:
            raise ValueError(f"Unknown hyperparameters: {sorted(unknown)}")
        return replace(self, **{k: float(v) for k, v in values.items()})


PRESETS: Dict[str, Dict[str, object]] = {
    "baby": {},
    # Slower, steadier learner
    "calm": {
        "lr_exc": 0.03,
        "lr_inh": 0.04,
        "oscillation_amplitude": 0.02,
        "leak": 0.1,
    },
    # Fires and associates readily
    "excitable": {
        "lr_exc": 0.08,
        "initial_threshold": 0.9,
        "input_bias": 0.7,
        "oscillation_amplitude": 0.08,
    },
}


def create_config(preset: str = "baby", **overrides) -> BrainConfig:
    """
    Build a BrainConfig from a named preset plus keyword overrides.

    Raises:
        ValueError: unknown preset or unknown parameter name
    """
    if preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'. Choose from {sorted(PRESETS)}")

    known = {f.name for f in fields(BrainConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown config parameters: {sorted(unknown)}")

    params = dict(PRESETS[preset])
    params.update(overrides)
    return BrainConfig(**params)
