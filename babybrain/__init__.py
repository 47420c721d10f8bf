# Baby Brain - an associative memory that grows from conversation
#
# Words are neurons. Words heard together are synapses.
# No pretraining. Everything is learned online.
#
# MODULES:
# ├── brain.py            - Brain: materialization, learning, reply, snapshot
# ├── spiking.py          - Vectorized LIF tick engine
# ├── neuron.py           - Word neuron + homeostasis
# ├── synapse.py          - Transmitter-tagged synapse + canonical pair key
# ├── modulator.py        - Five hormones with basal floors
# ├── neurotransmitter.py - Transmitter / polarity / molecule enums
# ├── feedback.py         - Lexical praise / rejection detection
# ├── vocabulary.py       - Word interning
# ├── tokenizer.py        - Text -> words
# ├── persistence.py      - Snapshot save/load with dill or JSON
# ├── session.py          - One owner, one cycle per line
# ├── visualization.py    - Matplotlib plots
# └── log.py              - Logging setup

__version__ = "0.1.0"

# =============================================================================
# PRIMARY EXPORTS
# =============================================================================

from .brain import (
    Brain,
    SnapshotError,
    BABBLE_PLACEHOLDER,
)

from .config import (
    BrainConfig,
    PRESETS,
    create_config,
)

# =============================================================================
# DATA MODEL
# =============================================================================

from .neuron import Neuron
from .synapse import Synapse, synapse_key
from .modulator import Modulator
from .neurotransmitter import (
    Neurotransmitter,
    Polarity,
    Molecule,
    MoleculeRole,
)
from .vocabulary import Vocabulary

# =============================================================================
# COLLABORATORS
# =============================================================================

from .feedback import FeedbackPolarity
from .tokenizer import tokenize, detokenize
from .persistence import (
    BrainPersistence,
    save_brain,
    load_brain,
    load_or_create,
)
from .session import Conversation, CycleResult
from .log import setup_logging


def create_brain(preset: str = "baby", seed=None, **overrides) -> Brain:
    """
    Factory function to create a fresh brain.

    Args:
        preset: "baby", "calm" or "excitable"
        seed: Optional seed for babbling
        **overrides: Any BrainConfig field

    Returns:
        Brain with the seed vocabulary planted
    """
    return Brain(config=create_config(preset, **overrides), seed=seed)


__all__ = [
    "Brain",
    "SnapshotError",
    "BABBLE_PLACEHOLDER",
    "BrainConfig",
    "PRESETS",
    "create_config",
    "create_brain",
    "Neuron",
    "Synapse",
    "synapse_key",
    "Modulator",
    "Neurotransmitter",
    "Polarity",
    "Molecule",
    "MoleculeRole",
    "Vocabulary",
    "FeedbackPolarity",
    "tokenize",
    "detokenize",
    "BrainPersistence",
    "save_brain",
    "load_brain",
    "load_or_create",
    "Conversation",
    "CycleResult",
    "setup_logging",
]
