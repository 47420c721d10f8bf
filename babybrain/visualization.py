"""
Brain Visualization Tools

Simple matplotlib-based visualization for debugging and monitoring:
- Hormone levels over a conversation
- Network growth (neurons, synapses)
- Spike raster of one spiking run
- Synaptic weight distribution

Usage:
    from babybrain.visualization import BrainVisualizer

    viz = BrainVisualizer(conversation.brain)
    viz.attach(conversation)

    # ... talk to the brain ...

    viz.plot_modulators()
    viz.save_all("session_plots/")
"""

import logging
import os
import time
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

from .modulator import HORMONES

if TYPE_CHECKING:
    from .brain import Brain
    from .session import Conversation, CycleResult

logger = logging.getLogger(__name__)


HORMONE_COLORS = {
    'dopamine': '#FF5722',
    'stress': '#795548',
    'serotonin': '#2196F3',
    'noradrenaline': '#FF9800',
    'endorphins': '#9C27B0',
}


@dataclass
class RecordedCycle:
    """One interaction of recorded data."""
    timestamp: float
    cycle: int

    dopamine: float
    stress: float
    serotonin: float
    noradrenaline: float
    endorphins: float

    neurons: int = 0
    synapses: int = 0
    ticks: int = 0
    spikes: int = 0
    mood: str = "neutral"


class BrainVisualizer:
    """
    Post-hoc visualization for a Brain.

    Records brain state once per interaction and provides matplotlib plots.
    """

    def __init__(self, brain: 'Brain', max_history: int = 1000):
        """
        Args:
            brain: Brain instance to monitor
            max_history: Maximum cycles to keep in memory
        """
        self.brain = brain
        self.history: deque = deque(maxlen=max_history)
        self.last_spikes: List[Set[str]] = []
        self._start_time = time.time()
        self._cycle = 0

    def attach(self, conversation: 'Conversation') -> None:
        """Record after every cycle of `conversation`."""
        self.brain = conversation.brain

        def _on_cycle(result: 'CycleResult') -> None:
            self.brain = conversation.brain
            self.record_cycle(result.history)

        conversation.add_observer(_on_cycle)

    def record_cycle(self, spike_history: Optional[Sequence[Set[str]]] = None) -> RecordedCycle:
        """Record current brain state (call after each interaction)."""
        levels = self.brain.modulator.levels()
        spike_history = list(spike_history or [])
        self._cycle += 1

        entry = RecordedCycle(
            timestamp=time.time() - self._start_time,
            cycle=self._cycle,
            neurons=len(self.brain.neurons),
            synapses=len(self.brain.synapses),
            ticks=len(spike_history),
            spikes=sum(len(fired) for fired in spike_history),
            mood=self.brain.modulator.mood(),
            **levels,
        )
        self.history.append(entry)
        self.last_spikes = spike_history
        return entry

    def get_arrays(self) -> Dict[str, np.ndarray]:
        """Convert history to numpy arrays for plotting."""
        if not self.history:
            return {}

        cycles = list(self.history)
        arrays = {
            'cycle': np.array([c.cycle for c in cycles]),
            'neurons': np.array([c.neurons for c in cycles]),
            'synapses': np.array([c.synapses for c in cycles]),
            'ticks': np.array([c.ticks for c in cycles]),
            'spikes': np.array([c.spikes for c in cycles]),
        }
        for name in HORMONES:
            arrays[name] = np.array([getattr(c, name) for c in cycles])
        return arrays

    # ------------------------------------------------------------------
    # Plots
    # ------------------------------------------------------------------

    def plot_modulators(self, figsize: tuple = (10, 5), save_path: Optional[str] = None):
        """
        Plot hormone levels over the conversation.

        Returns:
            The matplotlib Figure, or None if nothing was recorded
        """
        data = self.get_arrays()
        if not data:
            logger.info("No data recorded yet. Call record_cycle() after each interaction")
            return None

        fig, ax = plt.subplots(figsize=figsize)
        for name in HORMONES:
            ax.plot(data['cycle'], data[name], label=name.capitalize(),
                    color=HORMONE_COLORS[name], linewidth=2)
        ax.set_xlabel('Interaction')
        ax.set_ylabel('Level')
        ax.set_title('Hormone Dynamics')
        ax.set_ylim(0, 1.05)
        ax.legend(loc='upper right', fontsize=8)
        ax.grid(True, alpha=0.3)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        return fig

    def plot_network_growth(self, figsize: tuple = (10, 4), save_path: Optional[str] = None):
        data = self.get_arrays()
        if not data:
            return None

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=figsize)
        ax1.plot(data['cycle'], data['neurons'], label='Neurons', color='#3F51B5', linewidth=2)
        ax1.plot(data['cycle'], data['synapses'], label='Synapses', color='#009688', linewidth=2)
        ax1.set_xlabel('Interaction')
        ax1.set_title('Vocabulary Growth')
        ax1.legend(fontsize=8)
        ax1.grid(True, alpha=0.3)

        ax2.bar(data['cycle'], data['spikes'], color='#E91E63', alpha=0.7, label='Spikes')
        ax2.plot(data['cycle'], data['ticks'], color='#607D8B', linewidth=1.5, label='Ticks')
        ax2.set_xlabel('Interaction')
        ax2.set_title('Activity per Cycle')
        ax2.legend(fontsize=8)
        ax2.grid(True, alpha=0.3)

        fig.tight_layout()
        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        return fig

    def plot_spike_raster(
        self,
        spike_history: Optional[Sequence[Set[str]]] = None,
        figsize: tuple = (10, 5),
        save_path: Optional[str] = None
    ):
        """
        Raster of which words fired on which tick.

        Defaults to the spikes of the last recorded cycle.
        """
        spike_history = list(self.last_spikes if spike_history is None else spike_history)
        words = sorted({w for fired in spike_history for w in fired})

        fig, ax = plt.subplots(figsize=figsize)
        if words:
            row = {w: i for i, w in enumerate(words)}
            xs = [t for t, fired in enumerate(spike_history) for _ in fired]
            ys = [row[w] for fired in spike_history for w in sorted(fired)]
            ax.scatter(xs, ys, marker='|', s=200, color='black')
            ax.set_yticks(range(len(words)))
            ax.set_yticklabels(words, fontsize=8)
        else:
            ax.text(0.5, 0.5, 'No spikes', ha='center', va='center', transform=ax.transAxes)
        ax.set_xlabel('Tick')
        ax.set_title('Spike Raster')
        ax.set_xlim(-0.5, max(len(spike_history), 1) - 0.5)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        return fig

    def plot_weight_distribution(self, bins: int = 30, figsize: tuple = (8, 4),
                                 save_path: Optional[str] = None):
        """Histogram of signed synaptic weights (exc - inh)."""
        weights = np.array([s.signed_weight for s in self.brain.synapses.values()])

        fig, ax = plt.subplots(figsize=figsize)
        if len(weights):
            ax.hist(weights, bins=bins, color='#4CAF50', alpha=0.8)
        ax.axvline(0.0, color='black', linewidth=1)
        ax.set_xlabel('Signed weight')
        ax.set_ylabel('Synapses')
        ax.set_title(f'Weight Distribution ({len(weights)} synapses)')
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
        return fig

    def save_all(self, output_dir: str = "brain_plots") -> List[str]:
        """
        Save all available plots to a directory.

        Returns:
            Paths written
        """
        os.makedirs(output_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")

        plots = {
            'modulators': self.plot_modulators,
            'growth': self.plot_network_growth,
            'raster': self.plot_spike_raster,
            'weights': self.plot_weight_distribution,
        }
        written = []
        for name, plot in plots.items():
            path = os.path.join(output_dir, f"{name}_{timestamp}.png")
            fig = plot(save_path=path)
            if fig is not None:
                plt.close(fig)
                written.append(path)

        logger.info("Saved %d plots to %s", len(written), output_dir)
        return written

    def show(self):
        """Show all current plots (interactive mode)."""
        plt.show()
