"""
Tests for matplotlib visualization and logging setup.
"""

import logging
import os

import pytest

from babybrain import setup_logging
from babybrain.visualization import BrainVisualizer


class TestBrainVisualizer:
    """Test BrainVisualizer recording and plots."""

    def test_attach_records_each_cycle(self, conversation):
        viz = BrainVisualizer(conversation.brain)
        viz.attach(conversation)
        conversation.respond("bonjour maman")
        conversation.respond("mdr")

        assert len(viz.history) == 2
        assert viz.history[-1].neurons == len(conversation.brain.neurons)

    def test_follows_reset(self, conversation):
        viz = BrainVisualizer(conversation.brain)
        viz.attach(conversation)
        conversation.handle("reset")
        conversation.respond("papa")

        assert viz.brain is conversation.brain

    def test_max_history(self, brain):
        viz = BrainVisualizer(brain, max_history=3)
        for _ in range(5):
            viz.record_cycle()

        assert len(viz.history) == 3
        assert viz.history[0].cycle == 3

    def test_get_arrays(self, brain):
        viz = BrainVisualizer(brain)
        assert viz.get_arrays() == {}

        viz.record_cycle([{"maman", "papa"}, set()])
        data = viz.get_arrays()

        assert list(data['spikes']) == [2]
        assert list(data['ticks']) == [2]
        assert 'dopamine' in data

    def test_plots_without_history(self, brain):
        viz = BrainVisualizer(brain)

        assert viz.plot_modulators() is None
        assert viz.plot_network_growth() is None
        assert viz.plot_spike_raster() is not None

    def test_save_all(self, conversation, tmp_path):
        viz = BrainVisualizer(conversation.brain)
        viz.attach(conversation)
        conversation.respond("bonjour maman")
        conversation.respond("papa joue")

        written = viz.save_all(str(tmp_path / "plots"))

        assert len(written) == 4
        for path in written:
            assert os.path.exists(path)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test setup_logging."""

    def test_level_by_name(self, restore_root_logger):
        setup_logging("debug")

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "brain.log"
        setup_logging(logging.INFO, str(log_file))
        logging.getLogger("babybrain.test").info("hello")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert "hello" in log_file.read_text(encoding='utf-8')

    def test_unknown_level(self, restore_root_logger):
        with pytest.raises(ValueError):
            setup_logging("LOUD")
