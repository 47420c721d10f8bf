"""
Unit tests for the hormone modulator and lexical feedback detection.
"""

import pytest

from babybrain import FeedbackPolarity, Modulator, Neurotransmitter
from babybrain.feedback import (
    classify_explicit,
    classify_implicit,
    count_keywords,
    detect_mood_cue,
    detect_neurotransmitter,
)
from babybrain.modulator import FLOORS, HORMONES


def assert_in_bounds(mod):
    for name in HORMONES:
        assert FLOORS[name] <= getattr(mod, name) <= 1.0


class TestModulator:
    """Test Modulator levels and decay."""

    def test_clamped_on_creation(self):
        mod = Modulator(dopamine=5.0, stress=-1.0)

        assert mod.dopamine == 1.0
        assert mod.stress == FLOORS['stress']

    def test_decay(self):
        mod = Modulator()
        mod.decay()

        assert mod.dopamine == pytest.approx(0.45)
        assert mod.serotonin == pytest.approx(0.475)

    def test_decay_never_below_floor(self):
        """Test that repeated decay settles on the basal floors."""
        mod = Modulator()
        for _ in range(200):
            mod.decay()

        assert mod.levels() == FLOORS

    def test_adjust_unknown_hormone(self):
        with pytest.raises(ValueError):
            Modulator().adjust("oxytocin", 0.1)

    def test_negative_feedback_scenario(self):
        """Test that rejection raises stress and damps dopamine multiplicatively."""
        mod = Modulator()
        before = mod.levels()
        mod.apply_implicit_feedback(classify_implicit("c'est nul, stop"))

        assert mod.stress > before['stress']
        assert mod.dopamine == pytest.approx(before['dopamine'] * 0.6)

    def test_positive_feedback(self):
        mod = Modulator()
        mod.apply_implicit_feedback(FeedbackPolarity.POSITIVE)

        assert mod.dopamine == pytest.approx(1.0)
        assert mod.stress == pytest.approx(0.06)

    def test_neutral_feedback_decays_both(self):
        mod = Modulator()
        mod.apply_implicit_feedback(FeedbackPolarity.NEUTRAL)

        assert mod.dopamine == pytest.approx(0.475)
        assert mod.stress == pytest.approx(0.095)

    @pytest.mark.parametrize("polarity", list(FeedbackPolarity))
    def test_bounds_after_feedback(self, polarity):
        mod = Modulator()
        for _ in range(20):
            mod.apply_implicit_feedback(polarity)
            mod.reward()
            mod.punish()
            assert_in_bounds(mod)

    def test_transmitter_nudge(self):
        mod = Modulator()
        mod.adjust_for_neurotransmitter(Neurotransmitter.GABA)

        assert mod.stress == pytest.approx(0.15)

    def test_circadian_night(self):
        """Test that a zero factor pushes dopamine and serotonin to their floors."""
        mod = Modulator()
        mod.apply_circadian(0.0)

        assert mod.dopamine == FLOORS['dopamine']
        assert mod.serotonin == FLOORS['serotonin']
        assert mod.stress == pytest.approx(0.1)

    def test_mood(self):
        assert Modulator().mood() == "neutral"
        assert Modulator(stress=0.9, dopamine=0.2).mood() == "anxious"
        assert Modulator(dopamine=0.9).mood() == "happy"

    def test_from_dict_fills_missing(self):
        mod = Modulator.from_dict({'dopamine': 0.8})

        assert mod.dopamine == 0.8
        assert mod.serotonin == Modulator().serotonin


class TestFeedback:
    """Test keyword classification."""

    def test_count_keywords_case_insensitive(self):
        assert count_keywords("MDR trop BIEN", ["mdr", "bien", "nul"]) == 2

    @pytest.mark.parametrize("text, expected", [
        ("mdr trop bien", FeedbackPolarity.POSITIVE),
        ("ta gueule", FeedbackPolarity.NEGATIVE),
        ("oui non", FeedbackPolarity.NEUTRAL),
        ("", FeedbackPolarity.NEUTRAL),
    ])
    def test_classify_implicit(self, text, expected):
        assert classify_implicit(text) is expected

    def test_classify_explicit(self):
        assert classify_explicit("super") is FeedbackPolarity.POSITIVE
        assert classify_explicit("c'est faux") is FeedbackPolarity.NEGATIVE

    def test_mood_cue(self):
        assert detect_mood_cue("je suis zen") == {'serotonin': 0.1}
        assert detect_mood_cue("bonjour") is None

    def test_transmitter_order(self):
        """Test that glutamate wins when several transmitters are named."""
        assert detect_neurotransmitter("gaba et glutamate") is Neurotransmitter.GLUTAMATE
        assert detect_neurotransmitter("un peu de Dopamine") is Neurotransmitter.DOPAMINE
        assert detect_neurotransmitter("rien") is None
