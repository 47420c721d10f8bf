"""
Lexical feedback detection

The brain has no sentiment model. It counts keywords: French chat slang for
praise and for rejection, a few mood words, and transmitter names. All
matching is case-insensitive substring matching.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from .neurotransmitter import Neurotransmitter


class FeedbackPolarity(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


# Implicit feedback: how the user talks in general
IMPLICIT_POSITIVE = ("mdr", "haha", "lol", "bien", "bravo", "cool", "yes", "ouai", "oui")
IMPLICIT_NEGATIVE = ("non", "nul", "mauvais", "stop", "ta gueule", "bof", "nope")

# Explicit feedback: judgement on the last reply
EXPLICIT_POSITIVE = ("oui", "bravo", "bien", "super", "cool", "mdr", "haha")
EXPLICIT_NEGATIVE = ("non", "faux", "nul", "stop", "mauvais", "bof")

# Mood words nudging the secondary hormones; first matching group wins
MOOD_CUES: Tuple[Tuple[Tuple[str, ...], Dict[str, float]], ...] = (
    (("bien", "super"), {'dopamine': 0.1, 'endorphins': 0.05}),
    (("stress", "peur"), {'stress': 0.1, 'noradrenaline': 0.08}),
    (("calme", "zen"), {'serotonin': 0.1}),
)

# Checked in this order
TRANSMITTER_CUES = (
    Neurotransmitter.GLUTAMATE,
    Neurotransmitter.GABA,
    Neurotransmitter.ACETYLCHOLINE,
    Neurotransmitter.DOPAMINE,
)


def count_keywords(text: str, keywords: Iterable[str]) -> int:
    """Number of keywords present in `text`."""
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


def classify(text: str, positive: Iterable[str], negative: Iterable[str]) -> FeedbackPolarity:
    pos = count_keywords(text, positive)
    neg = count_keywords(text, negative)
    if pos > neg:
        return FeedbackPolarity.POSITIVE
    if neg > pos:
        return FeedbackPolarity.NEGATIVE
    return FeedbackPolarity.NEUTRAL


def classify_implicit(text: str) -> FeedbackPolarity:
    return classify(text, IMPLICIT_POSITIVE, IMPLICIT_NEGATIVE)


def classify_explicit(text: str) -> FeedbackPolarity:
    return classify(text, EXPLICIT_POSITIVE, EXPLICIT_NEGATIVE)


def detect_mood_cue(text: str) -> Optional[Dict[str, float]]:
    """Hormone deltas for the first mood group mentioned, or None."""
    lowered = text.lower()
    for keywords, deltas in MOOD_CUES:
        if any(keyword in lowered for keyword in keywords):
            return dict(deltas)
    return None


def detect_neurotransmitter(text: str) -> Optional[Neurotransmitter]:
    """First transmitter named in `text`, or None."""
    lowered = text.lower()
    for transmitter in TRANSMITTER_CUES:
        if transmitter.value.lower() in lowered:
            return transmitter
    return None
