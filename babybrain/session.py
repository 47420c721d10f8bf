"""
Interaction session

Owns the brain for the lifetime of a conversation and runs one full
perceive -> spike -> learn -> reply -> feedback -> save cycle per line.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from .brain import Brain
from .config import BrainConfig
from .feedback import FeedbackPolarity
from .persistence import BrainPersistence
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


RESET_COMMANDS = ("reset", "/reset")
SAVE_COMMANDS = ("save", "/save")


@dataclass
class CycleResult:
    """Outcome of one interaction."""
    reply: str
    reply_words: List[str] = field(default_factory=list)
    history: List[Set[str]] = field(default_factory=list)
    mood: str = "neutral"
    implicit_feedback: FeedbackPolarity = FeedbackPolarity.NEUTRAL
    explicit_feedback: FeedbackPolarity = FeedbackPolarity.NEUTRAL
    command: Optional[str] = None

    @property
    def ticks(self) -> int:
        return len(self.history)

    @property
    def spikes(self) -> int:
        return sum(len(fired) for fired in self.history)


class Conversation:
    """
    Single owner of a Brain.

    Args:
        brain: Brain to talk to; loaded from `persistence` (or created) if None
        persistence: Where to autosave after every cycle; None disables saving
        max_ticks: Tick budget per cycle, defaults to the brain's config
        config: Config for a freshly created brain
        seed: Seeds the babbling RNG, which belongs to the session not the brain
    """

    def __init__(
        self,
        brain: Optional[Brain] = None,
        persistence: Optional[BrainPersistence] = None,
        max_ticks: Optional[int] = None,
        config: Optional[BrainConfig] = None,
        seed: Optional[int] = None
    ):
        self.persistence = persistence
        if brain is None:
            if persistence is not None:
                brain = persistence.load_or_create()
            else:
                brain = Brain(config=config)
        self.brain = brain
        self.max_ticks = max_ticks
        self.rng = random.Random(seed)
        self.last_reply_words: List[str] = []
        self.interaction_count = 0
        self._observers: List[Callable[[CycleResult], None]] = []

    def add_observer(self, callback: Callable[[CycleResult], None]) -> None:
        """Call `callback` with every CycleResult (visualizers, GUIs)."""
        self._observers.append(callback)

    def respond(self, text: str) -> CycleResult:
        brain = self.brain
        words = tokenize(text)

        implicit = brain.update_modulator_from_feedback(text)

        # The last reply takes part in learning so used associations stick
        seed_words = words + self.last_reply_words
        history = brain.run_spiking(seed_words, self.max_ticks)
        brain.learn_from_spikes(history)

        reply = brain.generate_reply(words, rng=self.rng)
        reply_words = tokenize(reply)
        explicit = brain.apply_feedback(text, reply_words)
        self.last_reply_words = reply_words

        self.interaction_count += 1
        if self.persistence is not None:
            self.persistence.save_quietly(brain)

        result = CycleResult(
            reply=reply,
            reply_words=reply_words,
            history=history,
            mood=brain.modulator.mood(),
            implicit_feedback=implicit,
            explicit_feedback=explicit,
        )
        for callback in self._observers:
            callback(result)
        return result

    def reset(self) -> None:
        """Forget everything and regrow the seed vocabulary."""
        self.brain = Brain(config=self.brain.config)
        self.last_reply_words = []
        logger.info("Brain reset")

    def save(self) -> Optional[str]:
        if self.persistence is None:
            return None
        return self.persistence.save_quietly(self.brain)

    def handle(self, line: str) -> Optional[CycleResult]:
        """
        Dispatch one input line.

        Returns None for blank lines, a CycleResult with `command` set for
        reset/save, and a normal CycleResult otherwise.
        """
        text = line.strip()
        if not text:
            return None

        command = text.lower()
        if command in RESET_COMMANDS:
            self.reset()
            return CycleResult(reply="… (reset total)", command="reset")
        if command in SAVE_COMMANDS:
            path = self.save()
            reply = "(je me suis sauvegardé.)" if path else "(pas de sauvegarde.)"
            return CycleResult(reply=reply, command="save")

        return self.respond(text)
