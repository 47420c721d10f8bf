"""Word interning: dense integer handles for the neuron arena."""

from typing import Dict, Iterator, List


class Vocabulary:
    """
    Monotonic word <-> handle table.

    Handles are assigned in first-seen order starting at 0 and are never
    reused, so they double as indices into per-neuron numpy arrays.
    """

    def __init__(self):
        self._handles: Dict[str, int] = {}
        self._words: List[str] = []

    def intern(self, word: str) -> int:
        """Return the handle for `word`, creating one if needed."""
        handle = self._handles.get(word)
        if handle is None:
            handle = len(self._words)
            self._handles[word] = handle
            self._words.append(word)
        return handle

    def handle(self, word: str) -> int:
        return self._handles[word]

    def word(self, handle: int) -> str:
        return self._words[handle]

    def __contains__(self, word: object) -> bool:
        return word in self._handles

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __repr__(self):
        return f"Vocabulary(size={len(self)})"
