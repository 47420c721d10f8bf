"""
Brain Persistence Module

Snapshot save/load for the baby brain.

The brain is stored as its plain snapshot record (see Brain.get_snapshot),
serialized with dill by default or as JSON when the path ends in ".json".
A small ".meta.json" sidecar is written next to every save for inspection.

Writes are not atomic: a crash mid-write can corrupt the file, in which case
the next start simply grows a fresh brain.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import dill

from .brain import Brain, SnapshotError
from .config import BrainConfig

logger = logging.getLogger(__name__)


DEFAULT_BRAIN_PATH = "baby_brain.brain"


class BrainPersistence:
    """
    Handles saving and loading of one brain file.

    Formats:
    - "dill": binary, default
    - "json": human-readable, chosen by a ".json" suffix
    """

    VERSION = "1.0"

    def __init__(self, filepath: str = DEFAULT_BRAIN_PATH, config: Optional[BrainConfig] = None):
        self.filepath = Path(filepath)
        self.config = config
        self._save_count = 0
        self._last_save_time: Optional[datetime] = None

    @property
    def format(self) -> str:
        return "json" if self.filepath.suffix.lower() == ".json" else "dill"

    @property
    def meta_path(self) -> Path:
        return self.filepath.with_suffix('.meta.json')

    def save(self, brain: Brain) -> str:
        """
        Write the brain's snapshot.

        Returns:
            Path to saved file

        Raises:
            OSError, TypeError, dill.PicklingError: the write failed
        """
        if self.filepath.parent and not self.filepath.parent.exists():
            self.filepath.parent.mkdir(parents=True, exist_ok=True)

        save_data = {
            'version': self.VERSION,
            'saved_at': datetime.now().isoformat(),
            'state': brain.get_snapshot(),
        }

        if self.format == "json":
            with open(self.filepath, 'w', encoding='utf-8') as f:
                json.dump(save_data, f, ensure_ascii=False, indent=2)
        else:
            with open(self.filepath, 'wb') as f:
                dill.dump(save_data, f, protocol=dill.HIGHEST_PROTOCOL)

        self._save_count += 1
        self._last_save_time = datetime.now()

        with open(self.meta_path, 'w', encoding='utf-8') as f:
            json.dump({
                'version': save_data['version'],
                'saved_at': save_data['saved_at'],
                'format': self.format,
                'neurons': len(brain.neurons),
                'synapses': len(brain.synapses),
                'save_count': self._save_count,
                'file_size_bytes': os.path.getsize(self.filepath),
            }, f, indent=2)

        logger.debug("Saved brain to %s", self.filepath)
        return str(self.filepath)

    def load(self) -> Brain:
        """
        Read the brain back.

        Raises:
            FileNotFoundError: no save file
            SnapshotError: the file does not hold a valid snapshot
        """
        if not self.filepath.exists():
            raise FileNotFoundError(f"Save file not found: {self.filepath}")

        if self.format == "json":
            with open(self.filepath, 'r', encoding='utf-8') as f:
                save_data = json.load(f)
        else:
            with open(self.filepath, 'rb') as f:
                save_data = dill.load(f)

        if not isinstance(save_data, dict) or 'state' not in save_data:
            raise SnapshotError(f"{self.filepath} does not contain a brain snapshot")

        brain = Brain.from_snapshot(save_data['state'], config=self.config)
        logger.debug("Loaded brain from %s (%d neurons)", self.filepath, len(brain.neurons))
        return brain

    def load_or_create(self) -> Brain:
        """Load the saved brain, or grow a fresh one if that fails."""
        try:
            return self.load()
        except FileNotFoundError:
            logger.info("No saved brain at %s, starting fresh", self.filepath)
        except Exception as e:
            # A corrupt pickle can raise almost anything from dill.load
            logger.warning("Could not load brain from %s (%s: %s), starting fresh",
                           self.filepath, type(e).__name__, e)
        return Brain(config=self.config)

    def save_quietly(self, brain: Brain) -> Optional[str]:
        """Save, logging and discarding any failure."""
        try:
            return self.save(brain)
        except Exception as e:
            logger.warning("Could not save brain to %s (%s: %s)", self.filepath, type(e).__name__, e)
            return None

    def read_meta(self) -> Dict[str, Any]:
        if not self.meta_path.exists():
            return {}
        with open(self.meta_path, encoding='utf-8') as f:
            return json.load(f)


# Convenience functions for direct use

def save_brain(brain: Brain, filepath: str = DEFAULT_BRAIN_PATH) -> str:
    return BrainPersistence(filepath).save(brain)


def load_brain(filepath: str = DEFAULT_BRAIN_PATH, config: Optional[BrainConfig] = None) -> Brain:
    return BrainPersistence(filepath, config=config).load()


def load_or_create(filepath: str = DEFAULT_BRAIN_PATH, config: Optional[BrainConfig] = None) -> Brain:
    return BrainPersistence(filepath, config=config).load_or_create()
