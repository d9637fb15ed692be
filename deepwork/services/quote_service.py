"""Motivational quotes shown during breaks."""

import logging
import random
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_QUOTES = [
    "The successful warrior is the average man, with laser-like focus.",
    "Concentrate all your thoughts upon the work at hand.",
    "Deep work is the superpower of the 21st century.",
    "It's not that I'm so smart, it's just that I stay with problems longer.",
    "Focus on being productive instead of busy.",
    "Starve your distractions, feed your focus.",
    "You can do anything, but not everything.",
    "The shorter way to do many things is to do only one thing at a time.",
    "Where focus goes, energy flows.",
    "Rest is not idleness. It is part of the work.",
]


class QuoteService:
    """Picks a random quote from a built-in list or a YAML file."""

    def __init__(self, quotes: list[str] | None = None, rng: random.Random | None = None):
        """Initialize the quote service.

        Args:
            quotes: Quotes to choose from. Defaults to the built-in list.
            rng: Random generator, injectable for tests.
        """
        self._quotes = list(quotes) if quotes else list(DEFAULT_QUOTES)
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: str | Path | None) -> "QuoteService":
        """Load quotes from a YAML list, falling back to the built-ins.

        Args:
            path: YAML file containing a list of strings, or None.

        Returns:
            QuoteService instance.
        """
        if path is None:
            return cls()

        path = Path(path)
        if not path.exists():
            logger.warning(f"Quotes file not found at {path}, using built-in quotes")
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error reading quotes file: {e}, using built-in quotes")
            return cls()

        if not isinstance(data, list):
            logger.warning(f"Quotes file {path} is not a list, using built-in quotes")
            return cls()

        quotes = [str(q).strip() for q in data if str(q).strip()]
        return cls(quotes)

    @property
    def quotes(self) -> list[str]:
        return list(self._quotes)

    def pick(self) -> str:
        """Return a random quote."""
        return self._rng.choice(self._quotes)
