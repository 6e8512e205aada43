"""
Sentence bank for reading challenges.

Sentences are grouped by difficulty level. Selection prefers sentences that
contain words the child has needed help with (or that a parent chose as
focus words) so practice lands on weak spots.
"""

import json
import random
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..config.defaults import SelectionParams
from ..errors import SentenceSourceError
from ..text.normalizer import tokenize

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SentenceLevel:
    """One difficulty level of the bank."""
    id: int
    name: str
    sentences: tuple[str, ...]


class SentenceBank:
    """Levels of candidate sentences."""

    def __init__(self, levels: Iterable[SentenceLevel], params: Optional[SelectionParams] = None):
        self.params = params or SelectionParams()
        self.levels: list[SentenceLevel] = list(levels)
        if not self.levels:
            self.levels = [SentenceLevel(id=1, name="Fallback",
                                         sentences=(self.params.fallback_sentence,))]

    @classmethod
    def from_dict(cls, data: dict[str, Any], params: Optional[SelectionParams] = None) -> "SentenceBank":
        """Build from ``{"levels": [{"id", "name", "sentences"}]}``."""
        levels = []
        for raw in data.get("levels") or []:
            try:
                levels.append(SentenceLevel(
                    id=int(raw["id"]),
                    name=str(raw.get("name", f"Level {raw['id']}")),
                    sentences=tuple(str(s) for s in raw.get("sentences") or []),
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise SentenceSourceError(f"Malformed level entry: {e}",
                                          context={"entry": raw}) from e
        return cls(levels, params)

    @classmethod
    def from_file(cls, path: Union[str, Path], params: Optional[SelectionParams] = None) -> "SentenceBank":
        """Load a JSON or YAML words file."""
        path = Path(path)
        try:
            with open(path) as f:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise SentenceSourceError(f"Could not read sentence bank: {e}",
                                      source=str(path)) from e
        return cls.from_dict(data or {}, params)

    @classmethod
    def load_or_fallback(cls, path: Optional[Union[str, Path]],
                         params: Optional[SelectionParams] = None) -> "SentenceBank":
        """Load a words file, using the one-sentence fallback bank on failure."""
        if path is None:
            return cls([], params)
        try:
            return cls.from_file(path, params)
        except SentenceSourceError as e:
            logger.warning("Using fallback sentence bank", source=e.source, error=str(e))
            return cls([], params)

    def level(self, level_id: int) -> SentenceLevel:
        """Level by id, or the first level if unknown."""
        for level in self.levels:
            if level.id == level_id:
                return level
        return self.levels[0]

    def choose_sentence(
        self,
        level_id: Optional[int] = None,
        struggling_words: Iterable[str] = (),
        focus_words: Iterable[str] = (),
        rng: Optional[random.Random] = None
    ) -> str:
        """
        Pick a sentence for the next challenge.

        Args:
            level_id: Difficulty level, defaults to the configured level
            struggling_words: Tokens the child has needed help with
            focus_words: Tokens a parent asked to practice
            rng: Random source

        Returns:
            Sentence text
        """
        rng = rng or random.Random()
        level = self.level(self.params.default_level if level_id is None else level_id)
        candidates = list(level.sentences)
        if not candidates:
            return self.params.fallback_sentence

        targets = set(focus_words)
        if self.params.prefer_struggling_words:
            targets.update(struggling_words)
        if targets:
            preferred = [s for s in candidates if targets.intersection(tokenize(s))]
            if preferred:
                candidates = preferred

        sentence = rng.choice(candidates)
        logger.debug("Chose sentence", level_id=level.id, sentence=sentence,
                     candidates=len(candidates), weak_words=len(targets))
        return sentence
