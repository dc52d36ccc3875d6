"""
Question bank loading and caching.

The bank is a JSON object ``{domain: {level: [question, ...]}}``. Parsing happens
once per load; the parsed bank lives in a ``QuestionSetCache`` owned by the caller,
which decides when to invalidate it.
"""
import os
import json
import logging
from typing import Dict, List, Optional, Any

from ...errors import QuestionSetSourceError
from ...interview.models import QuestionNode
from ...interview.schemas import parse_question_set

logger = logging.getLogger("question_sets")

# domain -> level -> ordered nodes, keys lower-cased
QuestionBank = Dict[str, Dict[str, List[QuestionNode]]]


class JsonFileQuestionSource:
    """Reads the raw question bank from a JSON file on disk."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Dict[str, Any]:
        """
        Read and decode the bank.

        Raises:
            QuestionSetSourceError: If the file is missing, unreadable or not a JSON object
        """
        logger.info("Loading question bank from %s", self.path)
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise QuestionSetSourceError(self.path, str(e)) from e
        except json.JSONDecodeError as e:
            raise QuestionSetSourceError(self.path, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise QuestionSetSourceError(self.path, "top level must be an object of domains")
        return data

    def fingerprint(self) -> Optional[float]:
        """Modification time of the file, or None if it cannot be read."""
        try:
            return os.path.getmtime(self.path)
        except OSError:
            return None


def build_question_bank(raw: Dict[str, Any]) -> QuestionBank:
    """Parse every (domain, level) set of a raw bank, skipping malformed entries."""
    bank: QuestionBank = {}
    for domain, levels in raw.items():
        if not isinstance(levels, dict):
            logger.warning("Domain %r does not map levels to question lists, ignoring it", domain)
            continue
        domain_key = str(domain).lower()
        parsed_levels = bank.setdefault(domain_key, {})
        for level, questions in levels.items():
            level_key = str(level).lower()
            parsed_levels[level_key] = parse_question_set(questions, label=f"{domain_key}/{level_key}")

    total = sum(len(questions) for levels in bank.values() for questions in levels.values())
    logger.info("Parsed question bank: %d domains, %d questions", len(bank), total)
    return bank


class QuestionSetCache:
    """
    Holds the parsed question bank for a source.

    The bank is loaded lazily on first access and kept until ``invalidate`` is
    called or ``reload_if_changed`` sees a new source fingerprint.
    """

    def __init__(self, source):
        self.source = source
        self._bank: Optional[QuestionBank] = None
        self._fingerprint: Optional[Any] = None

    @property
    def is_loaded(self) -> bool:
        return self._bank is not None

    def get_bank(self) -> QuestionBank:
        """Return the parsed bank, loading it if needed."""
        if self._bank is None:
            fingerprint = self._source_fingerprint()
            self._bank = build_question_bank(self.source.load())
            self._fingerprint = fingerprint
        return self._bank

    def invalidate(self) -> None:
        """Drop the parsed bank; the next access reloads it."""
        self._bank = None
        self._fingerprint = None
        logger.debug("Question bank cache invalidated")

    def reload_if_changed(self) -> bool:
        """
        Invalidate the cache when the source fingerprint differs from the one
        seen at load time.

        Returns:
            True if the cache was invalidated
        """
        if self._bank is None:
            return False
        current = self._source_fingerprint()
        if current is not None and current != self._fingerprint:
            logger.info("Question bank changed on disk, invalidating cache")
            self.invalidate()
            return True
        return False

    def _source_fingerprint(self) -> Optional[Any]:
        fingerprint = getattr(self.source, "fingerprint", None)
        return fingerprint() if callable(fingerprint) else None
