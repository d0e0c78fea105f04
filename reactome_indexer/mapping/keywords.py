"""Controlled-vocabulary keyword tagging."""
from __future__ import annotations

import pathlib
from typing import Iterable, List, Optional

from ..utils.io import read_lines
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_VOCABULARY_PATH = (
    pathlib.Path(__file__).resolve().parents[1] / "resources" / "controlled_vocabulary.csv"
)


def load_vocabulary(path: Optional[str | pathlib.Path] = None) -> Optional[List[str]]:
    """Load the keyword vocabulary, returning ``None`` when it cannot be read."""
    vocabulary_path = pathlib.Path(path) if path else DEFAULT_VOCABULARY_PATH
    try:
        terms = read_lines(vocabulary_path)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("No keywords available, controlled vocabulary could not be loaded: %s", exc)
        return None
    LOGGER.info("Loaded %s controlled vocabulary terms from %s", len(terms), vocabulary_path)
    return terms


def match_keywords(name: Optional[str], vocabulary: Iterable[str]) -> List[str]:
    """Vocabulary terms that occur in ``name``, ignoring case."""
    if not name:
        return []
    lowered = name.lower()
    return [term for term in vocabulary if term and term.lower() in lowered]
