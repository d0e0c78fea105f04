"""Interaction dataset backed by an IntAct micluster PSI-MITAB file."""
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import polars as pl  # type: ignore[import-not-found]

from ..data.models import Interaction, Interactor
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

_ID_A, _ID_B = 0, 1
_ALIASES_A, _ALIASES_B = 4, 5
_TAXID_A, _TAXID_B = 9, 10
_INTERACTION_IDS = 13
_CONFIDENCE = 14

_ALIAS_PATTERN = re.compile(r'^[^:]+:"?(?P<value>.+?)"?\((?P<kind>[^()]+)\)$')
_TAXID_PATTERN = re.compile(r"taxid:(-?\d+)")
_SCORE_PATTERN = re.compile(r"intact-miscore:([0-9.]+)")
# Preferred alias kinds, most specific first.
_ALIAS_KINDS = ("gene name", "display_short", "display_long")


@dataclass(slots=True)
class MitabConfig:
    path: str | pathlib.Path
    minimum_score: float = 0.45
    encoding: str = "utf8"


@dataclass(slots=True)
class _Row:
    interactor_a: Interactor
    interactor_b: Interactor
    score: float
    evidences: List[str]


def _split(field: Optional[str]) -> List[str]:
    if not field or field == "-":
        return []
    return [part for part in field.split("|") if part]


def parse_identifier(field: Optional[str]) -> Optional[str]:
    """First identifier of a MITAB id column, without its database prefix."""
    entries = _split(field)
    if not entries:
        return None
    _, _, value = entries[0].partition(":")
    return value.strip('"') or None


def parse_alias(field: Optional[str]) -> Optional[str]:
    found: Dict[str, str] = {}
    for entry in _split(field):
        match = _ALIAS_PATTERN.match(entry)
        if match:
            found.setdefault(match.group("kind"), match.group("value"))
    for kind in _ALIAS_KINDS:
        if kind in found:
            return found[kind]
    return None


def parse_tax_id(field: Optional[str]) -> int:
    match = _TAXID_PATTERN.search(field or "")
    return int(match.group(1)) if match else 0


def parse_score(field: Optional[str]) -> float:
    match = _SCORE_PATTERN.search(field or "")
    return float(match.group(1)) if match else 0.0


def parse_evidences(field: Optional[str]) -> List[str]:
    return [entry.partition(":")[2] for entry in _split(field) if entry.startswith("intact:")]


class MitabInteractionSource:
    """Expose accessions and scored interactions from a PSI-MITAB 2.5 file."""

    def __init__(self, config: MitabConfig):
        self.config = config
        self._rows: Optional[List[_Row]] = None

    def all_accessions(self) -> List[str]:
        accessions = set()
        for row in self._load():
            accessions.add(row.interactor_a.accession)
            accessions.add(row.interactor_b.accession)
        return sorted(accessions)

    def interactions_for(self, accessions: Iterable[str]) -> Dict[str, List[Interaction]]:
        """Interactions of each queried accession, which is always placed on side A."""
        wanted = set(accessions)
        result: Dict[str, List[Interaction]] = {}
        for row in self._load():
            if row.score < self.config.minimum_score:
                continue
            for queried, partner in self._orientations(row):
                if queried.accession in wanted:
                    result.setdefault(queried.accession, []).append(
                        Interaction(
                            interactor_a=queried,
                            interactor_b=partner,
                            score=row.score,
                            evidences=list(row.evidences),
                        )
                    )
        LOGGER.info("Found interactions for %s of %s queried accessions", len(result), len(wanted))
        return result

    @staticmethod
    def _orientations(row: _Row) -> List[Tuple[Interactor, Interactor]]:
        if row.interactor_a.accession == row.interactor_b.accession:
            return [(row.interactor_a, row.interactor_b)]
        return [(row.interactor_a, row.interactor_b), (row.interactor_b, row.interactor_a)]

    def _load(self) -> List[_Row]:
        if self._rows is not None:
            return self._rows
        path = pathlib.Path(self.config.path)
        if not path.exists():
            raise FileNotFoundError(f"Interaction file not found: {path}")
        table = pl.read_csv(
            path,
            has_header=False,
            separator="\t",
            comment_prefix="#",
            quote_char=None,
            encoding=self.config.encoding,
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
        rows: List[_Row] = []
        for values in table.iter_rows():
            row = self._parse_row(values)
            if row is not None:
                rows.append(row)
        LOGGER.info("Loaded %s interactions from %s", len(rows), path)
        self._rows = rows
        return rows

    @staticmethod
    def _parse_row(values: Tuple[Optional[str], ...]) -> Optional[_Row]:
        if len(values) <= _CONFIDENCE:
            LOGGER.debug("Skipping MITAB line with %s columns", len(values))
            return None
        accession_a = parse_identifier(values[_ID_A])
        accession_b = parse_identifier(values[_ID_B])
        if not accession_a or not accession_b:
            return None
        alias_a = parse_alias(values[_ALIASES_A])
        alias_b = parse_alias(values[_ALIASES_B])
        return _Row(
            interactor_a=Interactor(
                accession=accession_a,
                alias=None if alias_a == accession_a else alias_a,
                tax_id=parse_tax_id(values[_TAXID_A]),
            ),
            interactor_b=Interactor(
                accession=accession_b,
                alias=None if alias_b == accession_b else alias_b,
                tax_id=parse_tax_id(values[_TAXID_B]),
            ),
            score=parse_score(values[_CONFIDENCE]),
            evidences=parse_evidences(values[_INTERACTION_IDS]),
        )
