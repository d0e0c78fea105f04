"""Organism names for interactors, backed by the Ensembl taxonomy lineage service."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests

from ..data.schema import NO_SPECIES
from ..exceptions import GraphError, LineageLookupError, LineageThrottledError
from ..graph import queries
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

# Taxonomy ids that never denote an organism (unknown, root, in vitro).
NON_ORGANISM_TAX_IDS = frozenset({0, 1, -1})


@dataclass(slots=True)
class LineageConfig:
    lineage_url: str = "https://rest.ensembl.org/taxonomy/id/"
    throttle_wait_seconds: float = 50.0
    timeout: int = 30


class EnsemblLineageClient:
    """Look up the parent of a taxon through the Ensembl REST API."""

    def __init__(self, config: LineageConfig, session: Optional[requests.Session] = None):
        self.config = config
        self._session = session or requests.Session()

    def parent_tax_id(self, tax_id: int) -> int:
        url = f"{self.config.lineage_url.rstrip('/')}/{tax_id}"
        try:
            response = self._session.get(
                url,
                headers={"Content-Type": "application/json"},
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            raise LineageLookupError(f"Lineage request for {tax_id} failed: {exc}") from exc
        if response.status_code == 429:
            raise LineageThrottledError(f"Lineage service throttled request for {tax_id}")
        try:
            response.raise_for_status()
            return int(response.json()["parent"]["id"])
        except requests.RequestException as exc:
            raise LineageLookupError(f"Taxonomy id {tax_id} does not exist: {exc}") from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise LineageLookupError(f"Unexpected lineage payload for {tax_id}: {exc}") from exc

    def close(self) -> None:
        self._session.close()


class TaxonomyCache:
    """Map taxonomy ids to species names for the duration of one run.

    Seeded with every species in the graph; unknown ids are resolved through their
    lineage parent. Lookups that fail are never cached, so a later request retries.
    """

    def __init__(
        self,
        lineage_client,
        throttle_wait_seconds: float = 50.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._lineage = lineage_client
        self._throttle_wait = throttle_wait_seconds
        self._sleep = sleep
        self._names: Dict[int, str] = {}

    def load(self, graph) -> None:
        """Seed the cache with the species known to the graph."""
        LOGGER.info("Creating taxonomy map")
        try:
            rows = graph.query(queries.ALL_SPECIES)
        except GraphError as exc:
            LOGGER.error("Could not load species from the graph: %s", exc)
            return
        for row in rows:
            try:
                self.add(int(row["taxId"]), row["displayName"])
            except (KeyError, TypeError, ValueError):
                LOGGER.warning("Skipping species with invalid taxonomy id: %s", row)
        LOGGER.info("Taxonomy map is done (%s species)", len(self._names))

    def add(self, tax_id: int, name: str) -> None:
        self._names[tax_id] = name

    def get(self, tax_id: int) -> Optional[str]:
        return self._names.get(tax_id)

    def __contains__(self, tax_id: object) -> bool:
        return tax_id in self._names

    def __len__(self) -> int:
        return len(self._names)

    def resolve(self, tax_id: int) -> str:
        if tax_id in self._names:
            return self._names[tax_id]
        return self.lookup_lineage(tax_id)

    def lookup_lineage(self, tax_id: int, retry_on_throttle: bool = True) -> str:
        """Name the species of ``tax_id`` after its parent, or return the sentinel."""
        if tax_id in NON_ORGANISM_TAX_IDS:
            return NO_SPECIES
        try:
            parent = self._lineage.parent_tax_id(tax_id)
        except LineageThrottledError:
            if not retry_on_throttle:
                LOGGER.warning("Lineage service still throttling taxonomy id %s, giving up", tax_id)
                return NO_SPECIES
            LOGGER.info("Lineage service throttled, waiting %ss before retrying %s", self._throttle_wait, tax_id)
            self._sleep(self._throttle_wait)
            return self.lookup_lineage(tax_id, retry_on_throttle=False)
        except LineageLookupError as exc:
            LOGGER.info("Taxonomy id does not exist: %s", exc)
            return NO_SPECIES

        species = self._names.get(parent)
        if species is None:
            return NO_SPECIES
        self._names[tax_id] = species
        return species
