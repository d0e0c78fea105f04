"""Read-only access to the Reactome knowledge graph stored in Neo4j."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..data.models import GraphEntity
from ..exceptions import GraphError, GraphLoadError
from ..utils.logging import get_logger
from . import queries
from .hydrate import hydrate_entity

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class Neo4jConfig:
    uri: str
    user: str
    password: str
    database: Optional[str] = None


class Neo4jGraphReader:
    """Wrapper around the official Neo4j driver exposing the queries the indexer needs.

    A single session is reused between calls; :meth:`clear_cache` drops it so any
    records buffered by the driver are released.
    """

    def __init__(self, config: Neo4jConfig, driver=None):
        self.config = config
        if driver is None:
            try:
                from neo4j import GraphDatabase  # type: ignore[import-not-found]
            except ImportError as exc:  # pragma: no cover
                raise ImportError("neo4j must be installed to use the graph reader") from exc
            driver = GraphDatabase.driver(config.uri, auth=(config.user, config.password))
        self._driver = driver
        self._session = None

    def close(self) -> None:
        self._close_session()
        self._driver.close()

    def clear_cache(self) -> None:
        LOGGER.debug("Recycling graph session")
        self._close_session()

    def query(self, cypher: str, **params: Any) -> List[Dict[str, Any]]:
        """Run a read query and return each record as a dictionary."""
        try:
            result = self._get_session().run(cypher, params)
            return [record.data() for record in result]
        except Exception as exc:  # pylint: disable=broad-except
            raise GraphError(f"Graph query failed: {exc}") from exc

    def ids_by_label(self, label: str) -> List[int]:
        rows = self.query(queries.IDS_BY_LABEL.format(label=label))
        return [int(row["dbId"]) for row in rows]

    def count_by_label(self, label: str) -> int:
        rows = self.query(queries.COUNT_BY_LABEL.format(label=label))
        return int(rows[0]["total"]) if rows else 0

    def load(self, db_id: int) -> Optional[GraphEntity]:
        rows = self.query(
            queries.LOAD_NEIGHBOURHOOD,
            dbId=db_id,
            expanded=list(queries.EXPANDED_RELATIONS),
        )
        if not rows:
            return None
        try:
            return hydrate_entity(rows[0])
        except (KeyError, TypeError, ValueError) as exc:
            raise GraphLoadError(f"Could not map graph object {db_id}: {exc}") from exc

    def db_version(self) -> int:
        rows = self.query(queries.DB_VERSION)
        if not rows or rows[0].get("version") is None:
            raise GraphError("DBInfo node carries no release version")
        return int(rows[0]["version"])

    def _get_session(self):
        if self._session is None:
            if self.config.database:
                self._session = self._driver.session(database=self.config.database)
            else:
                self._session = self._driver.session()
        return self._session

    def _close_session(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
