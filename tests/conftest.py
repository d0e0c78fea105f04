from __future__ import annotations

import io
from typing import Dict, List, Optional

import pytest  # type: ignore[import-not-found]

from reactome_indexer.data.models import GraphEntity, IndexDocument, Taxon
from reactome_indexer.exceptions import GraphError, IndexClientError
from reactome_indexer.graph import queries
from reactome_indexer.utils.progress import ProgressBar


class FakeGraph:
    """In-memory stand-in for :class:`Neo4jGraphReader`."""

    def __init__(
        self,
        entities: Optional[Dict[int, GraphEntity]] = None,
        labels: Optional[Dict[str, List[int]]] = None,
        responses: Optional[Dict[str, object]] = None,
        version: Optional[int] = 90,
    ):
        self.entities = entities or {}
        self.labels = labels or {}
        self.responses = responses or {}
        self.version = version
        self.cache_clears = 0
        self.queries: List[tuple] = []
        self.closed = False

    def query(self, cypher: str, **params) -> List[Dict]:
        self.queries.append((cypher, params))
        response = self.responses.get(cypher, [])
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(**params)
        return list(response)

    def ids_by_label(self, label: str) -> List[int]:
        return list(self.labels.get(label, []))

    def count_by_label(self, label: str) -> int:
        return len(self.labels.get(label, []))

    def load(self, db_id: int) -> Optional[GraphEntity]:
        entity = self.entities.get(db_id)
        if isinstance(entity, Exception):
            raise entity
        return entity

    def clear_cache(self) -> None:
        self.cache_clears += 1

    def db_version(self) -> int:
        if self.version is None:
            raise GraphError("no DBInfo node")
        return self.version

    def close(self) -> None:
        self.closed = True


class FakeIndex:
    """Records every call a :class:`SolrClient` would receive."""

    def __init__(
        self,
        fail_batches: bool = False,
        failing_ids: Optional[set] = None,
        fail_commit_after: Optional[int] = None,
        fail_delete: bool = False,
    ):
        self.fail_batches = fail_batches
        self.failing_ids = failing_ids or set()
        self.fail_commit_after = fail_commit_after
        self.fail_delete = fail_delete
        self.batches: List[List[IndexDocument]] = []
        self.singles: List[IndexDocument] = []
        self.commits = 0
        self.deleted = False
        self.closed = False

    @property
    def documents(self) -> List[IndexDocument]:
        return [document for batch in self.batches for document in batch] + self.singles

    def delete_all(self) -> None:
        if self.fail_delete:
            raise IndexClientError("delete refused")
        self.deleted = True

    def add_documents(self, documents) -> None:
        if self.fail_batches:
            raise IndexClientError("batch refused")
        self.batches.append(list(documents))

    def add_document(self, document: IndexDocument) -> None:
        if document.db_id in self.failing_ids:
            raise IndexClientError(f"document {document.db_id} refused")
        self.singles.append(document)

    def commit(self) -> None:
        if self.fail_commit_after is not None and self.commits >= self.fail_commit_after:
            raise IndexClientError("commit refused")
        self.commits += 1

    def close(self) -> None:
        self.closed = True


class FakeLineage:
    """Lineage client answering from a parent map; values may be exceptions."""

    def __init__(self, parents: Optional[Dict[int, object]] = None):
        self.parents = parents or {}
        self.calls: List[int] = []

    def parent_tax_id(self, tax_id: int) -> int:
        self.calls.append(tax_id)
        answer = self.parents[tax_id]
        if isinstance(answer, list):
            answer = answer.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


def build_entity(
    db_id: int,
    schema_class: str = "Complex",
    names: Optional[List[str]] = None,
    species: Optional[List[Taxon]] = None,
    **kwargs,
) -> GraphEntity:
    return GraphEntity(
        db_id=db_id,
        schema_class=schema_class,
        display_name=(names or [f"entity {db_id}"])[0],
        st_id=f"R-HSA-{db_id}",
        names=names if names is not None else [f"entity {db_id}"],
        species=species if species is not None else [Taxon("Homo sapiens", "9606")],
        **kwargs,
    )


def species_responses(rows: Optional[List[Dict]] = None) -> Dict[str, object]:
    return {queries.SIMPLE_ENTITY_SPECIES: rows or []}


@pytest.fixture
def quiet_progress() -> ProgressBar:
    return ProgressBar(stream=io.StringIO())
