"""Partition interaction-dataset accessions into those present in the graph and the rest."""
from __future__ import annotations

from typing import Dict, Iterable, Optional, Set, Tuple

from ..data.models import ReactomeSummary
from ..exceptions import GraphError, IndexerError
from ..graph import queries
from ..utils.logging import get_logger
from ..utils.progress import ProgressBar

LOGGER = get_logger(__name__)


def preferred_id(row: Dict) -> str:
    """Stable identifier of a referring entity, falling back to its database id."""
    st_id = row.get("stId")
    if st_id:
        return str(st_id)
    LOGGER.warning("No StableIdentifier for %s >> %s", row.get("dbId"), row.get("displayName"))
    return str(row.get("dbId"))


class AccessionReconciler:
    """Find which accessions the graph already knows and who refers to them.

    One traversal is issued per matched accession, which is acceptable for an
    offline batch run.
    """

    def __init__(self, graph, progress: Optional[ProgressBar] = None):
        self.graph = graph
        self.progress = progress

    def reconcile(self, accessions: Iterable[str]) -> Tuple[Set[str], Dict[str, ReactomeSummary]]:
        wanted = set(accessions)
        unresolved = set(wanted)
        summaries: Dict[str, ReactomeSummary] = {}

        try:
            identifiers = [row["identifier"] for row in self.graph.query(queries.REFERENCE_IDENTIFIERS)]
            LOGGER.info(
                "Reconciling %s accessions against %s reference entities",
                len(wanted),
                len(identifiers),
            )
            if self.progress is not None:
                self.progress.total = len(identifiers)

            for position, identifier in enumerate(identifiers, start=1):
                if self.progress is not None and position % 100 == 0:
                    self.progress.update(position)
                if identifier not in wanted:
                    continue
                unresolved.discard(identifier)
                for row in self.graph.query(queries.ACCESSION_REFERRERS, accession=identifier):
                    summary = summaries.setdefault(identifier, ReactomeSummary())
                    summary.add(preferred_id(row), row.get("displayName") or "")
        except GraphError as exc:
            LOGGER.error("Querying accessions in the graph caused an error: %s", exc)
            raise IndexerError("Querying accessions in the graph caused an error") from exc

        if self.progress is not None:
            self.progress.update(self.progress.total)
        LOGGER.info(
            "%s accessions are in the graph, %s are not",
            len(wanted) - len(unresolved),
            len(unresolved),
        )
        return unresolved, summaries
