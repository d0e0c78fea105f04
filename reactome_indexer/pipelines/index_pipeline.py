"""Batch pipeline: walk the graph, build documents and load them into the search index."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from ..data.models import IndexDocument, InteractorSummary, ReactomeSummary
from ..data.schema import INDEXED_LABELS
from ..exceptions import IndexClientError, IndexerError
from ..export.ebeye import EbeyeConfig, EbeyeWriter
from ..graph.neo4j_reader import Neo4jConfig, Neo4jGraphReader
from ..index.solr_client import SolrClient, SolrConfig
from ..interactors.mitab import MitabConfig, MitabInteractionSource
from ..interactors.reconciler import AccessionReconciler
from ..interactors.taxonomy import EnsemblLineageClient, LineageConfig, TaxonomyCache
from ..mapping.document_builder import DocumentBuilder
from ..mapping.interactor_document import build_interactor_document
from ..mapping.keywords import load_vocabulary
from ..utils.config import load_config, section
from ..utils.io import write_json
from ..utils.logging import get_logger
from ..utils.progress import ProgressBar

LOGGER = get_logger(__name__)


class IndexerState(Enum):
    CREATED = "created"
    COUNTING = "counting"
    CLEARING_INDEX = "clearing_index"
    INDEXING_KIND = "indexing_kind"
    EXPORT_FOOTER = "export_footer"
    INDEXING_INTERACTORS = "indexing_interactors"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class IndexingConfig:
    batch_size: int = 1000
    cache_clear_interval: int = 30000
    progress_interval: int = 100
    excluded_accession_prefix: str = "EBI-"


@dataclass(slots=True)
class PhaseResult:
    """Outcome of indexing one entity population."""

    name: str
    processed: int = 0
    indexed: int = 0
    missing: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0


@dataclass(slots=True)
class IndexRunResult:
    state: IndexerState
    entries: int = 0
    phases: List[PhaseResult] = field(default_factory=list)
    failed_documents: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "state": self.state.value,
            "entries": self.entries,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "phases": [
                {
                    "name": phase.name,
                    "processed": phase.processed,
                    "indexed": phase.indexed,
                    "missing": phase.missing,
                    "elapsed_seconds": round(phase.elapsed_seconds, 3),
                }
                for phase in self.phases
            ],
            "failed_documents": self.failed_documents,
            "warnings": self.warnings,
            "error": self.error,
        }


class Indexer:
    """Drive one indexing run over the graph and the interaction dataset.

    Populations are indexed in a fixed order (physical entities, events,
    regulations, interactors). Each population is committed once it has been
    submitted; a failure to clean or commit the index aborts the run.
    """

    def __init__(
        self,
        graph,
        index,
        builder: DocumentBuilder,
        interactions=None,
        taxonomy: Optional[TaxonomyCache] = None,
        config: Optional[IndexingConfig] = None,
        exporter: Optional[EbeyeWriter] = None,
        progress: Optional[ProgressBar] = None,
    ):
        if interactions is not None and taxonomy is None:
            raise ValueError("A taxonomy cache is required to index interactors")
        self.graph = graph
        self.index = index
        self.builder = builder
        self.interactions = interactions
        self.taxonomy = taxonomy
        self.config = config or IndexingConfig()
        self.exporter = exporter
        self.progress = progress or ProgressBar()
        self.state = IndexerState.CREATED
        self.result = IndexRunResult(state=self.state)

    def _enter(self, state: IndexerState) -> None:
        LOGGER.debug("Indexer state %s -> %s", self.state.value, state.value)
        self.state = state
        self.result.state = state

    def index_all(self) -> IndexRunResult:
        """Run every phase and return the run summary; raises :class:`IndexerError`."""
        start = time.monotonic()
        try:
            self._enter(IndexerState.COUNTING)
            self.progress.total = self._count_entries()

            if self.exporter is not None:
                self.exporter.write_header(self._release_number())

            self._enter(IndexerState.CLEARING_INDEX)
            self._clean_index()

            self._enter(IndexerState.INDEXING_KIND)
            for label in INDEXED_LABELS:
                phase = self._index_label(label, self.result.entries)
                self.result.phases.append(phase)
                self.result.entries += phase.indexed
                if phase.indexed:
                    self._commit()
                self.graph.clear_cache()

            self._enter(IndexerState.EXPORT_FOOTER)
            if self.exporter is not None:
                self.exporter.write_footer(self.result.entries)
                self.exporter.close()

            if self.interactions is not None:
                self._enter(IndexerState.INDEXING_INTERACTORS)
                LOGGER.info("Started importing interactors data to the index")
                phase = self._index_interactors()
                self.result.phases.append(phase)
                self.result.entries += phase.indexed
                if phase.indexed:
                    self._commit()

            self._enter(IndexerState.DONE)
            self.result.elapsed_seconds = time.monotonic() - start
            self.progress.finish()
            LOGGER.info(
                "Data import finished with %s entries in %.1fs",
                self.result.entries,
                self.result.elapsed_seconds,
            )
            return self.result
        except Exception as exc:  # pylint: disable=broad-except
            self._enter(IndexerState.FAILED)
            self.result.elapsed_seconds = time.monotonic() - start
            self.result.error = f"{exc} (cause: {exc.__cause__!r})"
            LOGGER.exception("An error occurred during the data import")
            if isinstance(exc, IndexerError):
                raise
            raise IndexerError(f"An error occurred during the data import: {exc}") from exc
        finally:
            self._close_index()

    def _count_entries(self) -> int:
        LOGGER.info("Counting all entries for %s", ", ".join(INDEXED_LABELS))
        return sum(self.graph.count_by_label(label) for label in INDEXED_LABELS)

    def _release_number(self) -> int:
        try:
            return self.graph.db_version()
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error("Could not retrieve the release number from the database: %s", exc)
            self.result.warnings.append("release number unavailable, EB-eye header uses 0")
            return 0

    def _clean_index(self) -> None:
        try:
            LOGGER.info("Cleaning the search index")
            self.index.delete_all()
            self.index.commit()
        except IndexClientError as exc:
            raise IndexerError("An error occurred while cleaning the search index") from exc
        LOGGER.info("Search index has been cleaned")

    def _commit(self) -> None:
        try:
            self.index.commit()
        except IndexClientError as exc:
            raise IndexerError("Could not commit the search index") from exc

    def _close_index(self) -> None:
        try:
            self.index.close()
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error("An error occurred while closing the search index: %s", exc)

    def _index_label(self, label: str, previous: int) -> PhaseResult:
        start = time.monotonic()
        phase = PhaseResult(name=label)
        LOGGER.info("Getting all identifiers of %s", label)
        identifiers = self.graph.ids_by_label(label)
        LOGGER.info("[%s] %s", len(identifiers), label)

        batch: List[IndexDocument] = []
        for db_id in identifiers:
            document = self.builder.build(db_id)
            if document is None:
                phase.missing.append(str(db_id))
            else:
                if self.exporter is not None:
                    self.exporter.write_entry(document)
                batch.append(document)

            phase.processed += 1
            if phase.processed % self.config.batch_size == 0 and batch:
                phase.indexed += self.submit(batch)
                batch = []
                if self.exporter is not None:
                    self.exporter.flush()
                LOGGER.info("%s %s have now been added to the index", phase.processed, label)

            if phase.processed % self.config.progress_interval == 0:
                self.progress.update(previous + phase.processed)
            if phase.processed % self.config.cache_clear_interval == 0:
                self.graph.clear_cache()

        if batch:
            phase.indexed += self.submit(batch)

        phase.elapsed_seconds = time.monotonic() - start
        LOGGER.info("Elapsed time for %s is %.1fs", label, phase.elapsed_seconds)
        if phase.missing:
            LOGGER.info("Missing documents for:\n\t%s", "\n\t".join(phase.missing))
            self.result.warnings.append(f"{len(phase.missing)} {label} could not be mapped")
        self.progress.update(previous + phase.processed)
        return phase

    def submit(self, documents: List[IndexDocument]) -> int:
        """Add a batch, retrying one document at a time if the batch is rejected.

        Returns the number of documents that reached the index.
        """
        if not documents:
            LOGGER.error("Documents to index are empty")
            return 0
        try:
            self.index.add_documents(documents)
            return len(documents)
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error("Could not add a batch of %s documents, retrying one by one: %s", len(documents), exc)

        added = 0
        for document in documents:
            try:
                self.index.add_document(document)
                added += 1
            except Exception as exc:  # pylint: disable=broad-except
                LOGGER.error("Could not add document dbId %s name %s: %s", document.db_id, document.name, exc)
                self.result.failed_documents.append(document.db_id)
        return added

    def _index_interactors(self) -> PhaseResult:
        start = time.monotonic()
        phase = PhaseResult(name="Interactor")

        LOGGER.info("Getting all accessions from the interaction dataset")
        prefix = self.config.excluded_accession_prefix
        accessions = [
            accession
            for accession in self.interactions.all_accessions()
            if not (prefix and accession.startswith(prefix))
        ]

        self.taxonomy.load(self.graph)

        reconciler = AccessionReconciler(self.graph, progress=self.progress)
        unresolved, summaries = reconciler.reconcile(accessions)

        interactions = self.interactions.interactions_for(unresolved)
        LOGGER.info("Preparing documents for interactors [%s]", len(interactions))
        self.progress.total = len(interactions)

        batch: List[IndexDocument] = []
        for accession, accession_interactions in interactions.items():
            partners = self._partner_summaries(accession_interactions, summaries)
            if partners:
                interactor = accession_interactions[0].interactor_a
                batch.append(build_interactor_document(interactor, partners, self.taxonomy))
            phase.processed += 1
            if len(batch) >= self.config.batch_size:
                phase.indexed += self.submit(batch)
                batch = []
            if phase.processed % 1000 == 0:
                LOGGER.info("  >> preparing interactor documents [%s]", phase.processed)
            if phase.processed % self.config.progress_interval == 0:
                self.progress.update(phase.processed)

        if batch:
            phase.indexed += self.submit(batch)
        self.progress.update(phase.processed)
        phase.elapsed_seconds = time.monotonic() - start
        LOGGER.info("%s interactor(s) have now been added to the index", phase.indexed)
        return phase

    @staticmethod
    def _partner_summaries(interactions, summaries: Dict[str, ReactomeSummary]) -> List[InteractorSummary]:
        partners: List[InteractorSummary] = []
        for interaction in interactions:
            partner = interaction.interactor_b.accession
            if partner not in summaries:
                continue
            partners.append(
                InteractorSummary(
                    accession=partner,
                    reactome_summary=summaries[partner],
                    score=interaction.score,
                    evidences=list(interaction.evidences),
                )
            )
        return partners


def _indexing_config(config: Dict) -> IndexingConfig:
    indexing_cfg = section(config, "indexing")
    interactors_cfg = section(config, "interactors")
    return IndexingConfig(
        batch_size=indexing_cfg.get("batch_size", 1000),
        cache_clear_interval=indexing_cfg.get("cache_clear_interval", 30000),
        progress_interval=indexing_cfg.get("progress_interval", 100),
        excluded_accession_prefix=interactors_cfg.get("exclude_prefix", "EBI-"),
    )


def _build_interactions(config: Dict) -> Optional[MitabInteractionSource]:
    interactors_cfg = section(config, "interactors")
    if not interactors_cfg.get("mitab_path"):
        LOGGER.warning("interactors.mitab_path missing in config; interactors will not be indexed")
        return None
    return MitabInteractionSource(
        MitabConfig(
            path=interactors_cfg["mitab_path"],
            minimum_score=interactors_cfg.get("minimum_score", 0.45),
        )
    )


def _build_exporter(config: Dict) -> Optional[EbeyeWriter]:
    export_cfg = section(config, "export")
    if not export_cfg.get("ebeye_xml", False):
        return None
    defaults = EbeyeConfig()
    return EbeyeWriter(
        EbeyeConfig(
            path=export_cfg.get("path", defaults.path),
            name=export_cfg.get("name", defaults.name),
            description=export_cfg.get("description", defaults.description),
        )
    )


def run_indexer(config_path: str | Path = "config/indexer.yaml") -> IndexRunResult:
    """Build every collaborator from the YAML configuration and run the indexer."""
    config = load_config(config_path)

    neo4j_cfg = section(config, "graph", "neo4j")
    graph = Neo4jGraphReader(
        Neo4jConfig(
            uri=neo4j_cfg.get("uri", "bolt://localhost:7687"),
            user=neo4j_cfg.get("user", "neo4j"),
            password=neo4j_cfg["password"],
            database=neo4j_cfg.get("database"),
        )
    )
    solr_cfg = section(config, "index", "solr")
    index = SolrClient(
        SolrConfig(
            url=solr_cfg.get("url", "http://localhost:8983/solr"),
            core=solr_cfg.get("core", "reactome"),
            user=solr_cfg.get("user"),
            password=solr_cfg.get("password"),
            timeout=solr_cfg.get("timeout", 60),
        )
    )
    taxonomy_cfg = section(config, "taxonomy")
    lineage_config = LineageConfig(
        lineage_url=taxonomy_cfg.get("lineage_url", LineageConfig().lineage_url),
        throttle_wait_seconds=taxonomy_cfg.get("throttle_wait_seconds", 50.0),
        timeout=taxonomy_cfg.get("timeout", 30),
    )
    lineage = EnsemblLineageClient(lineage_config)
    taxonomy = TaxonomyCache(lineage, throttle_wait_seconds=lineage_config.throttle_wait_seconds)

    vocabulary = load_vocabulary(section(config, "indexing").get("vocabulary_path"))
    indexer = Indexer(
        graph=graph,
        index=index,
        builder=DocumentBuilder(graph, vocabulary=vocabulary),
        interactions=_build_interactions(config),
        taxonomy=taxonomy,
        config=_indexing_config(config),
        exporter=_build_exporter(config),
    )

    report_path = section(config, "report").get("path")
    try:
        result = indexer.index_all()
    finally:
        lineage.close()
        graph.close()
        if report_path:
            write_json(report_path, indexer.result.to_dict())
    return result
