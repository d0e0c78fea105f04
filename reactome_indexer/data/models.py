"""Dataclasses describing graph entities, index documents and interaction data."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Set


@dataclass(slots=True)
class Taxon:
    display_name: str
    tax_id: Optional[str] = None


@dataclass(slots=True)
class Person:
    db_id: int
    display_name: str = ""
    surname: str = ""
    first_name: Optional[str] = None
    initial: Optional[str] = None
    orcid_id: Optional[str] = None


@dataclass(slots=True)
class InstanceEdit:
    """An authoring or reviewing record attached to an event."""

    authors: List[Person] = field(default_factory=list)


@dataclass(slots=True)
class Publication:
    """A literature reference, book or URL cited by an entity."""

    schema_class: str
    title: Optional[str] = None
    pubmed_id: Optional[int] = None
    isbn: Optional[str] = None
    authors: List[Person] = field(default_factory=list)


@dataclass(slots=True)
class Summation:
    text: str


@dataclass(slots=True)
class Disease:
    identifier: str
    names: List[str] = field(default_factory=list)
    synonyms: Optional[List[str]] = None


@dataclass(slots=True)
class Compartment:
    display_name: str
    accession: Optional[str] = None


@dataclass(slots=True)
class DatabaseIdentifier:
    identifier: str
    display_name: str
    database_name: Optional[str] = None


@dataclass(slots=True)
class ReferenceDatabase:
    display_name: str
    access_url: Optional[str] = None


@dataclass(slots=True)
class GoTerm:
    schema_class: str
    accession: str
    display_name: str


@dataclass(slots=True)
class ReferenceEntity:
    """The node carrying the canonical external accession of a physical entity."""

    db_id: int
    schema_class: str
    display_name: str
    identifier: Optional[str] = None
    names: List[str] = field(default_factory=list)
    other_identifiers: List[str] = field(default_factory=list)
    gene_names: List[str] = field(default_factory=list)
    secondary_identifiers: List[str] = field(default_factory=list)
    variant_identifier: Optional[str] = None
    reference_database: Optional[ReferenceDatabase] = None
    cross_references: List[DatabaseIdentifier] = field(default_factory=list)


@dataclass(slots=True)
class CatalystActivity:
    activity: Optional[GoTerm] = None
    physical_entity_names: List[str] = field(default_factory=list)


@dataclass(slots=True)
class RelatedObject:
    """A regulated entity or regulator as seen from a regulation."""

    db_id: int
    schema_class: str
    display_name: str
    st_id: Optional[str] = None
    names: List[str] = field(default_factory=list)
    physical_entity_names: List[str] = field(default_factory=list)


@dataclass(slots=True)
class GraphEntity:
    """A read-only object loaded from the knowledge graph.

    Attributes that do not apply to the entity's schema class are left empty.
    """

    db_id: int
    schema_class: str
    display_name: str
    st_id: Optional[str] = None
    old_st_id: Optional[str] = None
    labels: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    literature_references: List[Publication] = field(default_factory=list)
    summations: List[Summation] = field(default_factory=list)
    diseases: List[Disease] = field(default_factory=list)
    compartments: List[Compartment] = field(default_factory=list)
    cross_references: List[DatabaseIdentifier] = field(default_factory=list)
    species: List[Taxon] = field(default_factory=list)
    related_species: List[Taxon] = field(default_factory=list)
    go_cellular_component: Optional[GoTerm] = None
    go_biological_process: Optional[GoTerm] = None
    reference_entity: Optional[ReferenceEntity] = None
    authored: List[InstanceEdit] = field(default_factory=list)
    reviewed: List[InstanceEdit] = field(default_factory=list)
    catalyst_activities: List[CatalystActivity] = field(default_factory=list)
    regulated_entity: Optional[RelatedObject] = None
    regulator: Optional[RelatedObject] = None


@dataclass(slots=True)
class CrossReference:
    """Structured cross-reference kept for the EB-eye export only."""

    identifier: str
    database_name: Optional[str] = None


# Solr names that do not follow the plain camelCase conversion.
_SOLR_NAME_OVERRIDES = {
    "reference_url": "referenceURL",
    "literature_reference_pubmed_id": "literatureReferencePubMedId",
}
_NOT_INDEXED = {"all_cross_references"}


def _solr_name(attribute: str) -> str:
    if attribute in _SOLR_NAME_OVERRIDES:
        return _SOLR_NAME_OVERRIDES[attribute]
    head, *tail = attribute.split("_")
    return head + "".join(part.title() for part in tail)


@dataclass(slots=True)
class IndexDocument:
    """Flat search document. Only ``db_id`` and ``type`` are always populated."""

    db_id: str
    type: str
    exact_type: Optional[str] = None
    st_id: Optional[str] = None
    old_st_id: Optional[str] = None
    name: Optional[str] = None
    synonyms: Optional[List[str]] = None
    species: Optional[List[str]] = None
    tax_id: Optional[List[str]] = None
    related_species: Optional[List[str]] = None
    fireworks_species: Optional[Set[str]] = None
    summation: Optional[str] = None
    inferred_summation: Optional[str] = None
    literature_reference_title: Optional[List[str]] = None
    literature_reference_pubmed_id: Optional[List[str]] = None
    literature_reference_isbn: Optional[List[str]] = None
    literature_reference_author: Optional[List[str]] = None
    is_disease: Optional[bool] = None
    disease_id: Optional[List[str]] = None
    disease_name: Optional[List[str]] = None
    disease_synonyms: Optional[List[str]] = None
    compartment_name: Optional[List[str]] = None
    compartment_accession: Optional[List[str]] = None
    cross_references: Optional[List[str]] = None
    all_cross_references: Optional[List[CrossReference]] = None
    go_biological_process_accessions: Optional[List[str]] = None
    go_biological_process_name: Optional[str] = None
    go_cellular_component_accessions: Optional[List[str]] = None
    go_cellular_component_name: Optional[str] = None
    go_molecular_function_accession: Optional[List[str]] = None
    go_molecular_function_name: Optional[List[str]] = None
    reference_name: Optional[str] = None
    reference_synonyms: Optional[List[str]] = None
    reference_identifiers: Optional[List[str]] = None
    reference_url: Optional[str] = None
    database_name: Optional[str] = None
    reference_gene_names: Optional[List[str]] = None
    reference_secondary_identifier: Optional[List[str]] = None
    reference_other_identifier: Optional[List[str]] = None
    reference_cross_references: Optional[List[str]] = None
    regulated_entity: Optional[str] = None
    regulated_entity_id: Optional[str] = None
    regulator: Optional[str] = None
    regulator_id: Optional[str] = None
    author: Optional[Set[str]] = None
    author_orcid: Optional[Set[str]] = None
    keywords: Optional[List[str]] = None
    interactions_ids: Optional[List[str]] = None
    reactome_interactor_ids: Optional[List[str]] = None
    reactome_interactor_names: Optional[List[str]] = None
    scores: Optional[List[float]] = None
    interactor_accessions: Optional[List[str]] = None

    @property
    def identifier(self) -> str:
        """Stable identifier when available, database identifier otherwise."""
        return self.st_id or self.db_id

    def add_all_cross_references(self, references: List[CrossReference]) -> None:
        if self.all_cross_references is None:
            self.all_cross_references = []
        self.all_cross_references.extend(references)

    def to_solr(self) -> Dict[str, Any]:
        """Serialise to a Solr JSON document, omitting unset and empty fields."""
        payload: Dict[str, Any] = {}
        for attribute in fields(self):
            if attribute.name in _NOT_INDEXED:
                continue
            value = getattr(self, attribute.name)
            if value is None:
                continue
            if isinstance(value, (set, frozenset)):
                value = sorted(value)
            if isinstance(value, list) and not value:
                continue
            payload[_solr_name(attribute.name)] = value
        return payload


@dataclass(slots=True)
class ReactomeSummary:
    """Every graph entity (id and display name) referring to one accession."""

    ids: List[str] = field(default_factory=list)
    names: List[str] = field(default_factory=list)

    def add(self, identifier: str, name: str) -> None:
        self.ids.append(identifier)
        self.names.append(name)


@dataclass(slots=True)
class Interactor:
    accession: str
    alias: Optional[str] = None
    tax_id: int = 0

    def alias_without_species(self) -> Optional[str]:
        """Drop an UniProt-style ``_SPECIES`` suffix (``P53_HUMAN`` becomes ``P53``)."""
        if self.alias is None:
            return None
        head, separator, tail = self.alias.rpartition("_")
        if separator and head and tail.isalnum():
            return head
        return self.alias


@dataclass(slots=True)
class Interaction:
    """A scored interaction where ``interactor_a`` is always the queried side."""

    interactor_a: Interactor
    interactor_b: Interactor
    score: float
    evidences: List[str] = field(default_factory=list)


@dataclass(slots=True)
class InteractorSummary:
    """A partner of an interactor that is present in the graph."""

    accession: str
    reactome_summary: ReactomeSummary
    score: float
    evidences: List[str] = field(default_factory=list)
