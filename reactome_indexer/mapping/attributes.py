"""Attribute setters shared by the per-category document mappers."""
from __future__ import annotations

from typing import List, Optional, Sequence, Set, Tuple

from ..data.models import (
    CatalystActivity,
    Compartment,
    CrossReference,
    DatabaseIdentifier,
    Disease,
    GoTerm,
    GraphEntity,
    IndexDocument,
    InstanceEdit,
    Publication,
    ReferenceEntity,
    RelatedObject,
    Summation,
)
from ..data.schema import (
    CATALYST_ACTIVITY_CLASS,
    REFERENCE_ISOFORM_CLASS,
    REFERENCE_SEQUENCE_CLASSES,
    is_event_class,
    is_physical_entity_class,
    reference_type_label,
)
from ..utils.mapset import MapSet

INFERRED_MARKER = "computationally inferred"
SUMMATION_SEPARATOR = "<br>"
ACCESS_URL_PLACEHOLDER = "###ID###"


def _split_names(names: Sequence[str]) -> Tuple[Optional[str], Optional[List[str]]]:
    """First name is the canonical one, the remaining ones are synonyms."""
    if not names:
        return None, None
    canonical, *synonyms = names
    return canonical, (list(synonyms) or None)


def set_name_and_synonyms(document: IndexDocument, entity: GraphEntity) -> None:
    canonical, synonyms = _split_names(entity.names)
    if canonical is None:
        # some regulations have no name
        document.name = entity.display_name
        return
    document.name = canonical
    document.synonyms = synonyms


def set_reference_name_and_synonyms(document: IndexDocument, reference: ReferenceEntity) -> None:
    canonical, synonyms = _split_names(reference.names)
    if canonical is None:
        document.reference_name = reference.display_name
        return
    document.reference_name = canonical
    document.reference_synonyms = synonyms


def set_literature_references(document: IndexDocument, publications: Sequence[Publication]) -> None:
    """Group titles, PubMed ids, ISBNs and authors of every cited publication.

    Authors are kept as ``(id, name)`` pairs while grouping so repeats of the same
    person collapse, then only names reach the document. The resulting author count
    can differ from the one held by the curation database.
    """
    if not publications:
        return

    grouped: MapSet[str, object] = MapSet()
    for publication in publications:
        if publication.title:
            grouped.add("title", publication.title)
        if publication.schema_class == "LiteratureReference" and publication.pubmed_id is not None:
            grouped.add("pubMedIdentifier", str(publication.pubmed_id))
        elif publication.schema_class == "Book" and publication.isbn:
            grouped.add("ISBN", publication.isbn)
        grouped.add_all("author", ((str(person.db_id), person.display_name) for person in publication.authors))

    document.literature_reference_title = list(grouped.elements("title"))
    document.literature_reference_pubmed_id = list(grouped.elements("pubMedIdentifier"))
    document.literature_reference_isbn = list(grouped.elements("ISBN"))
    document.literature_reference_author = [name for _, name in grouped.elements("author")]


def set_summation(document: IndexDocument, summations: Sequence[Summation]) -> None:
    if not summations:
        return
    text = SUMMATION_SEPARATOR.join(summation.text for summation in summations)
    if INFERRED_MARKER in text:
        document.inferred_summation = text
    else:
        document.summation = text


def set_diseases(document: IndexDocument, diseases: Sequence[Disease]) -> None:
    if not diseases:
        document.is_disease = False
        return
    identifiers = [disease.identifier for disease in diseases]
    document.disease_id = identifiers + [f"doid:{identifier}" for identifier in identifiers]
    document.disease_name = [name for disease in diseases for name in disease.names]
    document.disease_synonyms = [
        synonym for disease in diseases if disease.synonyms is not None for synonym in disease.synonyms
    ]
    document.is_disease = True


def set_compartments(document: IndexDocument, compartments: Sequence[Compartment]) -> None:
    if not compartments:
        return
    document.compartment_name = [compartment.display_name for compartment in compartments]
    document.compartment_accession = [compartment.accession for compartment in compartments if compartment.accession]


def set_cross_references(document: IndexDocument, identifiers: Sequence[DatabaseIdentifier]) -> None:
    """Index both ``DB:ID`` and the bare identifier of every cross-reference."""
    if not identifiers:
        return
    document.cross_references = [
        value for identifier in identifiers for value in (identifier.display_name, identifier.identifier)
    ]
    document.add_all_cross_references(
        [CrossReference(identifier.identifier, identifier.database_name) for identifier in identifiers]
    )


def set_reference_cross_references(document: IndexDocument, identifiers: Sequence[DatabaseIdentifier]) -> None:
    if not identifiers:
        return
    document.reference_cross_references = [identifier.identifier for identifier in identifiers]
    document.add_all_cross_references(
        [CrossReference(identifier.identifier, identifier.database_name) for identifier in identifiers]
    )


def set_go_term(document: IndexDocument, term: Optional[GoTerm]) -> None:
    if term is None:
        return
    accessions = [f"go:{term.accession}", term.accession]
    if term.schema_class == "GO_BiologicalProcess":
        document.go_biological_process_accessions = accessions
        document.go_biological_process_name = term.display_name
    elif term.schema_class == "GO_CellularComponent":
        document.go_cellular_component_accessions = accessions
        document.go_cellular_component_name = term.display_name
    elif term.schema_class == "GO_MolecularFunction":
        if document.go_molecular_function_name is None:
            document.go_molecular_function_name = []
            document.go_molecular_function_accession = []
        document.go_molecular_function_name.append(term.display_name)
        document.go_molecular_function_accession.extend(accessions)  # type: ignore[union-attr]


def set_catalyst_activities(document: IndexDocument, activities: Sequence[CatalystActivity]) -> None:
    for activity in activities:
        set_go_term(document, activity.activity)


def _person_names(edits: Sequence[InstanceEdit]) -> Tuple[Set[str], Set[str]]:
    names: Set[str] = set()
    orcids: Set[str] = set()
    for edit in edits:
        for person in edit.authors:
            given = person.first_name if person.first_name and person.first_name.strip() else (person.initial or "")
            names.add(f"{given} {person.surname}")
            if person.orcid_id is not None:
                orcids.add(person.orcid_id)
    return names, orcids


def set_authors_and_reviewers(document: IndexDocument, entity: GraphEntity) -> None:
    if not entity.authored and not entity.reviewed:
        return
    authored_names, authored_orcids = _person_names(entity.authored)
    reviewed_names, reviewed_orcids = _person_names(entity.reviewed)
    names = authored_names | reviewed_names
    orcids = authored_orcids | reviewed_orcids
    document.author = names or None
    document.author_orcid = orcids or None


def _preferred_id(related: RelatedObject) -> str:
    if related.st_id and related.st_id.strip():
        return related.st_id
    return str(related.db_id)


def _related_names(related: RelatedObject, include_physical_entity: bool) -> List[str]:
    if related.schema_class == CATALYST_ACTIVITY_CLASS:
        return related.physical_entity_names
    if is_event_class(related.schema_class):
        return related.names
    if include_physical_entity and is_physical_entity_class(related.schema_class):
        return related.names
    return [related.display_name]


def set_regulated_entity(document: IndexDocument, related: Optional[RelatedObject]) -> None:
    if related is None:
        return
    names = _related_names(related, include_physical_entity=False)
    if names:
        document.regulated_entity = names[0]
    document.regulated_entity_id = _preferred_id(related)


def set_regulator(document: IndexDocument, related: Optional[RelatedObject]) -> None:
    if related is None:
        return
    names = _related_names(related, include_physical_entity=True)
    if names:
        document.regulator = names[0]
    document.regulator_id = _preferred_id(related)


def set_reference_entity(document: IndexDocument, reference: Optional[ReferenceEntity]) -> None:
    """Override the generic type with the reference classification and add accessions."""
    if reference is None:
        return

    identifier = reference.identifier
    if reference.schema_class in REFERENCE_SEQUENCE_CLASSES:
        document.reference_gene_names = list(reference.gene_names) or None
        document.reference_secondary_identifier = list(reference.secondary_identifiers) or None
        if (
            reference.schema_class == REFERENCE_ISOFORM_CLASS
            and reference.variant_identifier
            and reference.variant_identifier.strip()
        ):
            identifier = reference.variant_identifier

    document.type = reference_type_label(reference.schema_class)
    document.exact_type = reference.schema_class

    if reference.names:
        set_reference_name_and_synonyms(document, reference)
    document.reference_other_identifier = list(reference.other_identifiers) or None
    set_reference_cross_references(document, reference.cross_references)

    if identifier is None:
        return
    if reference.reference_database is None:
        document.reference_identifiers = [identifier]
        return
    database = reference.reference_database
    document.reference_identifiers = [identifier, f"{database.display_name}:{identifier}"]
    document.database_name = database.display_name
    if database.access_url and database.access_url.strip():
        document.reference_url = database.access_url.replace(ACCESS_URL_PLACEHOLDER, identifier)
