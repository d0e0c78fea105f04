"""Documents for interactors that are not part of the graph."""
from __future__ import annotations

from typing import Sequence

from ..data.models import IndexDocument, Interactor, InteractorSummary

INTERACTOR_TYPE = "Interactor"
LIST_DELIMITER = "#"

UNIPROT_URL = "https://www.uniprot.org/uniprot/{}"
CHEBI_URL = "https://www.ebi.ac.uk/chebi/searchId.do?chebiId={}"
INTACT_URL = "https://www.ebi.ac.uk/intact/search?query={}"


def database_name(accession: str) -> str:
    if accession.upper().startswith("CHEBI:"):
        return "ChEBI"
    if accession.startswith("EBI-"):
        return "IntAct"
    return "UniProt"


def accession_url(accession: str) -> str:
    name = database_name(accession)
    if name == "ChEBI":
        return CHEBI_URL.format(accession)
    if name == "IntAct":
        return INTACT_URL.format(accession)
    return UNIPROT_URL.format(accession)


def _join(values: Sequence[str]) -> str:
    # Multi-valued cells may hold names with commas, so values are joined with '#'
    return LIST_DELIMITER.join(values)


def build_interactor_document(
    interactor: Interactor,
    summaries: Sequence[InteractorSummary],
    taxonomy,
) -> IndexDocument:
    """Document for ``interactor`` listing every partner that is in the graph."""
    document = IndexDocument(
        db_id=interactor.accession,
        type=INTERACTOR_TYPE,
        exact_type=INTERACTOR_TYPE,
        name=interactor.alias_without_species() or interactor.accession,
    )
    if interactor.alias:
        document.synonyms = [interactor.alias]
    document.reference_identifiers = [interactor.accession]
    document.reference_url = accession_url(interactor.accession)
    document.database_name = database_name(interactor.accession)
    document.species = [taxonomy.resolve(interactor.tax_id)]

    document.interactions_ids = [_join(summary.evidences) for summary in summaries]
    document.reactome_interactor_ids = [_join(summary.reactome_summary.ids) for summary in summaries]
    document.reactome_interactor_names = [_join(summary.reactome_summary.names) for summary in summaries]
    document.scores = [summary.score for summary in summaries]
    document.interactor_accessions = [summary.accession for summary in summaries]
    return document
