from reactome_indexer.data.models import Interactor, InteractorSummary, ReactomeSummary
from reactome_indexer.data.schema import NO_SPECIES
from reactome_indexer.interactors.taxonomy import TaxonomyCache
from reactome_indexer.mapping import build_interactor_document
from reactome_indexer.mapping.interactor_document import accession_url, database_name

from conftest import FakeLineage


def test_interactor_document_lists_partners_in_graph():
    taxonomy = TaxonomyCache(FakeLineage(), sleep=lambda seconds: None)
    taxonomy.add(9606, "Homo sapiens")
    summary = ReactomeSummary()
    summary.add("R-HSA-1", "TP53 [nucleoplasm]")
    summary.add("R-HSA-2", "TP53 [cytosol]")
    partners = [InteractorSummary("P04637", summary, 0.98, ["EBI-1", "EBI-2"])]

    document = build_interactor_document(Interactor("Q00987", "MDM2_HUMAN", 9606), partners, taxonomy)

    assert document.db_id == "Q00987"
    assert document.type == "Interactor"
    assert document.name == "MDM2"
    assert document.synonyms == ["MDM2_HUMAN"]
    assert document.species == ["Homo sapiens"]
    assert document.database_name == "UniProt"
    assert document.reference_url == "https://www.uniprot.org/uniprot/Q00987"
    assert document.interactor_accessions == ["P04637"]
    assert document.interactions_ids == ["EBI-1#EBI-2"]
    assert document.reactome_interactor_ids == ["R-HSA-1#R-HSA-2"]
    assert document.reactome_interactor_names == ["TP53 [nucleoplasm]#TP53 [cytosol]"]
    assert document.scores == [0.98]


def test_interactor_without_alias_or_species():
    taxonomy = TaxonomyCache(FakeLineage(), sleep=lambda seconds: None)
    document = build_interactor_document(Interactor("CHEBI:15422", None, -1), [], taxonomy)
    assert document.name == "CHEBI:15422"
    assert document.synonyms is None
    assert document.species == [NO_SPECIES]


def test_accession_databases():
    assert database_name("CHEBI:15422") == "ChEBI"
    assert database_name("EBI-777") == "IntAct"
    assert accession_url("CHEBI:15422").endswith("chebiId=CHEBI:15422")
