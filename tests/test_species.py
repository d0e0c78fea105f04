from reactome_indexer.data.models import IndexDocument, Taxon
from reactome_indexer.data.schema import NO_SPECIES, Variant
from reactome_indexer.exceptions import GraphError
from reactome_indexer.graph import queries
from reactome_indexer.mapping.species import SpeciesIndex, apply_fireworks_species, apply_species

from conftest import FakeGraph, build_entity

HUMAN = Taxon("Homo sapiens", "9606")
MOUSE = Taxon("Mus musculus", "10090")


def test_single_species_variant_keeps_first_taxon():
    document = IndexDocument(db_id="1", type="Genes and Transcripts")
    entity = build_entity(1, "EntityWithAccessionedSequence", species=[HUMAN, MOUSE])
    apply_species(document, entity, Variant.ACCESSIONED_SEQUENCE)
    assert document.species == ["Homo sapiens"]
    assert document.tax_id == ["9606"]


def test_multi_species_variant_and_related_species():
    document = IndexDocument(db_id="1", type="Complex")
    entity = build_entity(1, "Complex", species=[HUMAN, MOUSE])
    entity.related_species = [MOUSE]
    apply_species(document, entity, Variant.COMPLEX)
    assert document.species == ["Homo sapiens", "Mus musculus"]
    assert document.tax_id == ["9606", "10090"]
    assert document.related_species == ["Mus musculus"]


def test_missing_species_uses_sentinel():
    document = IndexDocument(db_id="1", type="Complex")
    apply_species(document, build_entity(1, "Complex", species=[]), Variant.COMPLEX)
    assert document.species == [NO_SPECIES]
    assert document.tax_id is None

    other = IndexDocument(db_id="2", type="OtherEntity")
    apply_species(other, build_entity(2, "OtherEntity"), Variant.OTHER_PHYSICAL)
    assert other.species == [NO_SPECIES]


def test_fireworks_species_for_simple_entity_comes_from_index():
    index = SpeciesIndex({5: ["Homo sapiens", "Gallus gallus"]})
    document = IndexDocument(db_id="5", type="SimpleEntity")
    apply_fireworks_species(document, build_entity(5, "SimpleEntity", species=[]), Variant.SIMPLE_ENTITY, index)
    assert document.fireworks_species == {"Homo sapiens", "Gallus gallus"}

    orphan = IndexDocument(db_id="6", type="SimpleEntity")
    apply_fireworks_species(orphan, build_entity(6, "SimpleEntity", species=[]), Variant.SIMPLE_ENTITY, index)
    assert orphan.fireworks_species is None


def test_species_index_build_tolerates_graph_errors():
    rows = [{"dbId": 5, "species": ["Homo sapiens"]}]
    index = SpeciesIndex.build(FakeGraph(responses={queries.SIMPLE_ENTITY_SPECIES: rows}))
    assert index.get(5) == {"Homo sapiens"}
    assert len(index) == 1

    broken = SpeciesIndex.build(FakeGraph(responses={queries.SIMPLE_ENTITY_SPECIES: GraphError("down")}))
    assert len(broken) == 0
