import pytest  # type: ignore[import-not-found]

from reactome_indexer.exceptions import GraphLoadError
from reactome_indexer.graph.hydrate import hydrate_entity


def neighbour(relation, properties, order=None, children=None):
    return {
        "relation": relation,
        "order": order,
        "labels": [properties.get("schemaClass", "DatabaseObject")],
        "properties": properties,
        "children": children or [],
    }


def test_hydrate_entity_reads_properties_and_relations():
    record = {
        "labels": ["EntityWithAccessionedSequence", "PhysicalEntity"],
        "properties": {
            "dbId": 123,
            "schemaClass": "EntityWithAccessionedSequence",
            "displayName": "TP53 [nucleoplasm]",
            "stId": "R-HSA-123",
            "name": ["TP53", "p53"],
        },
        "neighbours": [
            neighbour("compartment", {"displayName": "nucleoplasm", "accession": "0005654"}),
            neighbour("species", {"displayName": "Homo sapiens", "taxId": "9606"}, order=0),
            neighbour("summation", {"text": "second"}, order=1),
            neighbour("summation", {"text": "first"}, order=0),
            neighbour(
                "disease",
                {"identifier": "162", "name": ["cancer"], "synonym": "malignant tumor"},
            ),
            neighbour(
                "literatureReference",
                {"schemaClass": "LiteratureReference", "title": "A paper", "pubMedIdentifier": 42},
                children=[
                    neighbour("author", {"dbId": 7, "displayName": "Doe, J", "surname": "Doe", "firstname": "Jane"}),
                ],
            ),
            neighbour(
                "referenceEntity",
                {
                    "dbId": 9,
                    "schemaClass": "ReferenceGeneProduct",
                    "displayName": "UniProt:P04637 TP53",
                    "identifier": "P04637",
                    "geneName": ["TP53", "P53"],
                },
                children=[
                    neighbour(
                        "referenceDatabase",
                        {"displayName": "UniProt", "accessUrl": "http://purl.uniprot.org/uniprot/###ID###"},
                    ),
                ],
            ),
        ],
    }

    entity = hydrate_entity(record)

    assert entity.db_id == 123
    assert entity.schema_class == "EntityWithAccessionedSequence"
    assert entity.labels == ["EntityWithAccessionedSequence", "PhysicalEntity"]
    assert entity.names == ["TP53", "p53"]
    assert [summation.text for summation in entity.summations] == ["first", "second"]
    assert entity.species[0].tax_id == "9606"
    assert entity.compartments[0].accession == "0005654"
    assert entity.diseases[0].synonyms == ["malignant tumor"]
    assert entity.literature_references[0].pubmed_id == 42
    assert entity.literature_references[0].authors[0].first_name == "Jane"
    assert entity.reference_entity is not None
    assert entity.reference_entity.gene_names == ["TP53", "P53"]
    assert entity.reference_entity.reference_database.display_name == "UniProt"
    assert entity.regulator is None


def test_hydrate_entity_requires_identity():
    with pytest.raises(GraphLoadError):
        hydrate_entity({"properties": {"displayName": "anonymous"}, "neighbours": []})
