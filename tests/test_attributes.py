from reactome_indexer.data.models import (
    DatabaseIdentifier,
    Disease,
    GoTerm,
    IndexDocument,
    InstanceEdit,
    Person,
    Publication,
    ReferenceDatabase,
    ReferenceEntity,
    RelatedObject,
    Summation,
)
from reactome_indexer.mapping import attributes

from conftest import build_entity


def new_document() -> IndexDocument:
    return IndexDocument(db_id="1", type="Complex")


def test_name_and_synonyms_split_first_name():
    document = new_document()
    attributes.set_name_and_synonyms(document, build_entity(1, names=["TP53", "p53", "Tumor protein"]))
    assert document.name == "TP53"
    assert document.synonyms == ["p53", "Tumor protein"]


def test_single_name_has_no_synonyms_and_nameless_uses_display_name():
    document = new_document()
    attributes.set_name_and_synonyms(document, build_entity(1, names=["TP53"]))
    assert document.name == "TP53"
    assert document.synonyms is None

    nameless = build_entity(2, schema_class="PositiveRegulation", names=[])
    nameless.display_name = "Positive regulation by X"
    document = new_document()
    attributes.set_name_and_synonyms(document, nameless)
    assert document.name == "Positive regulation by X"


def test_summation_routes_inferred_text():
    curated = new_document()
    attributes.set_summation(curated, [Summation("Binds DNA."), Summation("Forms tetramers.")])
    assert curated.summation == "Binds DNA.<br>Forms tetramers."
    assert curated.inferred_summation is None

    inferred = new_document()
    attributes.set_summation(inferred, [Summation("This event has been computationally inferred from human.")])
    assert inferred.inferred_summation.startswith("This event")
    assert inferred.summation is None

    empty = new_document()
    attributes.set_summation(empty, [])
    assert empty.summation is None and empty.inferred_summation is None


def test_diseases_add_doid_prefixed_identifiers():
    document = new_document()
    attributes.set_diseases(document, [Disease("162", ["cancer"], ["malignant tumor"]), Disease("1612", ["breast cancer"])])
    assert document.disease_id == ["162", "1612", "doid:162", "doid:1612"]
    assert document.disease_name == ["cancer", "breast cancer"]
    assert document.disease_synonyms == ["malignant tumor"]
    assert document.is_disease is True

    healthy = new_document()
    attributes.set_diseases(healthy, [])
    assert healthy.is_disease is False
    assert healthy.disease_id is None


def test_literature_references_collapse_repeated_authors():
    author = Person(db_id=7, display_name="Doe, J", surname="Doe")
    publications = [
        Publication("LiteratureReference", title="Paper B", pubmed_id=2, authors=[author]),
        Publication("LiteratureReference", title="Paper A", pubmed_id=None, authors=[author]),
        Publication("Book", title="Book", isbn="978-0", authors=[]),
    ]
    document = new_document()
    attributes.set_literature_references(document, publications)
    assert document.literature_reference_title == ["Book", "Paper A", "Paper B"]
    assert document.literature_reference_pubmed_id == ["2"]
    assert document.literature_reference_isbn == ["978-0"]
    assert document.literature_reference_author == ["Doe, J"]


def test_cross_references_index_both_forms():
    document = new_document()
    attributes.set_cross_references(document, [DatabaseIdentifier("12345", "COSMIC:12345", "COSMIC")])
    assert document.cross_references == ["COSMIC:12345", "12345"]
    assert document.all_cross_references[0].database_name == "COSMIC"


def test_go_terms_by_namespace():
    document = new_document()
    attributes.set_go_term(document, GoTerm("GO_BiologicalProcess", "0006915", "apoptotic process"))
    attributes.set_go_term(document, GoTerm("GO_MolecularFunction", "0004672", "protein kinase activity"))
    attributes.set_go_term(document, GoTerm("GO_MolecularFunction", "0005524", "ATP binding"))
    assert document.go_biological_process_accessions == ["go:0006915", "0006915"]
    assert document.go_biological_process_name == "apoptotic process"
    assert document.go_molecular_function_name == ["protein kinase activity", "ATP binding"]
    assert document.go_molecular_function_accession == ["go:0004672", "0004672", "go:0005524", "0005524"]


def test_authors_and_reviewers_prefer_first_name():
    entity = build_entity(1, schema_class="Reaction")
    entity.authored = [InstanceEdit([Person(1, surname="Doe", first_name="Jane", orcid_id="0000-0001")])]
    entity.reviewed = [InstanceEdit([Person(2, surname="Roe", first_name=" ", initial="R")])]
    document = new_document()
    attributes.set_authors_and_reviewers(document, entity)
    assert document.author == {"Jane Doe", "R Roe"}
    assert document.author_orcid == {"0000-0001"}


def test_regulated_entity_and_regulator_names():
    document = new_document()
    attributes.set_regulated_entity(
        document,
        RelatedObject(5, "CatalystActivity", "activity of X", physical_entity_names=["X kinase"]),
    )
    attributes.set_regulator(
        document,
        RelatedObject(6, "SimpleEntity", "ATP [cytosol]", st_id="R-ALL-6", names=["ATP", "adenosine triphosphate"]),
    )
    assert document.regulated_entity == "X kinase"
    assert document.regulated_entity_id == "5"
    assert document.regulator == "ATP"
    assert document.regulator_id == "R-ALL-6"


def test_reference_entity_overrides_type_and_builds_url():
    reference = ReferenceEntity(
        db_id=9,
        schema_class="ReferenceIsoform",
        display_name="UniProt:P04637-2 TP53",
        identifier="P04637",
        names=["TP53"],
        variant_identifier="P04637-2",
        reference_database=ReferenceDatabase("UniProt", "http://purl.uniprot.org/uniprot/###ID###"),
    )
    document = new_document()
    attributes.set_reference_entity(document, reference)
    assert document.type == "Protein"
    assert document.exact_type == "ReferenceIsoform"
    assert document.reference_identifiers == ["P04637-2", "UniProt:P04637-2"]
    assert document.reference_url == "http://purl.uniprot.org/uniprot/P04637-2"
    assert document.database_name == "UniProt"
    assert document.reference_name == "TP53"


def test_reference_entity_without_database_keeps_identifier():
    reference = ReferenceEntity(db_id=3, schema_class="ReferenceMolecule", display_name="ATP", identifier="15422")
    document = new_document()
    attributes.set_reference_entity(document, reference)
    assert document.type == "Chemical Compound"
    assert document.reference_identifiers == ["15422"]
    assert document.reference_url is None
