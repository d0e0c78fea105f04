import io
import xml.etree.ElementTree as ET
from datetime import date

from reactome_indexer.data.models import CrossReference, IndexDocument
from reactome_indexer.export.ebeye import EbeyeConfig, EbeyeWriter


def build_document() -> IndexDocument:
    document = IndexDocument(
        db_id="109581",
        type="Pathway",
        exact_type="Pathway",
        st_id="R-HSA-109581",
        name="Apoptosis",
        summation="Apoptosis is a distinct form of cell death.",
        species=["Homo sapiens"],
        tax_id=["9606"],
        keywords=["apoptosis"],
        author={"Jane Doe"},
    )
    document.add_all_cross_references([CrossReference("0006915", "GO")])
    return document


def test_writer_produces_well_formed_dump():
    stream = io.StringIO()
    writer = EbeyeWriter(EbeyeConfig(name="Reactome"), stream=stream)
    writer.write_header(90, release_date=date(2024, 9, 25))
    writer.write_entry(build_document())
    writer.flush()
    writer.write_footer(1)
    writer.close()

    root = ET.fromstring(stream.getvalue())
    assert root.tag == "database"
    assert root.findtext("release") == "90"
    assert root.findtext("release_date") == "25-Sep-2024"
    assert root.findtext("entry_count") == "1"

    entry = root.find("entries/entry")
    assert entry.get("id") == "R-HSA-109581"
    assert entry.findtext("name") == "Apoptosis"
    references = {(ref.get("dbname"), ref.get("dbkey")) for ref in entry.findall("cross_references/ref")}
    assert references == {("GO", "0006915"), ("TAXONOMY", "9606")}
    fields = {(field.get("name"), field.text) for field in entry.findall("additional_fields/field")}
    assert ("species", "Homo sapiens") in fields
    assert ("type", "Pathway") in fields
    assert ("keyword", "apoptosis") in fields
    assert ("author", "Jane Doe") in fields
    assert not stream.closed


def test_writer_owns_file_it_opens(tmp_path):
    path = tmp_path / "out" / "ebeye.xml"
    writer = EbeyeWriter(EbeyeConfig(path=path))
    writer.write_header(0)
    writer.write_footer(0)
    writer.close()
    root = ET.parse(path).getroot()
    assert root.findtext("entry_count") == "0"
    assert root.find("entries") is not None
