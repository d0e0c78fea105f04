"""Stream index documents into an EB-eye search dump."""
from __future__ import annotations

import pathlib
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date
from typing import Optional, TextIO

from ..data.models import IndexDocument
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_NAME = "Reactome"
DEFAULT_DESCRIPTION = (
    "Reactome is a free, open-source, curated and peer reviewed pathway database. "
    "Our goal is to provide intuitive bioinformatics tools for the visualization, "
    "interpretation and analysis of pathway knowledge to support basic research, "
    "genome analysis, modeling, systems biology and education."
)


@dataclass(slots=True)
class EbeyeConfig:
    path: str | pathlib.Path = "ebeye.xml"
    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION


def _sub(parent: ET.Element, tag: str, text: Optional[str] = None, **attributes: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attributes)
    if text is not None:
        element.text = text
    return element


def entry_element(document: IndexDocument) -> ET.Element:
    """Build the ``<entry>`` element describing one document."""
    entry = ET.Element("entry", {"id": document.identifier})
    _sub(entry, "name", document.name or document.identifier)
    description = document.summation or document.inferred_summation
    if description:
        _sub(entry, "description", description)

    references = ET.Element("cross_references")
    for reference in document.all_cross_references or []:
        if reference.database_name:
            _sub(references, "ref", dbname=reference.database_name, dbkey=reference.identifier)
    for tax_id in document.tax_id or []:
        _sub(references, "ref", dbname="TAXONOMY", dbkey=tax_id)
    if len(references):
        entry.append(references)

    fields = _sub(entry, "additional_fields")
    for species in document.species or []:
        _sub(fields, "field", species, name="species")
    _sub(fields, "field", document.type, name="type")
    if document.exact_type:
        _sub(fields, "field", document.exact_type, name="exact_type")
    for keyword in document.keywords or []:
        _sub(fields, "field", keyword, name="keyword")
    for author in sorted(document.author or ()):
        _sub(fields, "field", author, name="author")
    return entry


class EbeyeWriter:
    """Write header, entries and footer of the dump as indexing progresses."""

    def __init__(self, config: EbeyeConfig, stream: Optional[TextIO] = None):
        self.config = config
        self._stream = stream
        self._owns_stream = stream is None

    def _handle(self) -> TextIO:
        if self._stream is None:
            path = pathlib.Path(self.config.path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = path.open("w", encoding="utf-8")
        return self._stream

    def write_header(self, release: int, release_date: Optional[date] = None) -> None:
        released = (release_date or date.today()).strftime("%d-%b-%Y")
        header = ET.Element("database")
        _sub(header, "name", self.config.name)
        _sub(header, "description", self.config.description)
        _sub(header, "release", str(release))
        _sub(header, "release_date", released)
        # Serialised without its closing tag, entries are streamed in afterwards.
        opening = ET.tostring(header, encoding="unicode").replace("</database>", "")
        handle = self._handle()
        handle.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        handle.write(opening)
        handle.write("\n<entries>\n")

    def write_entry(self, document: IndexDocument) -> None:
        self._handle().write(ET.tostring(entry_element(document), encoding="unicode"))
        self._handle().write("\n")

    def flush(self) -> None:
        if self._stream is not None:
            self._stream.flush()

    def write_footer(self, entry_count: int) -> None:
        handle = self._handle()
        handle.write("</entries>\n")
        handle.write(f"<entry_count>{entry_count}</entry_count>\n")
        handle.write("</database>\n")
        self.flush()
        LOGGER.info("EB-eye dump written with %s entries", entry_count)

    def close(self) -> None:
        if self._stream is not None and self._owns_stream:
            self._stream.close()
            self._stream = None
