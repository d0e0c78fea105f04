"""Turn neighbourhood records returned by the graph into typed entities."""
from __future__ import annotations

from collections import defaultdict
from typing import Any, DefaultDict, Dict, List, Mapping, Optional

from ..data.models import (
    CatalystActivity,
    Compartment,
    DatabaseIdentifier,
    Disease,
    GoTerm,
    GraphEntity,
    InstanceEdit,
    Person,
    Publication,
    ReferenceDatabase,
    ReferenceEntity,
    RelatedObject,
    Summation,
    Taxon,
)
from ..exceptions import GraphLoadError

Record = Mapping[str, Any]


def _group(neighbours: List[Record]) -> DefaultDict[str, List[Record]]:
    grouped: DefaultDict[str, List[Record]] = defaultdict(list)
    ordered = sorted(
        neighbours,
        key=lambda item: item.get("order") if item.get("order") is not None else 0,
    )
    for neighbour in ordered:
        grouped[neighbour["relation"]].append(neighbour)
    return grouped


def _props(record: Record) -> Dict[str, Any]:
    return dict(record.get("properties") or {})


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None]
    return [str(value)]


def _first(records: List[Record]) -> Optional[Record]:
    return records[0] if records else None


def _person(record: Record) -> Person:
    props = _props(record)
    return Person(
        db_id=int(props.get("dbId", 0)),
        display_name=props.get("displayName", ""),
        surname=props.get("surname") or "",
        first_name=props.get("firstname"),
        initial=props.get("initial"),
        orcid_id=props.get("orcidId"),
    )


def _taxon(record: Record) -> Taxon:
    props = _props(record)
    tax_id = props.get("taxId")
    return Taxon(display_name=props.get("displayName", ""), tax_id=None if tax_id is None else str(tax_id))


def _go_term(record: Optional[Record]) -> Optional[GoTerm]:
    if record is None:
        return None
    props = _props(record)
    if not props.get("accession"):
        return None
    return GoTerm(
        schema_class=props.get("schemaClass", ""),
        accession=str(props["accession"]),
        display_name=props.get("displayName", ""),
    )


def _disease(record: Record) -> Disease:
    props = _props(record)
    synonyms = props.get("synonym")
    return Disease(
        identifier=str(props.get("identifier", "")),
        names=_as_list(props.get("name")),
        synonyms=None if synonyms is None else _as_list(synonyms),
    )


def _database_identifier(record: Record) -> DatabaseIdentifier:
    props = _props(record)
    return DatabaseIdentifier(
        identifier=str(props.get("identifier", "")),
        display_name=props.get("displayName", ""),
        database_name=props.get("databaseName"),
    )


def _publication(record: Record) -> Publication:
    props = _props(record)
    children = _group(record.get("children") or [])
    pubmed_id = props.get("pubMedIdentifier")
    return Publication(
        schema_class=props.get("schemaClass", ""),
        title=props.get("title"),
        pubmed_id=None if pubmed_id is None else int(pubmed_id),
        isbn=props.get("ISBN"),
        authors=[_person(child) for child in children["author"]],
    )


def _instance_edit(record: Record) -> InstanceEdit:
    children = _group(record.get("children") or [])
    return InstanceEdit(authors=[_person(child) for child in children["author"]])


def _reference_entity(record: Optional[Record]) -> Optional[ReferenceEntity]:
    if record is None:
        return None
    props = _props(record)
    children = _group(record.get("children") or [])
    database = _first(children["referenceDatabase"])
    reference_database = None
    if database is not None:
        database_props = _props(database)
        reference_database = ReferenceDatabase(
            display_name=database_props.get("displayName", ""),
            access_url=database_props.get("accessUrl"),
        )
    return ReferenceEntity(
        db_id=int(props.get("dbId", 0)),
        schema_class=props.get("schemaClass", ""),
        display_name=props.get("displayName", ""),
        identifier=props.get("identifier"),
        names=_as_list(props.get("name")),
        other_identifiers=_as_list(props.get("otherIdentifier")),
        gene_names=_as_list(props.get("geneName")),
        secondary_identifiers=_as_list(props.get("secondaryIdentifier")),
        variant_identifier=props.get("variantIdentifier"),
        reference_database=reference_database,
        cross_references=[_database_identifier(child) for child in children["crossReference"]],
    )


def _catalyst_activity(record: Record) -> CatalystActivity:
    children = _group(record.get("children") or [])
    physical_entity = _first(children["physicalEntity"])
    return CatalystActivity(
        activity=_go_term(_first(children["activity"])),
        physical_entity_names=_as_list(_props(physical_entity).get("name")) if physical_entity else [],
    )


def _related_object(record: Optional[Record]) -> Optional[RelatedObject]:
    if record is None:
        return None
    props = _props(record)
    children = _group(record.get("children") or [])
    physical_entity = _first(children["physicalEntity"])
    return RelatedObject(
        db_id=int(props.get("dbId", 0)),
        schema_class=props.get("schemaClass", ""),
        display_name=props.get("displayName", ""),
        st_id=props.get("stId"),
        names=_as_list(props.get("name")),
        physical_entity_names=_as_list(_props(physical_entity).get("name")) if physical_entity else [],
    )


def hydrate_entity(record: Record) -> GraphEntity:
    """Build a :class:`GraphEntity` from a two-hop neighbourhood record.

    The record holds ``properties`` of the node and ``neighbours``, a list of
    outgoing relations (``relation``, ``order``, ``properties`` and, for expanded
    relations, ``children`` one hop further).
    """
    props = _props(record)
    if props.get("dbId") is None or not props.get("schemaClass"):
        raise GraphLoadError(f"Graph object is missing dbId or schemaClass: {props}")
    related = _group(record.get("neighbours") or [])
    return GraphEntity(
        db_id=int(props["dbId"]),
        schema_class=props["schemaClass"],
        display_name=props.get("displayName", ""),
        st_id=props.get("stId"),
        old_st_id=props.get("oldStId"),
        labels=_as_list(record.get("labels")),
        names=_as_list(props.get("name")),
        literature_references=[_publication(item) for item in related["literatureReference"]],
        summations=[Summation(text=_props(item).get("text", "")) for item in related["summation"]],
        diseases=[_disease(item) for item in related["disease"]],
        compartments=[
            Compartment(display_name=_props(item).get("displayName", ""), accession=_props(item).get("accession"))
            for item in related["compartment"]
        ],
        cross_references=[_database_identifier(item) for item in related["crossReference"]],
        species=[_taxon(item) for item in related["species"]],
        related_species=[_taxon(item) for item in related["relatedSpecies"]],
        go_cellular_component=_go_term(_first(related["goCellularComponent"])),
        go_biological_process=_go_term(_first(related["goBiologicalProcess"])),
        reference_entity=_reference_entity(_first(related["referenceEntity"])),
        authored=[_instance_edit(item) for item in related["authored"]],
        reviewed=[_instance_edit(item) for item in related["reviewed"]],
        catalyst_activities=[_catalyst_activity(item) for item in related["catalystActivity"]],
        regulated_entity=_related_object(_first(related["regulatedEntity"])),
        regulator=_related_object(_first(related["regulator"])),
    )
