"""Convert graph entities into flat search documents."""
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..data.models import GraphEntity, IndexDocument
from ..data.schema import (
    REFERENCE_ENTITY_CARRIERS,
    Category,
    Variant,
    category_of,
    type_label,
    variant_of,
)
from ..exceptions import GraphError
from ..utils.logging import get_logger
from . import attributes
from .keywords import match_keywords
from .species import SpeciesIndex, apply_fireworks_species, apply_species

LOGGER = get_logger(__name__)


def _map_common(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    attributes.set_name_and_synonyms(document, entity)
    attributes.set_literature_references(document, entity.literature_references)
    attributes.set_summation(document, entity.summations)
    attributes.set_diseases(document, entity.diseases)
    attributes.set_compartments(document, entity.compartments)
    attributes.set_cross_references(document, entity.cross_references)
    apply_species(document, entity, variant)


def _map_physical_entity(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    _map_common(document, entity, variant)
    attributes.set_go_term(document, entity.go_cellular_component)
    if entity.schema_class in REFERENCE_ENTITY_CARRIERS:
        attributes.set_reference_entity(document, entity.reference_entity)


def _map_event(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    _map_common(document, entity, variant)
    attributes.set_authors_and_reviewers(document, entity)
    attributes.set_go_term(document, entity.go_biological_process)
    if variant is Variant.REACTION_LIKE:
        attributes.set_catalyst_activities(document, entity.catalyst_activities)


def _map_regulation(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    attributes.set_name_and_synonyms(document, entity)
    attributes.set_literature_references(document, entity.literature_references)
    attributes.set_summation(document, entity.summations)
    apply_species(document, entity, variant)
    attributes.set_regulated_entity(document, entity.regulated_entity)
    attributes.set_regulator(document, entity.regulator)


def _map_other(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    document.name = entity.display_name
    apply_species(document, entity, variant)


Mapper = Callable[[IndexDocument, GraphEntity, Variant], None]

_CATEGORY_MAPPERS: Dict[Category, Mapper] = {
    Category.PHYSICAL_ENTITY: _map_physical_entity,
    Category.EVENT: _map_event,
    Category.REGULATION: _map_regulation,
    Category.OTHER: _map_other,
}


class DocumentBuilder:
    """Load graph entities by id and flatten them into :class:`IndexDocument`.

    The species index is built on first use and kept for the lifetime of the builder.
    """

    def __init__(
        self,
        graph,
        vocabulary: Optional[List[str]] = None,
        species_index: Optional[SpeciesIndex] = None,
    ):
        self.graph = graph
        self.vocabulary = vocabulary
        self._species_index = species_index

    @property
    def species_index(self) -> SpeciesIndex:
        if self._species_index is None:
            self._species_index = SpeciesIndex.build(self.graph)
        return self._species_index

    def build(self, db_id: int) -> Optional[IndexDocument]:
        """Return the document for ``db_id`` or ``None`` when it cannot be produced."""
        species_index = self.species_index
        try:
            entity = self.graph.load(db_id)
        except GraphError as exc:
            LOGGER.error("There has been an error mapping the object with dbId %s: %s", db_id, exc)
            return None
        if entity is None:
            LOGGER.error("Database object not found - id: %s", db_id)
            return None
        try:
            return self.map_entity(entity, species_index)
        except Exception as exc:  # pylint: disable=broad-except
            LOGGER.error("Could not build document for dbId %s (%s): %s", db_id, entity.schema_class, exc)
            return None

    def map_entity(self, entity: GraphEntity, species_index: Optional[SpeciesIndex] = None) -> IndexDocument:
        variant = variant_of(entity.schema_class, entity.labels)
        document = IndexDocument(
            db_id=str(entity.db_id),
            type=type_label(entity.schema_class, entity.labels),
            exact_type=entity.schema_class,
            st_id=entity.st_id,
            old_st_id=entity.old_st_id,
        )
        _CATEGORY_MAPPERS[category_of(variant)](document, entity, variant)
        apply_fireworks_species(document, entity, variant, species_index or self.species_index)
        # keywords are matched against the name, so this runs last
        if self.vocabulary is not None:
            document.keywords = match_keywords(document.name, self.vocabulary)
        return document
