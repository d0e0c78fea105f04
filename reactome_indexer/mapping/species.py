"""Species resolution for index documents."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Set

from ..data.models import GraphEntity, IndexDocument, Taxon
from ..data.schema import (
    MULTI_SPECIES_VARIANTS,
    NO_SPECIES,
    RELATED_SPECIES_VARIANTS,
    SINGLE_SPECIES_VARIANTS,
    SPECIES_VARIANTS,
    Variant,
)
from ..exceptions import GraphError
from ..graph import queries
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


class SpeciesIndex:
    """Species reached by each simple entity through the reactions it takes part in.

    Simple entities (small molecules) carry no species of their own, so their
    species are aggregated once per run with a single graph query.
    """

    def __init__(self, species_by_id: Optional[Mapping[int, Iterable[str]]] = None):
        self._species: Dict[int, Set[str]] = {
            int(db_id): set(names) for db_id, names in (species_by_id or {}).items()
        }

    @classmethod
    def build(cls, graph) -> "SpeciesIndex":
        LOGGER.info("Caching SimpleEntity species")
        try:
            rows = graph.query(queries.SIMPLE_ENTITY_SPECIES)
        except GraphError as exc:
            LOGGER.error("Could not cache SimpleEntity species: %s", exc)
            return cls()
        index = cls({row["dbId"]: row.get("species") or [] for row in rows})
        LOGGER.info("Caching SimpleEntity species is done (%s entities)", len(index))
        return index

    def get(self, db_id: int) -> Set[str]:
        return set(self._species.get(db_id, ()))

    def __len__(self) -> int:
        return len(self._species)


def _primary_species(entity: GraphEntity, variant: Variant) -> List[Taxon]:
    if variant in SINGLE_SPECIES_VARIANTS:
        return entity.species[:1]
    if variant in MULTI_SPECIES_VARIANTS:
        return list(entity.species)
    return []


def apply_species(document: IndexDocument, entity: GraphEntity, variant: Variant) -> None:
    """Fill species, taxonomy ids and related species for the entity's variant."""
    if variant in RELATED_SPECIES_VARIANTS and entity.related_species:
        document.related_species = [taxon.display_name for taxon in entity.related_species]

    species = _primary_species(entity, variant)
    if not species:
        document.species = [NO_SPECIES]
        return
    document.species = [taxon.display_name for taxon in species]
    document.tax_id = [taxon.tax_id for taxon in species if taxon.tax_id is not None]


def apply_fireworks_species(
    document: IndexDocument,
    entity: GraphEntity,
    variant: Variant,
    species_index: SpeciesIndex,
) -> None:
    if variant is Variant.SIMPLE_ENTITY:
        names = species_index.get(entity.db_id)
    elif variant in SPECIES_VARIANTS:
        names = {taxon.display_name for taxon in entity.species}
    else:
        names = set()
    document.fireworks_species = names or None
