"""Closed taxonomy of graph schema classes and what each of them can carry."""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable

NO_SPECIES = "Entries without species"

PHYSICAL_ENTITY_LABEL = "PhysicalEntity"
EVENT_LABEL = "Event"
REGULATION_LABEL = "Regulation"

# Order in which entity populations are indexed.
INDEXED_LABELS = (PHYSICAL_ENTITY_LABEL, EVENT_LABEL, REGULATION_LABEL)


class Category(Enum):
    PHYSICAL_ENTITY = "PhysicalEntity"
    EVENT = "Event"
    REGULATION = "Regulation"
    OTHER = "Other"


class Variant(Enum):
    ENTITY_SET = "EntitySet"
    GENOME_ENCODED = "GenomeEncodedEntity"
    ACCESSIONED_SEQUENCE = "EntityWithAccessionedSequence"
    SIMPLE_ENTITY = "SimpleEntity"
    COMPLEX = "Complex"
    POLYMER = "Polymer"
    OTHER_PHYSICAL = "OtherPhysicalEntity"
    PATHWAY = "Pathway"
    REACTION_LIKE = "ReactionLikeEvent"
    OTHER_EVENT = "OtherEvent"
    REGULATION = "Regulation"
    UNKNOWN = "Unknown"


_VARIANTS_BY_CLASS: Dict[str, Variant] = {
    "EntitySet": Variant.ENTITY_SET,
    "DefinedSet": Variant.ENTITY_SET,
    "CandidateSet": Variant.ENTITY_SET,
    "OpenSet": Variant.ENTITY_SET,
    "GenomeEncodedEntity": Variant.GENOME_ENCODED,
    "EntityWithAccessionedSequence": Variant.ACCESSIONED_SEQUENCE,
    "SimpleEntity": Variant.SIMPLE_ENTITY,
    "Complex": Variant.COMPLEX,
    "Polymer": Variant.POLYMER,
    "OtherEntity": Variant.OTHER_PHYSICAL,
    "Drug": Variant.OTHER_PHYSICAL,
    "ChemicalDrug": Variant.OTHER_PHYSICAL,
    "ProteinDrug": Variant.OTHER_PHYSICAL,
    "RNADrug": Variant.OTHER_PHYSICAL,
    "Cell": Variant.OTHER_PHYSICAL,
    "Pathway": Variant.PATHWAY,
    "TopLevelPathway": Variant.PATHWAY,
    "CellDevelopmentStep": Variant.REACTION_LIKE,
    "ReactionLikeEvent": Variant.REACTION_LIKE,
    "Reaction": Variant.REACTION_LIKE,
    "BlackBoxEvent": Variant.REACTION_LIKE,
    "Polymerisation": Variant.REACTION_LIKE,
    "Depolymerisation": Variant.REACTION_LIKE,
    "FailedReaction": Variant.REACTION_LIKE,
    "CellLineagePath": Variant.PATHWAY,
    "Regulation": Variant.REGULATION,
    "PositiveRegulation": Variant.REGULATION,
    "NegativeRegulation": Variant.REGULATION,
    "Requirement": Variant.REGULATION,
    "PositiveGeneExpressionRegulation": Variant.REGULATION,
    "NegativeGeneExpressionRegulation": Variant.REGULATION,
}

# Used for schema classes missing from the table above, most specific label first.
_LABEL_FALLBACKS = (
    (REGULATION_LABEL, Variant.REGULATION),
    (EVENT_LABEL, Variant.OTHER_EVENT),
    (PHYSICAL_ENTITY_LABEL, Variant.OTHER_PHYSICAL),
)

_CATEGORIES: Dict[Variant, Category] = {
    Variant.ENTITY_SET: Category.PHYSICAL_ENTITY,
    Variant.GENOME_ENCODED: Category.PHYSICAL_ENTITY,
    Variant.ACCESSIONED_SEQUENCE: Category.PHYSICAL_ENTITY,
    Variant.SIMPLE_ENTITY: Category.PHYSICAL_ENTITY,
    Variant.COMPLEX: Category.PHYSICAL_ENTITY,
    Variant.POLYMER: Category.PHYSICAL_ENTITY,
    Variant.OTHER_PHYSICAL: Category.PHYSICAL_ENTITY,
    Variant.PATHWAY: Category.EVENT,
    Variant.REACTION_LIKE: Category.EVENT,
    Variant.OTHER_EVENT: Category.EVENT,
    Variant.REGULATION: Category.REGULATION,
    Variant.UNKNOWN: Category.OTHER,
}

# Facet type shown in search results; anything absent falls back to the schema class.
_TYPE_LABELS: Dict[Variant, str] = {
    Variant.ENTITY_SET: "Set",
    Variant.GENOME_ENCODED: "Genes and Transcripts",
    Variant.ACCESSIONED_SEQUENCE: "Genes and Transcripts",
    Variant.PATHWAY: "Pathway",
    Variant.REACTION_LIKE: "Reaction",
    Variant.REGULATION: "Regulation",
}

# Variants whose species attribute holds a single taxon.
SINGLE_SPECIES_VARIANTS: FrozenSet[Variant] = frozenset(
    {Variant.GENOME_ENCODED, Variant.ACCESSIONED_SEQUENCE, Variant.SIMPLE_ENTITY}
)
# Variants whose species attribute is a collection.
MULTI_SPECIES_VARIANTS: FrozenSet[Variant] = frozenset(
    {
        Variant.ENTITY_SET,
        Variant.COMPLEX,
        Variant.POLYMER,
        Variant.PATHWAY,
        Variant.REACTION_LIKE,
        Variant.OTHER_EVENT,
    }
)
SPECIES_VARIANTS = SINGLE_SPECIES_VARIANTS | MULTI_SPECIES_VARIANTS
RELATED_SPECIES_VARIANTS: FrozenSet[Variant] = frozenset(
    {
        Variant.ENTITY_SET,
        Variant.COMPLEX,
        Variant.POLYMER,
        Variant.PATHWAY,
        Variant.REACTION_LIKE,
        Variant.OTHER_EVENT,
    }
)

REFERENCE_ENTITY_CARRIERS: FrozenSet[str] = frozenset(
    {"EntityWithAccessionedSequence", "OpenSet", "SimpleEntity"}
)

_REFERENCE_TYPE_LABELS: Dict[str, str] = {
    "ReferenceGeneProduct": "Protein",
    "ReferenceIsoform": "Protein",
    "ReferenceDNASequence": "DNA Sequence",
    "ReferenceRNASequence": "RNA Sequence",
    "ReferenceMolecule": "Chemical Compound",
    "ReferenceGroup": "Chemical Compound",
}
REFERENCE_SEQUENCE_CLASSES: FrozenSet[str] = frozenset(
    {"ReferenceGeneProduct", "ReferenceIsoform", "ReferenceDNASequence", "ReferenceRNASequence"}
)
REFERENCE_ISOFORM_CLASS = "ReferenceIsoform"
CATALYST_ACTIVITY_CLASS = "CatalystActivity"


def variant_of(schema_class: str, labels: Iterable[str] = ()) -> Variant:
    """Variant of a schema class, falling back to the node's category label for unlisted classes."""
    variant = _VARIANTS_BY_CLASS.get(schema_class)
    if variant is not None:
        return variant
    node_labels = set(labels)
    for label, fallback in _LABEL_FALLBACKS:
        if label in node_labels:
            return fallback
    return Variant.UNKNOWN


def category_of(variant: Variant) -> Category:
    return _CATEGORIES[variant]


def type_label(schema_class: str, labels: Iterable[str] = ()) -> str:
    return _TYPE_LABELS.get(variant_of(schema_class, labels), schema_class)


def reference_type_label(schema_class: str) -> str:
    return _REFERENCE_TYPE_LABELS.get(schema_class, schema_class)


def is_event_class(schema_class: str) -> bool:
    return category_of(variant_of(schema_class)) is Category.EVENT


def is_physical_entity_class(schema_class: str) -> bool:
    return category_of(variant_of(schema_class)) is Category.PHYSICAL_ENTITY
