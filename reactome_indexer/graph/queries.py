"""Cypher statements issued against the Reactome graph database."""
from __future__ import annotations

# Relations walked from a physical entity up to the reaction-like event it takes part in.
PARTICIPATION_RELATIONS = (
    "regulatedBy|regulator|physicalEntity|entityFunctionalStatus|catalystActivity|"
    "hasMember|hasCandidate|hasComponent|repeatedUnit|input|output"
)

# Outgoing relations whose targets are loaded with their own outgoing relations.
EXPANDED_RELATIONS = (
    "literatureReference",
    "authored",
    "reviewed",
    "referenceEntity",
    "catalystActivity",
    "regulatedEntity",
    "regulator",
)

IDS_BY_LABEL = "MATCH (n:`{label}`) RETURN n.dbId AS dbId ORDER BY n.dbId"

COUNT_BY_LABEL = "MATCH (n:`{label}`) RETURN count(n) AS total"

LOAD_NEIGHBOURHOOD = """
MATCH (n:DatabaseObject {dbId: $dbId})
OPTIONAL MATCH (n)-[r1]->(m)
OPTIONAL MATCH (m)-[r2]->(k)
WHERE type(r1) IN $expanded
WITH n, r1, m,
     collect(CASE WHEN k IS NULL THEN NULL ELSE {
         relation: type(r2), order: r2.order, labels: labels(k), properties: properties(k)
     } END) AS children
RETURN labels(n) AS labels,
       properties(n) AS properties,
       collect(CASE WHEN m IS NULL THEN NULL ELSE {
           relation: type(r1), order: r1.order, labels: labels(m),
           properties: properties(m), children: children
       } END) AS neighbours
"""

DB_VERSION = "MATCH (n:DBInfo) RETURN n.version AS version LIMIT 1"

ALL_SPECIES = "MATCH (s:Species) RETURN s.taxId AS taxId, s.displayName AS displayName"

REFERENCE_IDENTIFIERS = "MATCH (n:ReferenceEntity) RETURN DISTINCT n.identifier AS identifier"

ACCESSION_REFERRERS = (
    "MATCH (:ReferenceEntity {identifier: $accession})<-[:referenceEntity]-(pe:PhysicalEntity)"
    f"<-[:{PARTICIPATION_RELATIONS}*]-(:ReactionLikeEvent) "
    "RETURN DISTINCT pe.dbId AS dbId, pe.stId AS stId, pe.displayName AS displayName"
)

SIMPLE_ENTITY_SPECIES = (
    f"MATCH (n:SimpleEntity)<-[:{PARTICIPATION_RELATIONS}*]-(:ReactionLikeEvent)"
    "-[:species]->(s:Species) "
    "WITH n, collect(DISTINCT s.displayName) AS species "
    "RETURN n.dbId AS dbId, species"
)
