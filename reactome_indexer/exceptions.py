"""Exceptions raised by the indexer and its collaborators."""
from __future__ import annotations


class IndexerError(RuntimeError):
    """Fatal failure of an indexing run. The original cause is chained."""


class IndexClientError(RuntimeError):
    """The search index rejected a request or could not be reached."""


class GraphError(RuntimeError):
    """The graph database could not answer a query."""


class GraphLoadError(GraphError):
    """A graph object could not be turned into a domain entity."""


class LineageLookupError(RuntimeError):
    """The taxonomy lineage service did not return a usable parent."""


class LineageThrottledError(LineageLookupError):
    """The taxonomy lineage service answered with HTTP 429."""
