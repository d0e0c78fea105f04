"""Mapping of graph entities and interactors into search documents."""

from .document_builder import DocumentBuilder
from .interactor_document import build_interactor_document
from .keywords import load_vocabulary, match_keywords
from .species import SpeciesIndex

__all__ = [
	"DocumentBuilder",
	"SpeciesIndex",
	"build_interactor_document",
	"load_vocabulary",
	"match_keywords",
]
