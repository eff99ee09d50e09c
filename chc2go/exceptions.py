"""
Exceptions raised by the chc2go pipeline.
"""


class Chc2GoError(Exception):
    """Base class for all chc2go errors."""


class MalformedRecordError(Chc2GoError, ValueError):
    """An interaction line does not have the expected number of fields."""


class ParseError(Chc2GoError, ValueError):
    """A numeric field of an interaction line could not be parsed."""


class UnrecognizedEnrichmentTypeError(Chc2GoError, ValueError):
    """Enrichment type is none of AA, AI, IA or II. Aborts ingestion."""


class MissingOntologySourceError(Chc2GoError, FileNotFoundError):
    """The ontology (go.obo) file could not be found or loaded."""


class MissingAnnotationSourceError(Chc2GoError, FileNotFoundError):
    """The gene annotation (GAF) file could not be found or loaded."""
