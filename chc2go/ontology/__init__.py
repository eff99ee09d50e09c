"""
Ontology Module

Gene Ontology graph, gene annotations and Resnik semantic similarity.

Key components:
- obo: arena-backed ontology DAG and OBO loader
- annotations: gene -> term associations from GAF files
- index: ancestor-closed gene <-> term index
- information_content: per-term IC from annotation frequencies
- similarity: MICA-based term and gene similarity
"""

from .obo import Ontology, load_obo
from .annotations import GeneAnnotations, load_gaf, read_gaf
from .index import AnnotationIndex
from .information_content import InformationContentEstimator
from .similarity import PairwiseSimilarityEngine

__all__ = [
    "Ontology",
    "load_obo",
    "GeneAnnotations",
    "load_gaf",
    "read_gaf",
    "AnnotationIndex",
    "InformationContentEstimator",
    "PairwiseSimilarityEngine",
]
