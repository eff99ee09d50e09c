"""
Pairwise Resnik Similarity

Term similarity is the information content of the most informative common
ancestor (MICA) of the two terms. Gene similarity is the mean term
similarity over all pairs of terms in the two genes' ancestor-closed
annotation sets.

The engine reads the ontology, index and IC map only; its caches are
append-only and guarded by a lock, so one engine can be shared by several
scoring threads.
"""

import threading
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

import numpy as np

from ..utils.logging import get_logger
from .index import AnnotationIndex
from .obo import Ontology


logger = get_logger("similarity")


def _pair_key(a: str, b: str) -> Tuple[str, str]:
    return (a, b) if a <= b else (b, a)


class PairwiseSimilarityEngine:
    """
    Resnik similarity between terms and between genes.

    Example
    -------
    >>> engine = PairwiseSimilarityEngine(go, index, ic)
    >>> engine.term_similarity("GO:0000398", "GO:0048024")
    >>> engine.gene_similarity("SRSF1", "SRSF2")
    """

    def __init__(
        self,
        ontology: Ontology,
        index: AnnotationIndex,
        ic: Mapping[str, float],
    ):
        """
        Initialize engine.

        Parameters
        ----------
        ontology : Ontology
            Ontology providing ancestor closures.
        index : AnnotationIndex
            Ancestor-closed gene annotations.
        ic : mapping
            Term -> information content. Missing terms carry no evidence.
        """
        self.ontology = ontology
        self.index = index
        self.ic = ic

        self._lock = threading.Lock()
        self._ancestors: Dict[str, FrozenSet[str]] = {}
        self._term_scores: Dict[Tuple[str, str], float] = {}
        self._hits = 0
        self._misses = 0

    def _ancestors_of(self, term: str) -> FrozenSet[str]:
        cached = self._ancestors.get(term)
        if cached is not None:
            return cached

        # terms unknown to the ontology are their own only ancestor
        if term in self.ontology:
            closure = self.ontology.ancestors(term, include_self=True)
        else:
            closure = frozenset((term,))

        with self._lock:
            self._ancestors[term] = closure
        return closure

    def mica(self, a: str, b: str) -> Optional[str]:
        """
        Most informative common ancestor of two terms.

        Returns
        -------
        str or None
            The common ancestor with the highest IC, or None if the terms
            share no ancestor with a defined IC. Ties go to the smallest
            term id.
        """
        common = self._ancestors_of(a) & self._ancestors_of(b)
        best = None
        best_ic = -np.inf
        for term in sorted(common):
            value = self.ic.get(term)
            if value is not None and value > best_ic:
                best, best_ic = term, value
        return best

    def term_similarity(self, a: str, b: str) -> float:
        """
        Resnik similarity of two terms: IC of their MICA, 0.0 if none.

        Symmetric; cached per unordered pair.
        """
        key = _pair_key(a, b)

        with self._lock:
            score = self._term_scores.get(key)
            if score is not None:
                self._hits += 1
                return score

        common = self._ancestors_of(a) & self._ancestors_of(b)
        score = max((self.ic[t] for t in common if t in self.ic), default=0.0)

        with self._lock:
            self._term_scores[key] = score
            self._misses += 1
        return score

    def gene_similarity(self, gene_a: str, gene_b: str) -> float:
        """
        Mean Resnik similarity over the cross-product of two genes' terms.

        Parameters
        ----------
        gene_a : str
            First gene symbol.
        gene_b : str
            Second gene symbol.

        Returns
        -------
        float
            Mean term similarity; 0.0 if either gene is not annotated.
        """
        terms_a = self.index.gene_to_terms.get(gene_a)
        terms_b = self.index.gene_to_terms.get(gene_b)
        if not terms_a or not terms_b:
            return 0.0

        total = 0.0
        n = 0
        for a in terms_a:
            for b in terms_b:
                total += self.term_similarity(a, b)
                n += 1

        if n == 0:
            return 0.0
        return total / n

    def cache_info(self) -> Dict[str, int]:
        """Term-pair cache statistics."""
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "size": len(self._term_scores),
            }

    def clear_cache(self) -> None:
        """Drop cached term-pair scores."""
        with self._lock:
            self._term_scores.clear()
            self._hits = 0
            self._misses = 0
