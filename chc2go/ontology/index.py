"""
Annotation Index

Maps every annotated gene to the ancestor-closed set of its ontology terms,
and every term to the genes whose closure contains it. Both maps are built
together in one pass, so each (gene, term) pair appears on both sides.
The index is read-only once built.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Set

from ..utils.logging import get_logger
from .annotations import GeneAnnotations
from .obo import Ontology


logger = get_logger("annotation_index")


@dataclass(frozen=True)
class AnnotationIndex:
    """
    Ancestor-closed gene <-> term index.

    Attributes
    ----------
    gene_to_terms : mapping
        Gene -> frozenset of terms (direct annotations plus ancestors).
    term_to_genes : mapping
        Term -> frozenset of genes annotated to it or to a descendant.
    gene_to_direct_terms : mapping
        Gene -> frozenset of directly annotated terms.
    """

    gene_to_terms: Mapping[str, FrozenSet[str]]
    term_to_genes: Mapping[str, FrozenSet[str]]
    gene_to_direct_terms: Mapping[str, FrozenSet[str]]

    @classmethod
    def build(cls, annotations: GeneAnnotations, ontology: Ontology) -> "AnnotationIndex":
        """
        Build the index from direct annotations.

        Genes without direct annotations are not registered. Annotated
        terms unknown to the ontology are kept as their own only ancestor.

        Parameters
        ----------
        annotations : GeneAnnotations
            Direct gene -> term annotations.
        ontology : Ontology
            Ontology providing the parent relation.

        Returns
        -------
        AnnotationIndex
            The index.
        """
        gene_to_terms: Dict[str, FrozenSet[str]] = {}
        gene_to_direct: Dict[str, FrozenSet[str]] = {}
        term_to_genes: Dict[str, Set[str]] = {}
        unknown_terms: Set[str] = set()

        for gene in annotations.genes():
            direct = annotations.terms_for(gene)
            known = [t for t in direct if t in ontology]
            closure = set(ontology.augment_with_ancestors(known, include_self=True))
            for term in direct:
                if term not in ontology:
                    unknown_terms.add(term)
                    closure.add(term)

            gene_to_direct[gene] = direct
            gene_to_terms[gene] = frozenset(closure)
            for term in closure:
                term_to_genes.setdefault(term, set()).add(gene)

        if unknown_terms:
            logger.warning(
                f"{len(unknown_terms)} annotated terms are not in the ontology; "
                "they are indexed without ancestors"
            )

        index = cls(
            gene_to_terms=MappingProxyType(gene_to_terms),
            term_to_genes=MappingProxyType(
                {term: frozenset(genes) for term, genes in term_to_genes.items()}
            ),
            gene_to_direct_terms=MappingProxyType(gene_to_direct),
        )
        logger.info(f"Indexed {index.n_genes} annotated genes over {index.n_terms} terms")
        return index

    @property
    def n_genes(self) -> int:
        """Number of annotated genes (the IC denominator)."""
        return len(self.gene_to_terms)

    @property
    def n_terms(self) -> int:
        """Number of terms with at least one gene."""
        return len(self.term_to_genes)

    def __contains__(self, gene: object) -> bool:
        return gene in self.gene_to_terms
