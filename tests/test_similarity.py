"""
Tests for pairwise Resnik similarity.
"""

import itertools
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from chc2go.ontology import PairwiseSimilarityEngine


IC_ROOT = math.log(5 / 4)       # GO:0000001, 4 of 5 genes
IC_METABOLIC = math.log(5 / 3)  # GO:0000002
IC_LIPID = math.log(5 / 2)      # GO:0000004


class TestTermSimilarity:
    """Tests for term-level similarity."""

    def test_mica_is_ancestor(self, engine):
        """If one term is an ancestor of the other, it is the MICA."""
        assert engine.term_similarity("GO:0000006", "GO:0000004") == pytest.approx(IC_LIPID)
        assert engine.mica("GO:0000006", "GO:0000004") == "GO:0000004"

    def test_mica_shared_parent(self, engine):
        """Siblings meet at their most informative shared ancestor."""
        assert engine.term_similarity("GO:0000006", "GO:0000005") == pytest.approx(IC_METABOLIC)
        assert engine.mica("GO:0000006", "GO:0000005") == "GO:0000002"

    def test_mica_through_second_parent(self, engine):
        """The part_of branch of a DAG term is considered."""
        assert engine.term_similarity("GO:0000005", "GO:0000003") == pytest.approx(math.log(5 / 2))

    def test_no_common_ancestor(self, engine):
        """Terms in different sub-ontologies score 0."""
        assert engine.term_similarity("GO:0000006", "GO:0000011") == 0.0
        assert engine.mica("GO:0000006", "GO:0000011") is None

    def test_self_similarity_is_ic(self, engine, ic):
        """A term is its own most informative common ancestor."""
        for term, value in ic.items():
            assert engine.term_similarity(term, term) == pytest.approx(value)

    def test_symmetry(self, engine, ontology):
        """score(a, b) == score(b, a) for all pairs."""
        terms = ontology.all_terms()
        for a, b in itertools.product(terms, terms):
            assert engine.term_similarity(a, b) == engine.term_similarity(b, a)

    def test_undefined_ic_is_no_evidence(self, ontology, index):
        """Ancestors without IC are ignored rather than scored as 0 or 1."""
        engine = PairwiseSimilarityEngine(ontology, index, {"GO:0000001": 0.5})

        assert engine.term_similarity("GO:0000006", "GO:0000005") == pytest.approx(0.5)
        assert engine.term_similarity("GO:0000006", "GO:0000011") == 0.0

    def test_unknown_term(self, engine):
        """Terms outside the ontology only match themselves."""
        assert engine.term_similarity("GO:9999999", "GO:0000001") == 0.0

    def test_cache(self, engine):
        """Repeated and reversed queries hit the cache."""
        engine.term_similarity("GO:0000006", "GO:0000005")
        engine.term_similarity("GO:0000005", "GO:0000006")

        info = engine.cache_info()
        assert info["misses"] == 1
        assert info["hits"] == 1
        assert info["size"] == 1

        engine.clear_cache()
        assert engine.cache_info()["size"] == 0


class TestGeneSimilarity:
    """Tests for gene-level similarity."""

    def test_mean_over_cross_product(self, engine):
        """Mean of term similarities over all term pairs."""
        # GENEA {6, 4, 2, 1} x GENEB {4, 2, 1}
        expected = (2 * IC_LIPID + 4 * IC_METABOLIC + 6 * IC_ROOT) / 12
        assert engine.gene_similarity("GENEA", "GENEB") == pytest.approx(expected)

    def test_symmetric(self, engine):
        """Gene similarity is symmetric."""
        assert engine.gene_similarity("GENEA", "GENEC") == pytest.approx(
            engine.gene_similarity("GENEC", "GENEA")
        )

    def test_unrelated_genes(self, engine):
        """Genes sharing no ancestor score exactly 0."""
        assert engine.gene_similarity("GENEA", "GENEX") == 0.0

    def test_self_at_least_unrelated(self, engine):
        """A gene is at least as similar to itself as to an unrelated gene."""
        for gene in ["GENEA", "GENEB", "GENEC", "GENED", "GENEX"]:
            assert engine.gene_similarity(gene, gene) >= engine.gene_similarity(gene, "GENEX")
        assert engine.gene_similarity("GENEX", "GENEX") == pytest.approx(math.log(5))

    def test_unannotated_gene(self, engine):
        """Genes without annotations score 0."""
        assert engine.gene_similarity("GENEA", "NOT_A_GENE") == 0.0
        assert engine.gene_similarity("NOT_A_GENE", "NOT_A_GENE") == 0.0

    def test_concurrent_readers(self, engine):
        """Concurrent queries agree with sequential ones."""
        pairs = list(itertools.product(["GENEA", "GENEB", "GENEC", "GENED"], repeat=2)) * 10
        expected = [engine.gene_similarity(a, b) for a, b in pairs]
        engine.clear_cache()

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(lambda p: engine.gene_similarity(*p), pairs))

        assert results == pytest.approx(expected)
