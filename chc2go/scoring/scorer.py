"""
Interaction Scorer

Enumerates every (gene A, gene B) pair across the two digests of each
interaction and scores it with the pairwise similarity engine. No
aggregation is done here; ``best_pairs`` is an optional reduction to the
highest-scoring pair per interaction.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence

import pandas as pd

from ..interactions.records import InteractionRecord
from ..ontology.similarity import PairwiseSimilarityEngine
from ..utils.logging import get_logger, ProgressLogger


logger = get_logger("scorer")


SCORE_COLUMNS = [
    "interaction",
    "distance",
    "category",
    "log_p_value",
    "gene_a",
    "gene_b",
    "similarity",
]


@dataclass(frozen=True)
class GenePairScore:
    """
    Similarity of one gene pair of one interaction.

    Attributes
    ----------
    record : InteractionRecord
        The interaction.
    gene_a : str
        Gene on the first digest.
    gene_b : str
        Gene on the second digest.
    similarity : float
        Mean Resnik similarity of the two genes.
    """

    record: InteractionRecord
    gene_a: str
    gene_b: str
    similarity: float

    @property
    def key(self) -> str:
        """Interaction identifier."""
        return self.record.key

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "interaction": self.record.key,
            "distance": self.record.distance,
            "category": self.record.category.value,
            "log_p_value": self.record.log_p_value,
            "gene_a": self.gene_a,
            "gene_b": self.gene_b,
            "similarity": self.similarity,
        }


class InteractionScorer:
    """
    Pairwise gene similarity for CHC interactions.

    Example
    -------
    >>> scorer = InteractionScorer(engine)
    >>> scores = scorer.score(result.records)
    >>> df = scorer.to_frame(scorer.best_pairs(scores))
    """

    def __init__(
        self,
        engine: PairwiseSimilarityEngine,
        progress_every: int = 1_000,
    ):
        """
        Initialize scorer.

        Parameters
        ----------
        engine : PairwiseSimilarityEngine
            Similarity engine (shared read-only).
        progress_every : int
            Log progress every N interactions.
        """
        self.engine = engine
        self.progress_every = progress_every

    def score_record(self, record: InteractionRecord) -> List[GenePairScore]:
        """Score every gene pair of one interaction."""
        scores = []
        for a in record.genes_anchor_a:
            for b in record.genes_anchor_b:
                sim = self.engine.gene_similarity(a, b)
                logger.debug("%s <-> %s: %.2f", a, b, sim)
                scores.append(GenePairScore(record=record, gene_a=a, gene_b=b, similarity=sim))
        return scores

    def score(self, records: Iterable[InteractionRecord]) -> List[GenePairScore]:
        """
        Score all gene pairs of all interactions.

        Parameters
        ----------
        records : iterable of InteractionRecord
            Filtered interactions.

        Returns
        -------
        list of GenePairScore
            One entry per (record, gene A, gene B), in input order.
        """
        progress = ProgressLogger(
            desc="Scored interactions",
            logger=logger,
            log_every=self.progress_every,
        )

        results: List[GenePairScore] = []
        for record in records:
            results.extend(self.score_record(record))
            progress.update()

        progress.close()
        return results

    def score_parallel(
        self,
        records: Sequence[InteractionRecord],
        n_workers: int = 4,
        chunk_size: int = 500,
    ) -> List[GenePairScore]:
        """
        Score interactions with a thread pool.

        Chunks of records are scored concurrently against the shared
        engine; results are returned in input order, identical to
        ``score``.

        Parameters
        ----------
        records : sequence of InteractionRecord
            Filtered interactions.
        n_workers : int
            Number of worker threads.
        chunk_size : int
            Records per task.

        Returns
        -------
        list of GenePairScore
            Same as ``score``.
        """
        if n_workers <= 1 or len(records) <= chunk_size:
            return self.score(records)

        chunks = [records[i:i + chunk_size] for i in range(0, len(records), chunk_size)]
        logger.info(f"Scoring {len(records)} interactions in {len(chunks)} chunks with {n_workers} workers")

        def _score_chunk(chunk: Sequence[InteractionRecord]) -> List[GenePairScore]:
            out: List[GenePairScore] = []
            for record in chunk:
                out.extend(self.score_record(record))
            return out

        results: List[GenePairScore] = []
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            for chunk_scores in executor.map(_score_chunk, chunks):
                results.extend(chunk_scores)
        return results

    @staticmethod
    def best_pairs(scores: Iterable[GenePairScore]) -> List[GenePairScore]:
        """
        Reduce to the highest-similarity gene pair per interaction.

        Scores are grouped by record, so two records sharing an anchor
        pair stay separate. The first pair in input order wins ties.
        Interactions keep the order of their first appearance.
        """
        best: Dict[InteractionRecord, GenePairScore] = {}
        for s in scores:
            current = best.get(s.record)
            if current is None or s.similarity > current.similarity:
                best[s.record] = s
        return list(best.values())

    @staticmethod
    def to_frame(scores: Iterable[GenePairScore]) -> pd.DataFrame:
        """Scores as a DataFrame with ``SCORE_COLUMNS``."""
        rows = [s.to_dict() for s in scores]
        return pd.DataFrame(rows, columns=SCORE_COLUMNS)
