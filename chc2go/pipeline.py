"""
chc2go Pipeline

interactions file -> filtered records
go.obo + GAF      -> annotation index -> information content -> similarity engine
records + engine  -> gene-pair similarity table
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .exceptions import MissingAnnotationSourceError, MissingOntologySourceError
from .interactions import IngestionCounters, InteractionIngester, InteractionRecord
from .ontology import (
    AnnotationIndex,
    InformationContentEstimator,
    PairwiseSimilarityEngine,
    load_gaf,
    load_obo,
)
from .scoring import InteractionScorer
from .utils.config import resolve_data_path, validate_config
from .utils.io import write_scores
from .utils.logging import get_logger


logger = get_logger("pipeline")


@dataclass
class PipelineResult:
    """Outputs of one pipeline run."""

    records: List[InteractionRecord]
    counters: IngestionCounters
    scores: pd.DataFrame
    index_summary: Dict[str, int] = field(default_factory=dict)
    output_path: Optional[Path] = None


def run_pipeline(
    interactions: str | Path,
    obo: str | Path,
    gaf: str | Path,
    output: Optional[str | Path] = None,
    best_pair_only: bool = False,
    n_workers: int = 1,
    categories: Optional[Iterable[str]] = None,
    progress_every: int = 50_000,
) -> PipelineResult:
    """
    Score the gene pairs of all usable interactions in a file.

    Parameters
    ----------
    interactions : str or Path
        Diachromatic interaction file (optionally gzipped).
    obo : str or Path
        go.obo file.
    gaf : str or Path
        GAF annotation file.
    output : str or Path, optional
        TSV file to write the scores to.
    best_pair_only : bool
        Keep only the highest-scoring gene pair per interaction.
    n_workers : int
        Scoring threads.
    categories : iterable of str, optional
        Interaction categories to keep (default S, T, URA).
    progress_every : int
        Log ingestion progress every N lines.

    Returns
    -------
    PipelineResult
        Records, counters and the scores table.
    """
    interactions, obo, gaf = Path(interactions), Path(obo), Path(gaf)

    # Fail before any work if a source is missing
    if not interactions.exists():
        raise FileNotFoundError(f"Could not find interaction file: {interactions}")
    if not obo.exists():
        raise MissingOntologySourceError(f"Could not find go.obo file: {obo}")
    if not gaf.exists():
        raise MissingAnnotationSourceError(f"Could not find GAF file: {gaf}")

    ingester = InteractionIngester(categories=categories, progress_every=progress_every)
    ingestion = ingester.ingest(interactions)

    ontology = load_obo(obo)
    annotations = load_gaf(gaf, ontology=ontology)

    index = AnnotationIndex.build(annotations, ontology)
    ic = InformationContentEstimator().estimate(index)
    engine = PairwiseSimilarityEngine(ontology, index, ic)

    scorer = InteractionScorer(engine)
    if n_workers > 1:
        scores = scorer.score_parallel(ingestion.records, n_workers=n_workers)
    else:
        scores = scorer.score(ingestion.records)
    logger.info(f"Scored {len(scores)} gene pairs; cache: {engine.cache_info()}")

    if best_pair_only:
        scores = scorer.best_pairs(scores)
        logger.info(f"Reduced to {len(scores)} best pairs")

    df = scorer.to_frame(scores)

    output_path = None
    if output is not None:
        output_path = write_scores(df, output)
        logger.info(f"Wrote {len(df)} rows to {output_path}")

    return PipelineResult(
        records=ingestion.records,
        counters=ingestion.counters,
        scores=df,
        index_summary={
            **ontology.summary(),
            "n_annotated_genes": index.n_genes,
            "n_annotated_terms": index.n_terms,
        },
        output_path=output_path,
    )


def run_from_config(
    config: Dict[str, Any],
    interactions: str | Path,
    overrides: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Run the pipeline with settings from a configuration dictionary.

    Parameters
    ----------
    config : dict
        Configuration (see ``config/config.yaml``).
    interactions : str or Path
        Interaction file.
    overrides : dict, optional
        Values taking precedence over the configuration: ``obo``, ``gaf``,
        ``output``, ``best_pair_only``, ``n_workers``. None values are ignored.

    Returns
    -------
    PipelineResult
        Pipeline outputs.
    """
    validate_config(config)
    overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
    scoring = config["scoring"]

    return run_pipeline(
        interactions=interactions,
        obo=resolve_data_path(config, "go_obo", overrides.get("obo")),
        gaf=resolve_data_path(config, "go_gaf", overrides.get("gaf")),
        output=overrides.get("output", config["output"].get("scores")),
        best_pair_only=overrides.get("best_pair_only", scoring.get("best_pair_only", False)),
        n_workers=overrides.get("n_workers", scoring.get("n_workers", 1)),
        categories=config.get("interactions", {}).get("categories"),
        progress_every=scoring.get("progress_every", 50_000),
    )
