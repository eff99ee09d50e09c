"""
Gene Ontology Annotations

Loads gene -> GO term associations from a GAF 2.x file (e.g.
``goa_human.gaf.gz``). Genes are keyed by DB object symbol, which is what
the interaction files list at each digest.
"""

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

import pandas as pd

from ..exceptions import MissingAnnotationSourceError
from ..utils.logging import get_logger
from .obo import Ontology


logger = get_logger("annotations")


# GAF 2.x columns used here (0-based)
GAF_COLUMNS = {
    0: "db",
    1: "db_object_id",
    2: "db_object_symbol",
    3: "qualifier",
    4: "go_id",
    6: "evidence_code",
    8: "aspect",
}


@dataclass
class GeneAnnotations:
    """
    Direct gene -> term annotations.

    Attributes
    ----------
    gene_to_terms : dict
        Gene symbol -> set of directly annotated term ids.
    symbol_to_db_id : dict
        Gene symbol -> ``DB:ID`` (e.g. ``KMT2B`` -> ``UniProtKB:Q9BV73``).
    n_annotations : int
        Number of annotation lines kept.
    """

    gene_to_terms: Dict[str, Set[str]] = field(default_factory=dict)
    symbol_to_db_id: Dict[str, str] = field(default_factory=dict)
    n_annotations: int = 0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]]) -> "GeneAnnotations":
        """Build from a gene -> terms mapping."""
        gene_to_terms = {gene: set(terms) for gene, terms in mapping.items()}
        return cls(
            gene_to_terms=gene_to_terms,
            n_annotations=sum(len(t) for t in gene_to_terms.values()),
        )

    def genes(self) -> List[str]:
        """Genes with at least one annotation."""
        return [g for g, terms in self.gene_to_terms.items() if terms]

    def terms_for(self, gene: str) -> FrozenSet[str]:
        """Directly annotated terms of a gene (empty if unannotated)."""
        return frozenset(self.gene_to_terms.get(gene, ()))

    def __len__(self) -> int:
        return len(self.genes())

    def __contains__(self, gene: object) -> bool:
        return bool(self.gene_to_terms.get(gene))


def read_gaf(filepath: str | Path) -> pd.DataFrame:
    """
    Read the columns of a GAF file needed for the analysis.

    Parameters
    ----------
    filepath : str or Path
        Path to the GAF file (gzip inferred from the suffix).

    Returns
    -------
    pd.DataFrame
        One row per annotation line.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise MissingAnnotationSourceError(f"Could not find GAF file: {filepath}")

    try:
        df = pd.read_csv(
            filepath,
            sep="\t",
            header=None,
            comment="!",
            usecols=list(GAF_COLUMNS),
            dtype=str,
            compression="infer",
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=list(GAF_COLUMNS.values()), dtype=str)
    return df.rename(columns=GAF_COLUMNS)


def load_gaf(
    filepath: str | Path,
    ontology: Optional[Ontology] = None,
    exclude_evidence: Optional[Iterable[str]] = None,
    aspects: Optional[Iterable[str]] = None,
) -> GeneAnnotations:
    """
    Load gene annotations from a GAF file.

    Parameters
    ----------
    filepath : str or Path
        Path to the GAF file.
    ontology : Ontology, optional
        If given, alt ids are mapped to primary ids and annotations to
        terms absent from the ontology are dropped.
    exclude_evidence : iterable of str, optional
        Evidence codes to drop (e.g. ["IEA"]).
    aspects : iterable of str, optional
        Aspects to keep (P, F, C); default all.

    Returns
    -------
    GeneAnnotations
        Direct annotations keyed by gene symbol.
    """
    logger.info(f"Parsing annotations from {filepath}")
    df = read_gaf(filepath)
    n_raw = len(df)

    # NOT-qualified lines state that the gene is *not* annotated to the term
    df = df[~df["qualifier"].str.contains("NOT", regex=False)]

    if exclude_evidence:
        df = df[~df["evidence_code"].isin(set(exclude_evidence))]
    if aspects:
        df = df[df["aspect"].isin(set(aspects))]

    df = df[(df["db_object_symbol"] != "") & (df["go_id"] != "")]

    n_unknown = 0
    if ontology is not None:
        resolved = df["go_id"].map(ontology.resolve)
        n_unknown = int(resolved.isna().sum())
        df = df.assign(go_id=resolved)[resolved.notna()]

    annotations = GeneAnnotations(n_annotations=len(df))
    for symbol, group in df.groupby("db_object_symbol", sort=False):
        annotations.gene_to_terms[symbol] = set(group["go_id"])
        first = group.iloc[0]
        annotations.symbol_to_db_id[symbol] = f"{first['db']}:{first['db_object_id']}"

    if n_unknown:
        logger.warning(f"Dropped {n_unknown} annotations to terms not in the ontology")
    logger.info(
        f"Parsed {annotations.n_annotations} of {n_raw} annotations "
        f"for {len(annotations.gene_to_terms)} genes"
    )
    return annotations
