"""
Capture Hi-C Interaction Parser

Reads Diachromatic digest-pair interaction files (plain or gzipped) such as
``JAV_ACD4_RALT_0.0019_interactions_with_genesymbols.tsv.gz`` and keeps the
interactions usable for a functional analysis of the genes at both ends.

A typical line has 9 tab-separated fields:

[0] chr14:100952105-100959144;chr14:101555648-101573263  the two digests
[1] 596504                 distance
[2] U                      category (NA, U, URII, URAI, URA, S or T)
[3] SNORD114-4,SNORD114-6;DIO3OS,DIO3,MIR1247  genes on the two digests
[4] 28:19                  read pair counts (simple:twisted)
[5] IA                     target enrichment of the digests (A/I)
[6] 2.11                   log10 of the raw p-value
[7] -1/-1                  TSS strand summary per digest
[8] chr1:46303698:+,chr1:46303366:-;  TSS coordinates

Directed interactions (S, T) and undirected reference interactions between
two enriched digests (URA) are kept, and only if both digests were enriched
(AA). For most CHC experiments this keeps promoter-promoter interactions.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..exceptions import MalformedRecordError, ParseError, UnrecognizedEnrichmentTypeError
from ..utils.io import iter_lines
from ..utils.logging import get_logger, ProgressLogger
from .records import ChromLocus, EnrichmentType, InteractionCategory, InteractionRecord


logger = get_logger("interaction_parser")


N_FIELDS = 9

DEFAULT_CATEGORIES = frozenset(c.value for c in InteractionCategory)


@dataclass
class IngestionCounters:
    """
    Running counts of accepted and rejected lines.

    ``count_aa`` counts every line of an accepted category with enrichment
    type AA, including those later dropped because not both digests
    carry genes.
    """

    lines_read: int = 0
    accepted: int = 0
    malformed_lines: int = 0
    unparseable_lines: int = 0
    skipped_category: int = 0
    count_aa: int = 0
    count_ai: int = 0
    count_ia: int = 0
    count_ii: int = 0
    no_genes: int = 0
    only_one_anchor_has_genes: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return asdict(self)

    def log_summary(self, log=None) -> None:
        """Write the per-run summary to the log."""
        log = log or logger
        log.info(
            f"Interaction counts: AA: {self.count_aa}, AI: {self.count_ai}, "
            f"IA: {self.count_ia}, II: {self.count_ii}"
        )
        log.info(f"Interaction counts (AA digest pairs with no genes): {self.no_genes}")
        log.info(
            "Interaction counts (AA digest pairs only one of which has genes): "
            f"{self.only_one_anchor_has_genes}"
        )
        log.info(
            f"Lines read: {self.lines_read}, accepted: {self.accepted}, "
            f"other category: {self.skipped_category}, malformed: {self.malformed_lines}, "
            f"unparseable: {self.unparseable_lines}"
        )


@dataclass
class IngestionResult:
    """Accepted records plus the counters of one ingestion run."""

    records: List[InteractionRecord] = field(default_factory=list)
    counters: IngestionCounters = field(default_factory=IngestionCounters)
    source: str = ""

    def __len__(self) -> int:
        return len(self.records)


def _parse_int(value: str, name: str) -> int:
    """Non-negative integer written as plain ASCII digits."""
    if not (value.isascii() and value.isdigit()):
        raise ParseError(f"Non-numeric {name}: {value!r}")
    return int(value)


def _parse_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ParseError(f"Non-numeric {name}: {value!r}") from None


def _split_gene_lists(value: str) -> List[Tuple[str, ...]]:
    """
    Split field [3] into per-digest gene lists.

    Empty digest entries are dropped, so ``Hic1,Mir212,Mir132;`` yields a
    single list.
    """
    lists = []
    for part in value.split(";"):
        genes = tuple(g.strip() for g in part.split(",") if g.strip())
        if genes:
            lists.append(genes)
    return lists


class InteractionIngester:
    """
    Parser and filter for Diachromatic interaction files.

    Example
    -------
    >>> ingester = InteractionIngester()
    >>> result = ingester.ingest("interactions_with_genesymbols.tsv.gz")
    >>> result.counters.count_aa
    """

    def __init__(
        self,
        categories: Optional[Iterable[str]] = None,
        progress_every: int = 50_000,
    ):
        """
        Initialize ingester.

        Parameters
        ----------
        categories : iterable of str, optional
            Categories to keep; a subset of S, T and URA (default: all three).
        progress_every : int
            Log progress every N lines.
        """
        if categories is None:
            categories = DEFAULT_CATEGORIES
        self.categories = frozenset(str(c) for c in categories)

        unknown = self.categories - DEFAULT_CATEGORIES
        if unknown:
            raise ValueError(
                f"Unsupported interaction categories: {sorted(unknown)}. "
                f"Must be a subset of {sorted(DEFAULT_CATEGORIES)}"
            )

        self.progress_every = progress_every

    def parse_line(
        self,
        line: str,
        counters: IngestionCounters,
    ) -> Optional[InteractionRecord]:
        """
        Parse and filter one line.

        Parameters
        ----------
        line : str
            Line without the trailing newline.
        counters : IngestionCounters
            Counters updated in place.

        Returns
        -------
        InteractionRecord or None
            The record, or None if the line was filtered out.

        Raises
        ------
        MalformedRecordError
            Wrong number of fields.
        ParseError
            Non-numeric distance, p-value or read counts.
        UnrecognizedEnrichmentTypeError
            Enrichment type other than AA, AI, IA or II.
        """
        fields = line.split("\t")
        if len(fields) != N_FIELDS:
            raise MalformedRecordError(
                f"Malformed line with {len(fields)} fields ({N_FIELDS} required)"
            )

        anchors = fields[0].split(";")
        if len(anchors) != 2:
            raise ParseError(f"Expected two digest locations: {fields[0]!r}")

        distance = _parse_int(fields[1], "distance")

        category = fields[2]
        if category not in self.categories:
            counters.skipped_category += 1
            return None

        gene_lists = _split_gene_lists(fields[3])

        typus = fields[5]
        if typus == EnrichmentType.INACTIVE_ACTIVE.value:
            counters.count_ia += 1
            return None
        elif typus == EnrichmentType.ACTIVE_INACTIVE.value:
            counters.count_ai += 1
            return None
        elif typus == EnrichmentType.INACTIVE_INACTIVE.value:
            counters.count_ii += 1
            return None
        elif typus == EnrichmentType.ACTIVE_ACTIVE.value:
            counters.count_aa += 1
        else:
            raise UnrecognizedEnrichmentTypeError(f"Bad interaction type: {typus!r}")

        log_p_value = _parse_float(fields[6], "log p-value")

        if len(gene_lists) == 0:
            counters.no_genes += 1
            return None
        elif len(gene_lists) == 1:
            counters.only_one_anchor_has_genes += 1
            return None
        elif len(gene_lists) > 2:
            raise ParseError(f"Expected gene lists for two digests: {fields[3]!r}")

        ratio = fields[4].split(":")
        if len(ratio) != 2:
            raise ParseError(f"Expected simple:twisted read pair counts: {fields[4]!r}")
        read_pair_ratio = (
            _parse_int(ratio[0], "simple read pair count"),
            _parse_int(ratio[1], "twisted read pair count"),
        )

        return InteractionRecord(
            anchor_locations=(ChromLocus.parse(anchors[0]), ChromLocus.parse(anchors[1])),
            distance=distance,
            category=InteractionCategory(category),
            genes_anchor_a=gene_lists[0],
            genes_anchor_b=gene_lists[1],
            read_pair_ratio=read_pair_ratio,
            enrichment_type=EnrichmentType.ACTIVE_ACTIVE,
            log_p_value=log_p_value,
            strand_info=fields[7],
            tss_coords=fields[8],
        )

    def iter_records(
        self,
        lines: Iterable[str],
        counters: IngestionCounters,
    ) -> Iterator[InteractionRecord]:
        """
        Stream accepted records from an iterable of lines.

        Malformed and unparseable lines are logged and skipped; an
        unrecognised enrichment type aborts the run.
        """
        progress = ProgressLogger(
            desc="Processed interactions",
            logger=logger,
            log_every=self.progress_every,
        )

        for lineno, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            counters.lines_read += 1
            progress.update()

            try:
                record = self.parse_line(line, counters)
            except MalformedRecordError as e:
                counters.malformed_lines += 1
                logger.warning(f"Line {lineno}: {e}: {line}")
                continue
            except ParseError as e:
                counters.unparseable_lines += 1
                logger.warning(f"Line {lineno}: could not parse line ({e}): {line}")
                continue
            except UnrecognizedEnrichmentTypeError as e:
                logger.error(f"Line {lineno}: {e}. Aborting ingestion.")
                raise

            if record is not None:
                counters.accepted += 1
                yield record

    def ingest(self, source: Union[str, Path, Iterable[str]]) -> IngestionResult:
        """
        Parse a whole interaction source.

        Parameters
        ----------
        source : str, Path or iterable of str
            Path to a (optionally gzipped) interaction file, or lines.

        Returns
        -------
        IngestionResult
            Accepted records and counters.
        """
        if isinstance(source, (str, Path)):
            label = str(Path(source).resolve())
            logger.info(f"Parsing CHC interactions from {label}")
            lines = iter_lines(source)
        else:
            label = "<lines>"
            lines = source

        result = IngestionResult(source=label)
        try:
            result.records.extend(self.iter_records(lines, result.counters))
        finally:
            logger.info(f"Parsed a total of {len(result.records)} interactions from {label}")
            result.counters.log_summary(logger)
        return result


def ingest_interactions(
    filepath: str | Path,
    categories: Optional[Iterable[str]] = None,
    progress_every: int = 50_000,
) -> IngestionResult:
    """
    Convenience function to parse an interaction file.

    Parameters
    ----------
    filepath : str or Path
        Path to the Diachromatic interaction file.
    categories : iterable of str, optional
        Categories to keep.
    progress_every : int
        Log progress every N lines.

    Returns
    -------
    IngestionResult
        Accepted records and counters.
    """
    ingester = InteractionIngester(categories=categories, progress_every=progress_every)
    return ingester.ingest(filepath)
