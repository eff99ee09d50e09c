"""
Capture Hi-C Interaction Records

Typed representation of one digest-pair interaction as produced by
Diachromatic, after filtering. Only interactions that pass every filter
of the ingester become ``InteractionRecord`` objects.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class InteractionCategory(str, Enum):
    """Directionality class of an interaction (field [2])."""

    SIMPLE = "S"
    TWISTED = "T"
    UNDIRECTED_REF_ACTIVE_ACTIVE = "URA"


class EnrichmentType(str, Enum):
    """Target enrichment status of the two digests (field [5])."""

    ACTIVE_ACTIVE = "AA"
    ACTIVE_INACTIVE = "AI"
    INACTIVE_ACTIVE = "IA"
    INACTIVE_INACTIVE = "II"


_LOCUS_RE = re.compile(r"^(?P<chrom>[^:]+):(?P<start>\d+)-(?P<end>\d+)$")


@dataclass(frozen=True)
class ChromLocus:
    """
    Genomic coordinates of one digest.
    
    Attributes
    ----------
    label : str
        Location as written in the input, e.g. ``chr14:100952105-100959144``.
    chrom : str
        Chromosome, or None if ``label`` is not of the form chrom:start-end.
    start : int
        Start position.
    end : int
        End position.
    """
    
    label: str
    chrom: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None
    
    @classmethod
    def parse(cls, label: str) -> "ChromLocus":
        """Parse ``chrom:start-end``; unrecognised labels are kept verbatim."""
        label = label.strip()
        m = _LOCUS_RE.match(label)
        if m is None:
            return cls(label=label)
        return cls(
            label=label,
            chrom=m.group("chrom"),
            start=int(m.group("start")),
            end=int(m.group("end")),
        )
    
    @property
    def length(self) -> Optional[int]:
        if self.start is None or self.end is None:
            return None
        return self.end - self.start
    
    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class InteractionRecord:
    """
    A single filtered CHC interaction.
    
    Attributes
    ----------
    anchor_locations : tuple of ChromLocus
        Locations of the two digests.
    distance : int
        Genomic distance between the digests (>= 0).
    category : InteractionCategory
        S, T or URA.
    genes_anchor_a : tuple of str
        Gene symbols on the first digest.
    genes_anchor_b : tuple of str
        Gene symbols on the second digest.
    read_pair_ratio : tuple of int
        (simple, twisted) read pair counts.
    enrichment_type : EnrichmentType
        Always ACTIVE_ACTIVE for records that survive filtering.
    log_p_value : float
        Log10 of the raw interaction p-value.
    strand_info : str
        TSS strand summary of the two digests (field [7]).
    tss_coords : str
        TSS coordinates (field [8]).
    """
    
    anchor_locations: Tuple[ChromLocus, ChromLocus]
    distance: int
    category: InteractionCategory
    genes_anchor_a: Tuple[str, ...]
    genes_anchor_b: Tuple[str, ...]
    read_pair_ratio: Tuple[int, int]
    enrichment_type: EnrichmentType
    log_p_value: float
    strand_info: str = ""
    tss_coords: str = ""
    
    @property
    def key(self) -> str:
        """Interaction identifier: the two digest locations joined by ``;``."""
        a, b = self.anchor_locations
        return f"{a.label};{b.label}"
    
    @property
    def n_gene_pairs(self) -> int:
        """Number of (gene A, gene B) combinations across the anchors."""
        return len(self.genes_anchor_a) * len(self.genes_anchor_b)
