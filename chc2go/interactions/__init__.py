"""
Capture Hi-C Interactions

Parsing and filtering of Diachromatic digest-pair interaction files.

Key components:
- records: typed, immutable interaction records
- parser: line filter state machine with per-run rejection counters
"""

from .records import ChromLocus, EnrichmentType, InteractionCategory, InteractionRecord
from .parser import (
    IngestionCounters,
    IngestionResult,
    InteractionIngester,
    ingest_interactions,
)

__all__ = [
    "ChromLocus",
    "EnrichmentType",
    "InteractionCategory",
    "InteractionRecord",
    "IngestionCounters",
    "IngestionResult",
    "InteractionIngester",
    "ingest_interactions",
]
