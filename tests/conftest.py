"""
Shared fixtures: a toy GO-like ontology, annotations and interaction lines.

Ontology (child -> parent):

    GO:0000001 biological_process
    ├── GO:0000002 metabolic process
    │   ├── GO:0000004 lipid metabolic process
    │   │   └── GO:0000006 fatty acid metabolic process
    │   └── GO:0000005 signalling metabolism   (also part_of GO:0000003)
    └── GO:0000003 signalling
    GO:0000010 molecular_function
    └── GO:0000011 binding

Annotations: GENEA -> 6, GENEB -> 4, GENEC -> 5, GENED -> 3, GENEX -> 11.
"""

import gzip
from pathlib import Path

import pytest

from chc2go.ontology import (
    AnnotationIndex,
    GeneAnnotations,
    InformationContentEstimator,
    Ontology,
    PairwiseSimilarityEngine,
)


EDGES = [
    ("GO:0000002", "GO:0000001"),
    ("GO:0000003", "GO:0000001"),
    ("GO:0000004", "GO:0000002"),
    ("GO:0000005", "GO:0000002"),
    ("GO:0000005", "GO:0000003"),
    ("GO:0000006", "GO:0000004"),
    ("GO:0000011", "GO:0000010"),
]

ANNOTATIONS = {
    "GENEA": {"GO:0000006"},
    "GENEB": {"GO:0000004"},
    "GENEC": {"GO:0000005"},
    "GENED": {"GO:0000003"},
    "GENEX": {"GO:0000011"},
}

OBO_TEXT = """format-version: 1.2
data-version: releases/2024-01-01
ontology: go

[Term]
id: GO:0000001
name: biological_process
namespace: biological_process

[Term]
id: GO:0000002
name: metabolic process
namespace: biological_process
is_a: GO:0000001 ! biological_process

[Term]
id: GO:0000003
name: signalling
namespace: biological_process
is_a: GO:0000001 ! biological_process

[Term]
id: GO:0000004
name: lipid metabolic process
namespace: biological_process
alt_id: GO:0000104
is_a: GO:0000002 ! metabolic process

[Term]
id: GO:0000005
name: signalling metabolism
namespace: biological_process
is_a: GO:0000002 ! metabolic process
relationship: part_of GO:0000003 ! signalling

[Term]
id: GO:0000006
name: fatty acid metabolic process
namespace: biological_process
is_a: GO:0000004 ! lipid metabolic process

[Term]
id: GO:0000007
name: obsolete process
namespace: biological_process
is_obsolete: true

[Term]
id: GO:0000010
name: molecular_function
namespace: molecular_function

[Term]
id: GO:0000011
name: binding
namespace: molecular_function
is_a: GO:0000010 ! molecular_function

[Typedef]
id: part_of
name: part of
"""


def gaf_line(symbol, go_id, qualifier="", evidence="IDA", aspect="P", db_id=None):
    """One 17-column GAF 2.2 line."""
    db_id = db_id or f"P{abs(hash(symbol)) % 100000:05d}"
    return "\t".join([
        "UniProtKB", db_id, symbol, qualifier, go_id, "PMID:1", evidence, "",
        aspect, f"{symbol} protein", "", "protein", "taxon:9606", "20240101",
        "UniProt", "", "",
    ])


GAF_LINES = [
    "!gaf-version: 2.2",
    "!generated-by: test",
    gaf_line("GENEA", "GO:0000006", db_id="Q00001"),
    gaf_line("GENEB", "GO:0000104", db_id="Q00002"),   # alt id of GO:0000004
    gaf_line("GENEC", "GO:0000005", evidence="IEA", db_id="Q00003"),
    gaf_line("GENED", "GO:0000003", db_id="Q00004"),
    gaf_line("GENEX", "GO:0000011", aspect="F", db_id="Q00005"),
    gaf_line("GENED", "GO:0000006", qualifier="NOT|involved_in", db_id="Q00004"),
    gaf_line("GENEY", "GO:9999999", db_id="Q00006"),   # term not in ontology
]


def interaction_line(
    category="S",
    genes="GENEA;GENEB,GENEC",
    enrichment="AA",
    anchors="chr1:100-200;chr1:300-400",
    distance="500",
    ratio="10:5",
    log_p="3.0",
):
    """One 9-field Diachromatic interaction line."""
    return "\t".join([anchors, distance, category, genes, ratio, enrichment, log_p, "+/-", "chr1:150:+;"])


@pytest.fixture
def ontology():
    """Toy ontology built from edges."""
    return Ontology.from_edges(EDGES, name="GO")


@pytest.fixture
def annotations():
    """Direct annotations of the toy genes."""
    return GeneAnnotations.from_mapping(ANNOTATIONS)


@pytest.fixture
def index(annotations, ontology):
    """Ancestor-closed annotation index."""
    return AnnotationIndex.build(annotations, ontology)


@pytest.fixture
def ic(index):
    """Information content of the toy terms."""
    return InformationContentEstimator().estimate(index)


@pytest.fixture
def engine(ontology, index, ic):
    """Similarity engine over the toy data."""
    return PairwiseSimilarityEngine(ontology, index, ic)


@pytest.fixture
def obo_file(tmp_path) -> Path:
    """go.obo-style file."""
    path = tmp_path / "go.obo"
    path.write_text(OBO_TEXT)
    return path


@pytest.fixture
def gaf_file(tmp_path) -> Path:
    """Gzipped GAF file."""
    path = tmp_path / "goa_test.gaf.gz"
    with gzip.open(path, "wt") as f:
        f.write("\n".join(GAF_LINES) + "\n")
    return path


@pytest.fixture
def interaction_lines():
    """Mixed interaction lines: 3 accepted, the rest filtered."""
    return [
        interaction_line(),                                                   # accepted
        interaction_line(category="T", genes="GENEA,GENED;GENEX",
                         anchors="chr2:1-50;chr2:900-1000"),                  # accepted
        interaction_line(category="URA", genes="GENEB;GENEC",
                         anchors="chr3:10-20;chr3:30-40"),                    # accepted
        interaction_line(category="U"),                                       # other category
        interaction_line(enrichment="IA"),
        interaction_line(enrichment="AI"),
        interaction_line(enrichment="II"),
        interaction_line(genes="Hic1,Mir212,Mir132;"),                        # one anchor
    ]


@pytest.fixture
def interaction_file(tmp_path, interaction_lines) -> Path:
    """Gzipped interaction file."""
    path = tmp_path / "interactions_with_genesymbols.tsv.gz"
    with gzip.open(path, "wt") as f:
        f.write("\n".join(interaction_lines) + "\n")
    return path
