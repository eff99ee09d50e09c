"""
Tests for interaction scoring and the end-to-end pipeline.
"""

import pytest
import yaml

from chc2go.cli import build_parser, main
from chc2go.exceptions import MissingAnnotationSourceError, MissingOntologySourceError
from chc2go.interactions import InteractionIngester
from chc2go.pipeline import run_from_config, run_pipeline
from chc2go.scoring import InteractionScorer, SCORE_COLUMNS
from chc2go.utils.io import read_scores

from conftest import interaction_line


@pytest.fixture
def records(interaction_lines):
    """The three accepted interactions of the fixture lines."""
    return InteractionIngester().ingest(interaction_lines).records


@pytest.fixture
def scorer(engine):
    return InteractionScorer(engine)


class TestInteractionScorer:
    """Tests for InteractionScorer."""

    def test_enumerates_all_pairs(self, scorer, records):
        """One score per gene pair across the two digests."""
        scores = scorer.score(records)

        pairs = [(s.gene_a, s.gene_b) for s in scores]
        assert pairs == [
            ("GENEA", "GENEB"), ("GENEA", "GENEC"),
            ("GENEA", "GENEX"), ("GENED", "GENEX"),
            ("GENEB", "GENEC"),
        ]
        assert len(scores) == sum(r.n_gene_pairs for r in records)

    def test_scores_match_engine(self, scorer, records, engine):
        """Each score is the gene similarity of its pair."""
        for s in scorer.score(records):
            assert s.similarity == pytest.approx(engine.gene_similarity(s.gene_a, s.gene_b))

    def test_best_pairs(self, scorer, records):
        """Best pair per interaction; ties keep the first pair."""
        best = scorer.best_pairs(scorer.score(records))

        assert [(s.key, s.gene_a, s.gene_b) for s in best] == [
            ("chr1:100-200;chr1:300-400", "GENEA", "GENEB"),
            ("chr2:1-50;chr2:900-1000", "GENEA", "GENEX"),
            ("chr3:10-20;chr3:30-40", "GENEB", "GENEC"),
        ]
        assert best[1].similarity == 0.0

    def test_best_pairs_per_record(self, scorer):
        """Records sharing an anchor pair keep one best pair each."""
        lines = [interaction_line(genes="GENEA;GENEB"), interaction_line(genes="GENEA;GENEX")]
        shared = InteractionIngester().ingest(lines).records
        assert shared[0].key == shared[1].key

        best = scorer.best_pairs(scorer.score(shared))

        assert [(s.gene_a, s.gene_b) for s in best] == [("GENEA", "GENEB"), ("GENEA", "GENEX")]

    def test_parallel_matches_sequential(self, scorer, records):
        """Thread pool scoring returns the same scores in the same order."""
        many = list(records) * 4
        sequential = scorer.score(many)
        parallel = scorer.score_parallel(many, n_workers=3, chunk_size=2)

        assert [(s.key, s.gene_a, s.gene_b) for s in parallel] == \
            [(s.key, s.gene_a, s.gene_b) for s in sequential]
        assert [s.similarity for s in parallel] == pytest.approx([s.similarity for s in sequential])

    def test_to_frame(self, scorer, records):
        """DataFrame output has one row per pair."""
        df = scorer.to_frame(scorer.score(records))

        assert list(df.columns) == SCORE_COLUMNS
        assert len(df) == 5
        assert set(df["category"]) == {"S", "T", "URA"}

    def test_empty(self, scorer):
        """No records, no scores."""
        assert scorer.score([]) == []
        assert list(scorer.to_frame([]).columns) == SCORE_COLUMNS


class TestPipeline:
    """Tests for the end-to-end pipeline."""

    def test_run_pipeline(self, interaction_file, obo_file, gaf_file, tmp_path, engine):
        """Files in, TSV out."""
        output = tmp_path / "results" / "scores.tsv"
        result = run_pipeline(interaction_file, obo_file, gaf_file, output=output)

        assert len(result.records) == 3
        assert result.counters.count_aa == 4
        assert result.index_summary["n_annotated_genes"] == 5
        assert result.index_summary["n_terms"] == 8
        assert result.index_summary["n_edges"] == 7
        assert result.output_path == output

        df = read_scores(output)
        assert len(df) == 5
        row = df[(df["gene_a"] == "GENEA") & (df["gene_b"] == "GENEB")].iloc[0]
        assert row["similarity"] == pytest.approx(engine.gene_similarity("GENEA", "GENEB"), abs=1e-4)

    def test_best_pair_only(self, interaction_file, obo_file, gaf_file):
        """Optional reduction to one row per interaction."""
        result = run_pipeline(interaction_file, obo_file, gaf_file, best_pair_only=True, n_workers=2)
        assert len(result.scores) == 3

    def test_missing_sources(self, interaction_file, obo_file, gaf_file, tmp_path):
        """Missing ontology or annotations are fatal before any work."""
        with pytest.raises(MissingOntologySourceError):
            run_pipeline(interaction_file, tmp_path / "none.obo", gaf_file)
        with pytest.raises(MissingAnnotationSourceError):
            run_pipeline(interaction_file, obo_file, tmp_path / "none.gaf")
        with pytest.raises(FileNotFoundError):
            run_pipeline(tmp_path / "none.tsv", obo_file, gaf_file)

    def test_run_from_config(self, interaction_file, obo_file, gaf_file, tmp_path):
        """Configuration values are used unless overridden."""
        config = {
            "data": {
                "directory": str(obo_file.parent),
                "files": {"go_obo": obo_file.name, "go_gaf": gaf_file.name},
            },
            "scoring": {"n_workers": 1, "best_pair_only": True, "progress_every": 10},
            "output": {"scores": str(tmp_path / "from_config.tsv")},
        }

        result = run_from_config(config, interaction_file)
        assert len(result.scores) == 3
        assert (tmp_path / "from_config.tsv").exists()

        result = run_from_config(config, interaction_file, overrides={"best_pair_only": False})
        assert len(result.scores) == 5


class TestCli:
    """Tests for the command line interface."""

    def test_parser(self):
        """Score arguments are parsed."""
        args = build_parser().parse_args(["score", "-i", "x.tsv.gz", "--best-pair", "--workers", "2"])

        assert args.command == "score"
        assert args.interactions == "x.tsv.gz"
        assert args.best_pair is True
        assert args.workers == 2

    def test_best_pair_defaults_to_config(self):
        """Without the flag, the config value is used."""
        args = build_parser().parse_args(["score", "-i", "x.tsv.gz"])
        assert args.best_pair is None

    def test_score_command(self, interaction_file, obo_file, gaf_file, tmp_path):
        """The score command writes a TSV."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump({
            "data": {"directory": str(tmp_path), "files": {"go_obo": "go.obo", "go_gaf": "goa.gaf"}},
            "scoring": {"n_workers": 1},
            "output": {"scores": str(tmp_path / "unused.tsv"), "level": "WARNING"},
        }))
        output = tmp_path / "cli.tsv"

        code = main([
            "--config", str(config_path),
            "score",
            "-i", str(interaction_file),
            "-g", str(obo_file),
            "-a", str(gaf_file),
            "-o", str(output),
        ])

        assert code == 0
        assert len(read_scores(output)) == 5
        assert not (tmp_path / "unused.tsv").exists()

    def test_no_command(self):
        """Without a command, help is printed."""
        assert main([]) == 0
