"""
CLI Module for chc2go
"""

import argparse
import copy
import sys
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="chc2go",
        description="GO semantic similarity of genes at both ends of capture Hi-C interactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Download go.obo and the human GAF to data/
    chc2go download --data data

    # Score all gene pairs of AA interactions
    chc2go score --interactions JAV_ACD4_RALT_0.0019_interactions_with_genesymbols.tsv.gz

    # Keep only the best gene pair per interaction, 4 threads
    chc2go score --interactions interactions.tsv.gz --best-pair --workers 4
        """
    )
    parser.add_argument("--config", default=None, help="Configuration file (default: config/config.yaml)")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Download command
    download_parser = subparsers.add_parser("download", help="Download go.obo and GAF files")
    download_parser.add_argument("-d", "--data", default=None, help="Directory to download data (default: data)")
    download_parser.add_argument("-w", "--overwrite", action="store_true", help="Overwrite previously downloaded files")

    # Score command
    score_parser = subparsers.add_parser("score", help="Score gene pairs of CHC interactions")
    score_parser.add_argument("-i", "--interactions", required=True, help="Diachromatic interaction file")
    score_parser.add_argument("-g", "--obo", default=None, help="Path to go.obo")
    score_parser.add_argument("-a", "--gaf", default=None, help="Path to GAF annotation file")
    score_parser.add_argument("-o", "--output", default=None, help="Output TSV file")
    score_parser.add_argument("--best-pair", action="store_true", default=None,
                              help="Report only the best gene pair per interaction")
    score_parser.add_argument("--workers", type=int, default=None, help="Number of scoring threads")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    from .utils.config import get_config, load_config
    from .utils.logging import setup_logger

    config = copy.deepcopy(load_config(args.config) if args.config else get_config("config"))
    output_cfg = config.get("output", {})
    logger = setup_logger(
        "chc2go",
        log_file=args.log_file or output_cfg.get("log_file"),
        level=args.log_level or output_cfg.get("level", "INFO"),
    )

    if args.command == "download":
        from .utils.download import Downloader
        if args.data:
            config.setdefault("data", {})["directory"] = args.data
        downloader = Downloader.from_config(config, overwrite=args.overwrite)
        status = downloader.download()
        return 0 if all(status.values()) else 1

    elif args.command == "score":
        from .pipeline import run_from_config
        logger.info(f"interactions: {args.interactions}")
        result = run_from_config(
            config,
            args.interactions,
            overrides={
                "obo": args.obo,
                "gaf": args.gaf,
                "output": args.output,
                "best_pair_only": args.best_pair,
                "n_workers": args.workers,
            },
        )
        logger.info(f"Accepted {len(result.records)} interactions, {len(result.scores)} scored gene pairs")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
