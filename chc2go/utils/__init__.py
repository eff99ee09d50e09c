"""
Utility functions for the chc2go pipeline.
"""

from .config import load_config, get_config, validate_config, resolve_data_path
from .io import open_text, iter_lines, write_scores, read_scores
from .logging import setup_logger, get_logger, ProgressLogger

__all__ = [
    "load_config",
    "get_config",
    "validate_config",
    "resolve_data_path",
    "open_text",
    "iter_lines",
    "write_scores",
    "read_scores",
    "setup_logger",
    "get_logger",
    "ProgressLogger",
]
