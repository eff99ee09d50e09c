"""
chc2go

Gene Ontology semantic similarity for the genes found at the two anchors
of promoter capture Hi-C (CHC) digest-pair interactions.
"""

__version__ = "0.2.0"

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Submodule imports
from . import interactions
from . import ontology
from . import scoring
from . import utils

__all__ = [
    "interactions",
    "ontology",
    "scoring",
    "utils",
    "PROJECT_ROOT",
    "CONFIG_DIR",
]
