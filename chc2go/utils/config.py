"""
Configuration management utilities.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from functools import lru_cache


REQUIRED_SECTIONS = ["data", "scoring", "output"]


def load_config(config_path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.
    
    Parameters
    ----------
    config_path : str or Path
        Path to the YAML configuration file.
        
    Returns
    -------
    dict
        Configuration dictionary.
    """
    config_path = Path(config_path)
    
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    
    return config or {}


@lru_cache(maxsize=8)
def get_config(config_name: str = "config") -> Dict[str, Any]:
    """
    Get a cached configuration by name.
    
    Parameters
    ----------
    config_name : str
        Name of the configuration file in ``config/`` (without .yaml).
        
    Returns
    -------
    dict
        Configuration dictionary.
    """
    from chc2go import CONFIG_DIR
    
    config_path = CONFIG_DIR / f"{config_name}.yaml"
    return load_config(config_path)


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate a configuration dictionary.
    
    Parameters
    ----------
    config : dict
        Configuration dictionary to validate.
        
    Returns
    -------
    bool
        True if valid, raises exception otherwise.
    """
    for key in REQUIRED_SECTIONS:
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
    
    workers = config["scoring"].get("n_workers", 1)
    if not isinstance(workers, int) or workers < 1:
        raise ValueError(f"Invalid scoring.n_workers: {workers}. Must be a positive integer")
    
    progress_every = config["scoring"].get("progress_every", 50_000)
    if not isinstance(progress_every, int) or progress_every < 1:
        raise ValueError(f"Invalid scoring.progress_every: {progress_every}")
    
    return True


def resolve_data_path(
    config: Dict[str, Any],
    key: str,
    override: Optional[str | Path] = None,
) -> Path:
    """
    Resolve an input file path from the ``data`` section.
    
    Parameters
    ----------
    config : dict
        Configuration dictionary.
    key : str
        File key under ``data.files`` (e.g. "go_obo", "go_gaf").
    override : str or Path, optional
        Explicit path, e.g. from the command line. Takes precedence.
        
    Returns
    -------
    Path
        Path to the file (not checked for existence).
    """
    if override:
        return Path(override)
    
    data = config["data"]
    if key not in data.get("files", {}):
        raise ValueError(f"Unknown data file key: {key}")
    
    return Path(data.get("directory", "data")) / data["files"][key]
