"""
Input/Output utilities.
"""

import gzip
from pathlib import Path
from typing import IO, Iterator, Optional

import pandas as pd


def open_text(filepath: str | Path) -> IO[str]:
    """
    Open a plain or gzip-compressed text file for reading.
    
    Compression is detected from the ``.gz`` suffix.
    
    Parameters
    ----------
    filepath : str or Path
        Path to the file.
        
    Returns
    -------
    file object
        Text-mode handle; the caller is responsible for closing it.
    """
    filepath = Path(filepath)
    
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    
    if str(filepath).endswith('.gz'):
        return gzip.open(filepath, 'rt')
    return open(filepath, 'r')


def iter_lines(filepath: str | Path) -> Iterator[str]:
    """Yield lines of a (possibly gzipped) text file without line endings."""
    with open_text(filepath) as f:
        for line in f:
            yield line.rstrip("\r\n")


def write_scores(
    df: pd.DataFrame,
    filepath: str | Path,
    sep: str = "\t",
    compress: Optional[bool] = None,
    float_format: str = "%.4f",
) -> Path:
    """
    Write a gene-pair similarity table.
    
    Parameters
    ----------
    df : pd.DataFrame
        Scores table (see ``InteractionScorer.to_frame``).
    filepath : str or Path
        Output file path.
    sep : str
        Column separator.
    compress : bool, optional
        Gzip the output. Defaults to True when the path ends in ``.gz``.
    float_format : str
        Format for the similarity column.
        
    Returns
    -------
    Path
        Path written.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    
    if compress is None:
        compress = str(filepath).endswith('.gz')
    elif compress and not str(filepath).endswith('.gz'):
        filepath = Path(str(filepath) + '.gz')
    
    df.to_csv(
        filepath,
        sep=sep,
        compression='gzip' if compress else None,
        index=False,
        float_format=float_format,
    )
    return filepath


def read_scores(filepath: str | Path, sep: str = "\t") -> pd.DataFrame:
    """Read a table written by ``write_scores``."""
    filepath = Path(filepath)
    
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")
    
    return pd.read_csv(filepath, sep=sep, compression="infer")
