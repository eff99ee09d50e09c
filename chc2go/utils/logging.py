"""
Logging utilities.
"""

import sys
import logging
from pathlib import Path
from typing import Optional
from datetime import datetime


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "chc2go",
    log_file: Optional[str | Path] = None,
    level: str = "INFO",
) -> logging.Logger:
    """
    Configure the package logger for a command line run.
    
    Component loggers are children of ``chc2go``, so configuring it once
    routes every ingestion, loading and scoring message to stdout and,
    optionally, to ``log_file``. Calling it again replaces the handlers.
    
    Parameters
    ----------
    name : str
        Logger name.
    log_file : str or Path, optional
        Also write the log here (parent directories are created).
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR).
        
    Returns
    -------
    logging.Logger
        Configured logger.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)
    
    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))
    
    formatter = logging.Formatter(DEFAULT_FORMAT)
    logger.handlers = []
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    
    return logger


def get_logger(name: str = "chc2go") -> logging.Logger:
    """
    Get a component logger.
    
    Names without the ``chc2go.`` prefix are placed under it, e.g.
    ``get_logger("interaction_parser")`` returns ``chc2go.interaction_parser``.
    
    Parameters
    ----------
    name : str
        Logger name.
        
    Returns
    -------
    logging.Logger
        Logger instance.
    """
    if name != "chc2go" and not name.startswith("chc2go."):
        name = f"chc2go.{name}"
    return logging.getLogger(name)


class ProgressLogger:
    """
    Simple progress logger for long-running tasks.
    
    ``total`` may be None for streamed inputs of unknown length, in
    which case only the running count and rate are reported.
    """
    
    def __init__(
        self,
        total: Optional[int] = None,
        desc: str = "Processing",
        logger: Optional[logging.Logger] = None,
        log_every: int = 100,
    ):
        """
        Initialize progress logger.
        
        Parameters
        ----------
        total : int, optional
            Total number of items, if known.
        desc : str
            Description of the task.
        logger : logging.Logger, optional
            Logger to use.
        log_every : int
            Log progress every N items.
        """
        self.total = total
        self.desc = desc
        self.logger = logger or get_logger()
        self.log_every = max(int(log_every), 1)
        self.current = 0
        self.start_time = datetime.now()
    
    def update(self, n: int = 1):
        """Update progress by n items."""
        self.current += n
        
        if self.current % self.log_every == 0 or self.current == self.total:
            elapsed = (datetime.now() - self.start_time).total_seconds()
            rate = self.current / elapsed if elapsed > 0 else 0
            
            if self.total:
                pct = 100 * self.current / self.total
                self.logger.info(
                    f"{self.desc}: {self.current}/{self.total} ({pct:.1f}%) - "
                    f"{rate:.1f} items/sec"
                )
            else:
                self.logger.info(
                    f"{self.desc}: {self.current} - {rate:.1f} items/sec"
                )
    
    def close(self):
        """Close progress logger and print summary."""
        elapsed = (datetime.now() - self.start_time).total_seconds()
        self.logger.info(
            f"{self.desc} complete: {self.current} items in {elapsed:.1f}s"
        )
