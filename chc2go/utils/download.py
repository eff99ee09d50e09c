"""
Download of the Gene Ontology files needed for the analysis.

By default ``go.obo`` and the human GOA annotation file are written to a
``data`` directory, which is created if necessary.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import requests
from tqdm import tqdm

from .logging import get_logger


logger = get_logger("download")


DEFAULT_URLS = {
    "go_obo": "http://purl.obolibrary.org/obo/go.obo",
    "go_gaf": "http://current.geneontology.org/annotations/goa_human.gaf.gz",
}

DEFAULT_FILES = {
    "go_obo": "go.obo",
    "go_gaf": "goa_human.gaf.gz",
}


class Downloader:
    """
    Downloads go.obo and the GAF annotation file.
    """
    
    def __init__(
        self,
        data_dir: str | Path = "data",
        overwrite: bool = False,
        urls: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, str]] = None,
        timeout: int = 30,
    ):
        """
        Initialize downloader.
        
        Parameters
        ----------
        data_dir : str or Path
            Directory to download into.
        overwrite : bool
            Overwrite previously downloaded files, if any.
        urls : dict, optional
            Source URL per file key.
        files : dict, optional
            Local file name per file key.
        timeout : int
            Request timeout in seconds.
        """
        self.data_dir = Path(data_dir)
        self.overwrite = overwrite
        self.urls = dict(DEFAULT_URLS, **(urls or {}))
        self.files = dict(DEFAULT_FILES, **(files or {}))
        self.timeout = timeout
    
    @classmethod
    def from_config(cls, config: Dict[str, Any], overwrite: bool = False) -> "Downloader":
        """Build a downloader from the ``data`` section of a configuration."""
        data = config.get("data", {})
        return cls(
            data_dir=data.get("directory", "data"),
            overwrite=overwrite,
            urls=data.get("urls"),
            files=data.get("files"),
        )
    
    def download_file(self, url: str, output_path: Path, chunk_size: int = 1 << 16) -> bool:
        """
        Fetch one file.
        
        The body is streamed into ``<name>.part`` and renamed once complete,
        so an interrupted transfer never leaves a truncated go.obo or GAF.
        
        Parameters
        ----------
        url : str
            Source URL.
        output_path : Path
            Destination file.
        chunk_size : int
            Bytes per streamed chunk.
            
        Returns
        -------
        bool
            True if the file is present afterwards.
        """
        output_path = Path(output_path)
        if output_path.exists() and not self.overwrite:
            logger.info(f"Keeping existing {output_path}")
            return True
        
        output_path.parent.mkdir(parents=True, exist_ok=True)
        partial = output_path.with_name(output_path.name + ".part")
        
        try:
            with requests.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                size = int(response.headers.get("content-length", 0)) or None
                with open(partial, "wb") as out, tqdm(
                    total=size, unit="B", unit_scale=True, desc=output_path.name
                ) as bar:
                    for chunk in response.iter_content(chunk_size=chunk_size):
                        bar.update(out.write(chunk))
            partial.replace(output_path)
        except (requests.RequestException, OSError) as e:
            logger.error(f"Download of {url} failed: {e}")
            partial.unlink(missing_ok=True)
            return False
        
        logger.info(f"Saved {url} to {output_path}")
        return True
    
    def path_for(self, key: str) -> Path:
        """Local path of a file key ("go_obo" or "go_gaf")."""
        return self.data_dir / self.files[key]
    
    def download(self) -> Dict[str, bool]:
        """
        Download all files.
        
        Returns
        -------
        dict
            Success flag per file key.
        """
        logger.info(f"Downloading GO files to {self.data_dir}")
        self.data_dir.mkdir(parents=True, exist_ok=True)
        
        status = {}
        for key, url in self.urls.items():
            status[key] = self.download_file(url, self.path_for(key))
        
        n_failed = sum(1 for ok in status.values() if not ok)
        if n_failed:
            logger.warning(f"{n_failed} of {len(status)} downloads failed")
        return status
