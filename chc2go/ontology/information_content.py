"""
Information Content

IC(t) = -ln(|genes(t)| / N), where genes(t) are the genes annotated to t or
to any descendant of t and N is the number of annotated genes. A descendant
is never annotated to more genes than its ancestors, so IC does not
decrease from the roots toward the leaves. Terms without genes have no IC.
"""

from typing import Dict

import numpy as np

from ..utils.logging import get_logger
from .index import AnnotationIndex


logger = get_logger("information_content")


class InformationContentEstimator:
    """
    Per-term information content from annotation frequencies.
    
    Example
    -------
    >>> ic = InformationContentEstimator().estimate(index)
    >>> ic["GO:0008150"]   # root of biological_process
    """
    
    def estimate(self, index: AnnotationIndex) -> Dict[str, float]:
        """
        Compute information content for every annotated term.
        
        Parameters
        ----------
        index : AnnotationIndex
            Ancestor-closed annotation index.
            
        Returns
        -------
        dict
            Term -> IC. Terms with no annotated genes are absent; callers
            treat a missing entry as "no evidence".
        """
        total = index.n_genes
        if total == 0:
            logger.warning("No annotated genes; information content is empty")
            return {}
        
        terms = list(index.term_to_genes)
        counts = np.fromiter(
            (len(index.term_to_genes[t]) for t in terms),
            dtype=float,
            count=len(terms),
        )
        values = np.log(total / counts)
        
        ic = {term: float(v) for term, v in zip(terms, values)}
        
        logger.info(f"Computed IC for {len(ic)} terms over {total} genes")
        if ic:
            logger.info(f"IC range: [{values.min():.4f}, {values.max():.4f}]")
        return ic
