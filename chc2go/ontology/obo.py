"""
Ontology Graph and OBO Loader

The ontology is stored as an arena: every term is an integer-indexed node
with an explicit list of parent indices. Ancestor closures are computed by
iterative traversal (no recursion, so deep hierarchies are safe) and
memoised per node.

Edges are taken from ``is_a`` and, by default, from ``part_of``
relationships. OBO files are read with goatools.
"""

from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from goatools.obo_parser import GODag

from ..exceptions import MissingOntologySourceError
from ..utils.logging import get_logger


logger = get_logger("ontology")


DEFAULT_RELATIONSHIPS = ("part_of",)


class Ontology:
    """
    Directed acyclic graph of ontology terms.

    Example
    -------
    >>> go = load_obo("data/go.obo")
    >>> go.parents_of("GO:0000398")
    >>> go.ancestors("GO:0000398")
    """

    def __init__(self, name: str = ""):
        """
        Initialize an empty ontology.

        Parameters
        ----------
        name : str
            Ontology name (e.g. "GO").
        """
        self.name = name
        self.metadata: Dict[str, str] = {}

        # Arena storage
        self._ids: List[str] = []
        self._names: List[str] = []
        self._parents: List[List[int]] = []

        # Indices
        self._index: Dict[str, int] = {}
        self._alt_ids: Dict[str, str] = {}   # alt id -> primary id

        self._closures: Dict[int, FrozenSet[int]] = {}

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[str, str]],
        names: Optional[Dict[str, str]] = None,
        name: str = "",
    ) -> "Ontology":
        """
        Build an ontology from (child, parent) pairs.

        Parameters
        ----------
        edges : iterable of tuple
            (child term, parent term) pairs.
        names : dict, optional
            Term labels. Terms listed here but absent from ``edges`` are
            added as isolated nodes.
        name : str
            Ontology name.

        Returns
        -------
        Ontology
            The ontology.
        """
        ontology = cls(name=name)
        for term_id, label in (names or {}).items():
            ontology.add_term(term_id, label)
        for child, parent in edges:
            ontology.add_edge(child, parent)
        return ontology

    def add_term(self, term_id: str, name: str = "") -> int:
        """Add a term (or update its label) and return its node index."""
        idx = self._index.get(term_id)
        if idx is None:
            idx = len(self._ids)
            self._ids.append(term_id)
            self._names.append(name)
            self._parents.append([])
            self._index[term_id] = idx
        elif name:
            self._names[idx] = name
        return idx

    def add_edge(self, child: str, parent: str) -> None:
        """Add a child -> parent edge, creating missing terms."""
        child_idx = self.add_term(child)
        parent_idx = self.add_term(parent)
        if parent_idx not in self._parents[child_idx]:
            self._parents[child_idx].append(parent_idx)
            self._closures.clear()

    def add_alt_id(self, alt_id: str, primary_id: str) -> None:
        """Register an alternative identifier of a term."""
        self._alt_ids[alt_id] = primary_id

    def resolve(self, term_id: str) -> Optional[str]:
        """Primary identifier of a term or alt id; None if unknown."""
        if term_id in self._index:
            return term_id
        return self._alt_ids.get(term_id)

    def all_terms(self) -> List[str]:
        """All term identifiers, in insertion order."""
        return list(self._ids)

    def name_of(self, term_id: str) -> str:
        """Term label."""
        return self._names[self._index[term_id]]

    def parents_of(self, term_id: str) -> Set[str]:
        """Direct parents of a term."""
        return {self._ids[p] for p in self._parents[self._index[term_id]]}

    def roots(self) -> List[str]:
        """Terms without parents."""
        return [t for t, parents in zip(self._ids, self._parents) if not parents]

    def _closure(self, idx: int) -> FrozenSet[int]:
        """Reflexive ancestor closure of a node, by iterative traversal."""
        cached = self._closures.get(idx)
        if cached is not None:
            return cached

        seen = {idx}
        stack = [idx]
        while stack:
            node = stack.pop()
            done = self._closures.get(node)
            if done is not None and node != idx:
                seen.update(done)
                continue
            for parent in self._parents[node]:
                if parent not in seen:
                    seen.add(parent)
                    stack.append(parent)

        closure = frozenset(seen)
        self._closures[idx] = closure
        return closure

    def ancestors(self, term_id: str, include_self: bool = True) -> FrozenSet[str]:
        """
        Transitive ancestors of a term.

        Parameters
        ----------
        term_id : str
            Term identifier.
        include_self : bool
            Include the term itself (reflexive closure).

        Returns
        -------
        frozenset
            Ancestor term identifiers.
        """
        idx = self._index[term_id]
        closure = frozenset(self._ids[i] for i in self._closure(idx))
        if not include_self:
            closure = closure - {term_id}
        return closure

    def augment_with_ancestors(
        self,
        term_ids: Iterable[str],
        include_self: bool = True,
    ) -> Set[str]:
        """
        Union of the ancestor closures of a set of terms.

        Unknown terms raise KeyError.
        """
        indices: Set[int] = set()
        for term_id in term_ids:
            idx = self._index[term_id]
            if include_self:
                indices.update(self._closure(idx))
            else:
                indices.update(self._closure(idx) - {idx})
        return {self._ids[i] for i in indices}

    def is_ancestor(self, ancestor: str, term_id: str) -> bool:
        """True if ``ancestor`` is ``term_id`` or one of its ancestors."""
        return self._index[ancestor] in self._closure(self._index[term_id])

    def __contains__(self, term_id: object) -> bool:
        return term_id in self._index

    def __len__(self) -> int:
        return len(self._ids)

    def summary(self) -> Dict[str, int]:
        """Get summary statistics."""
        return {
            "n_terms": len(self._ids),
            "n_edges": sum(len(p) for p in self._parents),
            "n_roots": len(self.roots()),
            "n_alt_ids": len(self._alt_ids),
        }


def load_obo(
    filepath: str | Path,
    relationships: Iterable[str] = DEFAULT_RELATIONSHIPS,
    name: str = "GO",
) -> Ontology:
    """
    Load the Gene Ontology from an OBO file such as go.obo.

    The file is read with goatools; its terms and edges are copied into an
    arena ``Ontology``.

    Parameters
    ----------
    filepath : str or Path
        Path to the OBO file.
    relationships : iterable of str
        ``relationship:`` types followed in addition to ``is_a``.
    name : str
        Ontology name.

    Returns
    -------
    Ontology
        Parsed ontology. Obsolete terms are skipped.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise MissingOntologySourceError(f"Could not find ontology file: {filepath}")

    relationships = tuple(relationships)
    logger.info(f"Parsing ontology from {filepath}")

    godag = GODag(
        str(filepath),
        optional_attrs={"relationship"} if relationships else None,
        load_obsolete=False,
        prt=None,
    )

    # alt ids are keys of the DAG too; keep one record per primary id
    records = {rec.id: rec for rec in godag.values()}

    ontology = Ontology(name=name)
    for version_attr, key in (("version", "format-version"), ("data_version", "data-version")):
        value = getattr(godag, version_attr, None)
        if value:
            ontology.metadata[key] = value

    for term_id in sorted(records):
        ontology.add_term(term_id, records[term_id].name)

    for term_id in sorted(records):
        rec = records[term_id]
        for alt_id in rec.alt_ids:
            ontology.add_alt_id(alt_id, term_id)

        parents = {p.id for p in rec.parents}
        related = getattr(rec, "relationship", {})
        for rel in relationships:
            parents.update(p.id for p in related.get(rel, ()))
        for parent in sorted(parents):
            ontology.add_edge(term_id, parent)

    summary = ontology.summary()
    logger.info(
        f"Parsed {summary['n_terms']} terms with {summary['n_edges']} edges "
        f"({summary['n_roots']} roots) from {filepath}"
    )
    return ontology
