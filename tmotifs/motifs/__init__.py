"""
Temporal motif enumeration.

This module provides the partial-occurrence accumulator, exact canonical
forms of temporal motifs, and the backtracking enumerator that counts them.
"""

from .partial import PartialMotif
from .canonical import CanonicalEdge, CanonicalForm, Canonicalizer, canonicalize
from .search import MotifEnumerator, SearchContext, TimeWindow, find_motifs

__all__ = [
    "PartialMotif",
    "CanonicalEdge",
    "CanonicalForm",
    "Canonicalizer",
    "canonicalize",
    "MotifEnumerator",
    "SearchContext",
    "TimeWindow",
    "find_motifs",
]
