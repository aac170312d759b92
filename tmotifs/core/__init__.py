"""
Core data structures for tmotifs.
"""

from .graph import Edge, TemporalGraph

__all__ = [
    "Edge",
    "TemporalGraph",
]
