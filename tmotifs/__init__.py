"""
tmotifs: Temporal network motifs

Exhaustive counting of labeled, time-ordered motifs in temporal networks.
"""

from .core.graph import Edge, TemporalGraph
from .motifs import (
    CanonicalForm,
    MotifEnumerator,
    PartialMotif,
    canonicalize,
    find_motifs,
)
from .results import MotifTable
from .exceptions import InvalidConfigurationError, SearchResourceError

__version__ = "0.1.0"

__all__ = [
    'Edge',
    'TemporalGraph',
    'PartialMotif',
    'CanonicalForm',
    'canonicalize',
    'MotifEnumerator',
    'find_motifs',
    'MotifTable',
    'InvalidConfigurationError',
    'SearchResourceError',
]

# Text network format
from .io_text import read_network, parse_network, write_network
__all__.extend(['read_network', 'parse_network', 'write_network'])

# Columnar and graph-library adapters
from .io_adapters import from_pandas, from_networkx, read_csv_network
__all__.extend(['from_pandas', 'from_networkx', 'read_csv_network'])

# Configuration and factory modules
from .config import RunConfig
from .factory import load_graph, create_enumerator, run_from_config
__all__.extend(['RunConfig', 'load_graph', 'create_enumerator', 'run_from_config'])
