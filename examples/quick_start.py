"""Quick Start Example

This example counts the motifs of a small synthetic temporal network.
For file-based runs, see configs/example.yaml and ``tmotifs run``.
"""

import logging

import numpy as np

from tmotifs import TemporalGraph, find_motifs

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

# Random labeled interactions between 20 nodes over 100 time steps
rng = np.random.RandomState(42)
n_nodes, n_edges = 20, 60
labels = {n: "AB"[rng.randint(2)] for n in range(n_nodes)}
edges = []
while len(edges) < n_edges:
    u, v = rng.randint(n_nodes, size=2)
    if u != v:
        edges.append((int(u), int(v), int(rng.randint(100)), "call"))

logger.info("tmotifs Quick Start\n")

G = TemporalGraph(labels, edges, directed=True)
logger.info("Network: %s", G)
logger.info("Summary: %s\n", G.summary())

logger.info("Motifs within 10 time steps, up to 3 nodes and 3 edges")
table = find_motifs(G, delta=10, max_nodes=3, max_edges=3)
logger.info("%d motifs, %d occurrences", len(table), table.total_occurrences)
for size, count in table.by_size().items():
    logger.info("  %d nodes / %d edges: %d", size[0], size[1], count)

logger.info("\nMost frequent motifs")
df = table.to_dataframe().sort_values("count", ascending=False)
logger.info("%s", df.head(5).to_string(index=False))
