import logging
from typing import Iterable

import networkx as nx

from poolgraph.storage.pool_store import PoolStore
from poolgraph.utils.types import PoolEvent, PoolVersion

log = logging.getLogger(__name__)


def build_graphs(records: Iterable[PoolEvent]) -> dict[PoolVersion, nx.Graph]:
    """One undirected token graph per version.

    Each edge keeps the first pool seen for its token pair; later pools for
    the same pair are dropped.
    """
    graphs = {version: nx.Graph() for version in PoolVersion}
    for record in records:
        graph = graphs[PoolVersion(record.version)]
        graph.add_node(record.token0)
        graph.add_node(record.token1)
        if not graph.has_edge(record.token0, record.token1):
            graph.add_edge(record.token0, record.token1, pool=record.pool_address)

    for version, graph in graphs.items():
        log.info(
            f"{version.value} graph: {graph.number_of_nodes()} tokens, "
            f"{graph.number_of_edges()} pairs"
        )
    return graphs


def load_graphs(store: PoolStore) -> dict[PoolVersion, nx.Graph]:
    return build_graphs(store.records())
