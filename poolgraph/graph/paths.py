import logging

import networkx as nx

from poolgraph.graph.builder import load_graphs
from poolgraph.storage.pool_store import PoolStore
from poolgraph.utils.constants import MAX_PATH_LENGTH
from poolgraph.utils.log_utils import normalize_address
from poolgraph.utils.types import PoolVersion

log = logging.getLogger(__name__)


def find_paths(
    graph: nx.Graph,
    source: str,
    target: str,
    max_length: int = MAX_PATH_LENGTH,
) -> list[list[str]] | None:
    """Every simple path from ``source`` to ``target`` with at most ``max_length`` nodes.

    Returns None when either token is not in the graph, so callers can tell
    "unknown token" apart from "no route".
    """
    if source not in graph or target not in graph:
        return None

    results: list[list[str]] = []
    path: list[str] = []
    on_path: set[str] = set()

    def dfs(node: str) -> None:
        path.append(node)
        on_path.add(node)
        if node == target:
            results.append(list(path))
        elif len(path) < max_length:
            for neighbor in graph.neighbors(node):
                if neighbor not in on_path:
                    dfs(neighbor)
        path.pop()
        on_path.discard(node)

    dfs(source)
    return results


def find_swap_paths(
    token_a: str,
    token_b: str,
    version: PoolVersion | str,
    store: PoolStore,
) -> list[list[str]] | None:
    """Swap routes between two tokens over one protocol version's pools.

    Graphs are rebuilt from the store on every call.
    """
    version = PoolVersion(version)
    token_a = normalize_address(token_a)
    token_b = normalize_address(token_b)
    graph = load_graphs(store)[version]

    paths = find_paths(graph, token_a, token_b)
    if paths is None:
        log.info("Tokens not found in the graph.")
        return None

    log.info(f"Found {len(paths)} paths from {token_a} to {token_b}")
    return paths


def path_pools(graph: nx.Graph, path: list[str]) -> list[str]:
    """Pool address carried by each hop of ``path``."""
    return [graph.edges[a, b]["pool"] for a, b in zip(path, path[1:])]
