from conftest import TOKEN_A, TOKEN_B, TOKEN_C, POOL_P, POOL_Q, POOL_R
from poolgraph.graph.builder import build_graphs, load_graphs
from poolgraph.utils.types import PoolEvent, PoolVersion


def test_one_graph_per_version():
    graphs = build_graphs([
        PoolEvent(TOKEN_A, TOKEN_B, POOL_P, PoolVersion.V2),
        PoolEvent(TOKEN_B, TOKEN_C, POOL_Q, PoolVersion.V3),
    ])
    assert set(graphs) == {PoolVersion.V2, PoolVersion.V3}
    assert set(graphs[PoolVersion.V2].nodes) == {TOKEN_A, TOKEN_B}
    assert set(graphs[PoolVersion.V3].nodes) == {TOKEN_B, TOKEN_C}


def test_empty_input_still_builds_both_graphs():
    graphs = build_graphs([])
    assert graphs[PoolVersion.V2].number_of_nodes() == 0
    assert graphs[PoolVersion.V3].number_of_nodes() == 0


def test_first_pool_for_a_pair_wins():
    graphs = build_graphs([
        PoolEvent(TOKEN_A, TOKEN_B, POOL_P, PoolVersion.V2),
        PoolEvent(TOKEN_A, TOKEN_B, POOL_Q, PoolVersion.V2),
        # reversed orientation is the same undirected pair
        PoolEvent(TOKEN_B, TOKEN_A, POOL_R, PoolVersion.V2),
    ])
    g = graphs[PoolVersion.V2]
    assert g.number_of_edges() == 1
    assert g.edges[TOKEN_B, TOKEN_A]["pool"] == POOL_P


def test_versions_do_not_share_edges():
    graphs = build_graphs([
        PoolEvent(TOKEN_A, TOKEN_B, POOL_P, PoolVersion.V2),
        PoolEvent(TOKEN_A, TOKEN_B, POOL_Q, PoolVersion.V3),
    ])
    assert graphs[PoolVersion.V2].edges[TOKEN_A, TOKEN_B]["pool"] == POOL_P
    assert graphs[PoolVersion.V3].edges[TOKEN_A, TOKEN_B]["pool"] == POOL_Q


def test_load_graphs_reads_store_in_insertion_order(store):
    store.insert_many([
        PoolEvent(TOKEN_A, TOKEN_B, POOL_Q, PoolVersion.V2),
        PoolEvent(TOKEN_A, TOKEN_B, POOL_P, PoolVersion.V2),
    ])
    store.commit()
    g = load_graphs(store)[PoolVersion.V2]
    assert g.edges[TOKEN_A, TOKEN_B]["pool"] == POOL_Q
