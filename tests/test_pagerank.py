import pytest

from graphwork.graph import Graph, write_graph_to_binary
from graphwork.pagerank import (
    INIT_PAGE_RANK_FLOAT,
    INIT_PAGE_RANK_INT,
    main,
    page_rank_parallel,
    page_rank_serial,
)
from graphwork.partition import Strategy

EDGES = [
    (0, 1), (0, 2), (1, 2), (2, 0), (2, 3), (3, 4), (4, 5), (5, 3),
    (5, 6), (6, 7), (7, 0), (7, 5), (1, 6), (4, 2),
]
N = 8


@pytest.fixture
def graph():
    return Graph.from_edges(N, EDGES)


def test_zero_iterations_keeps_initial_ranks(graph):
    result = page_rank_serial(graph, 0, use_int=False)
    assert result.ranks == [INIT_PAGE_RANK_FLOAT] * N
    assert result.sum_of_page_ranks == pytest.approx(N * INIT_PAGE_RANK_FLOAT)


def test_zero_iterations_int(graph):
    result = page_rank_serial(graph, 0, use_int=True)
    assert result.ranks == [INIT_PAGE_RANK_INT] * N
    assert result.sum_of_page_ranks == N * INIT_PAGE_RANK_INT


def test_isolated_vertices_get_base_rank():
    g = Graph.from_edges(3, [])
    float_result = page_rank_serial(g, 1, use_int=False)
    int_result = page_rank_serial(g, 1, use_int=True)
    assert float_result.ranks == pytest.approx([0.15] * 3)
    assert int_result.ranks == [15000] * 3


def test_cycle_is_a_fixed_point_in_float():
    g = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3), (3, 0)])
    result = page_rank_serial(g, 5, use_int=False)
    assert result.ranks == pytest.approx([1.0] * 4)


def test_int_sum_matches_ranks(graph):
    result = page_rank_serial(graph, 7, use_int=True)
    assert result.sum_of_page_ranks == sum(result.ranks)


@pytest.mark.parametrize("strategy", [Strategy.VERTEX, Strategy.EDGE])
@pytest.mark.parametrize("n_workers", [1, 2, 3, 5])
def test_parallel_int_matches_serial(graph, strategy, n_workers):
    serial = page_rank_serial(graph, 6, use_int=True)
    parallel = page_rank_parallel(graph, 6, n_workers, strategy, use_int=True)
    assert parallel.ranks == serial.ranks
    assert parallel.sum_of_page_ranks == serial.sum_of_page_ranks


@pytest.mark.parametrize("strategy", [Strategy.VERTEX, Strategy.EDGE])
def test_parallel_float_close_to_serial(graph, strategy):
    serial = page_rank_serial(graph, 10, use_int=False)
    parallel = page_rank_parallel(graph, 10, 3, strategy, use_int=False)
    assert parallel.ranks == pytest.approx(serial.ranks, rel=1e-5)


def test_worker_stats_cover_graph_each_iteration(graph):
    iterations = 4
    result = page_rank_parallel(graph, iterations, 3, Strategy.VERTEX)
    assert len(result.workers) == 3
    assert sum(w.n_vertices for w in result.workers) == graph.n * iterations
    assert sum(w.n_edges for w in result.workers) == graph.m * iterations
    assert [w.thread_id for w in result.workers] == [0, 1, 2]


def test_parallel_rejects_serial_strategy(graph):
    with pytest.raises(ValueError):
        page_rank_parallel(graph, 2, 2, Strategy.SERIAL)


def test_parallel_rejects_zero_workers(graph):
    with pytest.raises(ValueError):
        page_rank_parallel(graph, 2, 0, Strategy.VERTEX)


def test_main_serial_int(tmp_path, capsys, graph):
    base = tmp_path / "g"
    write_graph_to_binary(base, N, EDGES)
    code = main(["--inputFile", str(base), "--strategy", "0",
                 "--nIterations", "3", "--useInt"])
    out = capsys.readouterr().out
    expected = page_rank_serial(graph, 3, use_int=True).sum_of_page_ranks
    assert code == 0
    assert "Using INT" in out
    assert f"Sum of page rank : {expected}" in out


def test_main_parallel_float(tmp_path, capsys):
    base = tmp_path / "g"
    write_graph_to_binary(base, N, EDGES)
    code = main(["--inputFile", str(base), "--strategy", "2", "--nWorkers", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Using FLOAT" in out
    assert "Edge-based work partitioning" in out
    assert "thread_id, num_vertices, num_edges, barrier1_time" in out


def test_main_missing_file(tmp_path):
    assert main(["--inputFile", str(tmp_path / "absent")]) == 1