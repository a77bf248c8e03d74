"""Triangle counting over a directed graph, serially or with worker threads."""

from __future__ import annotations

import argparse
import sys
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from graphwork.graph import Graph, read_graph_from_binary
from graphwork.partition import Strategy, partition_by_edges, partition_by_vertices
from graphwork.timer import Timer

DEFAULT_NUMBER_OF_WORKERS = 1
DEFAULT_STRATEGY = 1
DEFAULT_INPUT_FILE = "/scratch/input_graphs/roadNet-CA"
TIME_PRECISION = 5


def count_triangles(
    array1: Sequence[int], array2: Sequence[int], u: int, v: int
) -> int:
    """Count values common to two ascending sequences, ignoring ``u`` and ``v``.

    Returns 0 for a self-loop edge (``u == v``).
    """
    if u == v:
        return 0
    count = 0
    i = j = 0
    len1, len2 = len(array1), len(array2)
    while i < len1 and j < len2:
        a, b = array1[i], array2[j]
        if a == b:
            if a != u and a != v:
                count += 1
            i += 1
            j += 1
        elif a < b:
            i += 1
        else:
            j += 1
    return count


@dataclass
class TriangleWorkerStats:
    """What one worker processed and found."""

    thread_id: int
    vertices: range
    n_vertices: int = 0
    n_edges: int = 0
    triangle_count: int = 0
    time_taken: float = 0.0


@dataclass
class TriangleResult:
    """Outcome of a triangle count."""

    triangle_count: int
    time_taken: float
    partition_time: float = 0.0
    workers: List[TriangleWorkerStats] = field(default_factory=list)

    @property
    def unique_triangles(self) -> int:
        """Each triangle is found once per edge, so three times in all."""
        return self.triangle_count // 3


def _count_range(graph: Graph, vertices: range) -> Tuple[int, int, int]:
    n_vertices = n_edges = count = 0
    for u in vertices:
        vertex = graph.vertices[u]
        n_vertices += 1
        n_edges += vertex.out_degree
        for v in vertex.out_neighbors:
            count += count_triangles(
                vertex.in_neighbors, graph.vertices[v].out_neighbors, u, v
            )
    return n_vertices, n_edges, count


def triangle_count_serial(graph: Graph) -> TriangleResult:
    """Count triangles by walking every edge in one thread."""
    timer = Timer()
    timer.start()
    _, _, count = _count_range(graph, range(graph.n))
    return TriangleResult(triangle_count=count, time_taken=timer.stop())


def _run_worker(graph: Graph, stats: TriangleWorkerStats) -> None:
    timer = Timer()
    timer.start()
    stats.n_vertices, stats.n_edges, stats.triangle_count = _count_range(
        graph, stats.vertices
    )
    stats.time_taken = timer.stop()


def triangle_count_parallel(
    graph: Graph, n_workers: int, strategy: Strategy
) -> TriangleResult:
    """Count triangles with ``n_workers`` threads, each owning a vertex range."""
    strategy = Strategy(strategy)
    if strategy is Strategy.SERIAL:
        raise ValueError("parallel counting needs the vertex or edge strategy")
    timer = Timer()
    timer.start()

    partition_timer = Timer()
    partition_timer.start()
    if strategy is Strategy.VERTEX:
        ranges = partition_by_vertices(graph, n_workers)
    else:
        ranges = partition_by_edges(graph, n_workers)
    partition_time = partition_timer.stop()

    workers = [TriangleWorkerStats(i, r) for i, r in enumerate(ranges)]
    threads = [
        threading.Thread(target=_run_worker, args=(graph, stats)) for stats in workers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    count = sum(stats.triangle_count for stats in workers)
    time_taken = timer.stop()
    return TriangleResult(
        triangle_count=count,
        time_taken=time_taken,
        partition_time=partition_time,
        workers=workers,
    )


def _print_worker_stats(workers: Sequence[TriangleWorkerStats]) -> None:
    print("thread_id, num_vertices, num_edges, triangle_count, time_taken")
    for stats in workers:
        print(
            f"{stats.thread_id}, {stats.n_vertices}, {stats.n_edges}, "
            f"{stats.triangle_count}, {stats.time_taken:.6f}"
        )


def _print_totals(result: TriangleResult) -> None:
    print(f"Number of triangles : {result.triangle_count}")
    print(f"Number of unique triangles : {result.unique_triangles}")


def _unsigned(text: str) -> int:
    try:
        value = int(text, 0) if text.lower().startswith("0x") else int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Argument '{text}' failed to parse") from exc
    if value < 0:
        raise argparse.ArgumentTypeError(f"Argument '{text}' failed to parse")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="triangle_counting_serial",
        description="Count the number of triangles using serial and parallel execution",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--nWorkers", type=_unsigned, default=DEFAULT_NUMBER_OF_WORKERS,
        help="Number of workers",
    )
    parser.add_argument(
        "--strategy", type=_unsigned, default=DEFAULT_STRATEGY,
        help="Strategy to be used",
    )
    parser.add_argument(
        "--inputFile", default=DEFAULT_INPUT_FILE, help="Input graph file path"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = _parser().parse_args(sys.argv[1:] if argv is None else list(argv))
    print(f"Number of workers : {args.nWorkers}")
    print(f"Task decomposition strategy : {args.strategy}")

    print("Reading graph")
    try:
        graph = read_graph_from_binary(args.inputFile)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print("Created graph")

    try:
        if args.strategy == Strategy.SERIAL:
            print("\nSerial")
            result = triangle_count_serial(graph)
            _print_totals(result)
            print(f"Time taken (in seconds) : {result.time_taken:.{TIME_PRECISION}f}")
        elif args.strategy in (Strategy.VERTEX, Strategy.EDGE):
            if args.strategy == Strategy.VERTEX:
                print("\nVertex-based work partitioning")
            else:
                print("\nEdge-based work partitioning")
            result = triangle_count_parallel(
                graph, args.nWorkers, Strategy(args.strategy)
            )
            _print_worker_stats(result.workers)
            _print_totals(result)
            print(
                f"Partitioning time (in seconds) : "
                f"{result.partition_time:.{TIME_PRECISION}f}"
            )
            print(f"Time taken (in seconds) : {result.time_taken:.{TIME_PRECISION}f}")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())