"""Push-based PageRank over a directed graph, serially or with worker threads."""

from __future__ import annotations

import argparse
import struct
import sys
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from graphwork.barrier import CustomBarrier
from graphwork.graph import Graph, read_graph_from_binary
from graphwork.partition import Strategy, partition_by_edges, partition_by_vertices
from graphwork.timer import Timer

DEFAULT_NUMBER_OF_WORKERS = 1
DEFAULT_MAX_ITER = 20
DEFAULT_STRATEGY = 1
DEFAULT_INPUT_FILE = "/scratch/input_graphs/roadNet-CA"

INIT_PAGE_RANK_FLOAT = 1.0
INIT_PAGE_RANK_INT = 100000
DAMPING = 0.85

Rank = Union[int, float]

_F32 = struct.Struct("<f")


def _to_f32(value: float) -> float:
    """Round a value to single precision."""
    return _F32.unpack(_F32.pack(value))[0]


class _FloatRanks:
    """Single-precision rank arithmetic with the 0.85 damping factor."""

    init = INIT_PAGE_RANK_FLOAT
    zero = 0.0

    @staticmethod
    def share(rank: float, out_degree: int) -> float:
        return _to_f32(rank / out_degree)

    @staticmethod
    def add(a: float, b: float) -> float:
        return _to_f32(a + b)

    @staticmethod
    def rank(incoming: float) -> float:
        return _to_f32(1 - DAMPING + DAMPING * incoming)


class _IntRanks:
    """Fixed-point rank arithmetic on integers."""

    init = INIT_PAGE_RANK_INT
    zero = 0

    @staticmethod
    def share(rank: int, out_degree: int) -> int:
        return rank // out_degree

    @staticmethod
    def add(a: int, b: int) -> int:
        return a + b

    @staticmethod
    def rank(incoming: int) -> int:
        return 15000 + (5 * incoming) // 6


def _arithmetic(use_int: bool):
    return _IntRanks if use_int else _FloatRanks


def _total(ranks: Sequence[Rank], arith) -> Rank:
    total = arith.zero
    for value in ranks:
        total = arith.add(total, value)
    return total


@dataclass
class PageRankWorkerStats:
    """What one worker processed and how long it waited at the barriers."""

    thread_id: int
    vertices: range
    n_vertices: int = 0
    n_edges: int = 0
    wait_time_one: float = 0.0
    wait_time_two: float = 0.0
    time_taken: float = 0.0


@dataclass
class PageRankResult:
    """Outcome of a PageRank run."""

    ranks: List[Rank]
    sum_of_page_ranks: Rank
    time_taken: float
    partition_time: float = 0.0
    workers: List[PageRankWorkerStats] = field(default_factory=list)


def page_rank_serial(
    graph: Graph, max_iters: int, use_int: bool = False
) -> PageRankResult:
    """Run ``max_iters`` push-based PageRank iterations in one thread."""
    arith = _arithmetic(use_int)
    n = graph.n
    pr_curr: List[Rank] = [arith.init] * n
    pr_next: List[Rank] = [arith.zero] * n

    timer = Timer()
    timer.start()
    for _ in range(max_iters):
        for u, vertex in enumerate(graph.vertices):
            degree = vertex.out_degree
            for v in vertex.out_neighbors:
                pr_next[v] = arith.add(pr_next[v], arith.share(pr_curr[u], degree))
        pr_curr = [arith.rank(value) for value in pr_next]
        pr_next = [arith.zero] * n
    time_taken = timer.stop()

    return PageRankResult(
        ranks=pr_curr,
        sum_of_page_ranks=_total(pr_curr, arith),
        time_taken=time_taken,
    )


class _SharedState:
    def __init__(self, graph: Graph, max_iters: int, n_workers: int, arith) -> None:
        self.graph = graph
        self.max_iters = max_iters
        self.arith = arith
        self.barrier = CustomBarrier(n_workers)
        self.pr_curr: List[Rank] = [arith.init] * graph.n
        self.pr_next: List[Rank] = [arith.zero] * graph.n
        self.lock = threading.Lock()

    def push(self, stats: PageRankWorkerStats) -> None:
        arith = self.arith
        for u in stats.vertices:
            vertex = self.graph.vertices[u]
            degree = vertex.out_degree
            stats.n_vertices += 1
            stats.n_edges += degree
            for v in vertex.out_neighbors:
                value = arith.share(self.pr_curr[u], degree)
                with self.lock:
                    self.pr_next[v] = arith.add(self.pr_next[v], value)

    def settle(self, stats: PageRankWorkerStats) -> None:
        arith = self.arith
        for u in stats.vertices:
            self.pr_curr[u] = arith.rank(self.pr_next[u])
            self.pr_next[u] = arith.zero


def _run_worker(state: _SharedState, stats: PageRankWorkerStats) -> None:
    total = Timer()
    total.start()
    wait = Timer()
    for _ in range(state.max_iters):
        wait.start()
        state.barrier.wait()
        stats.wait_time_one += wait.stop()

        state.push(stats)

        wait.start()
        state.barrier.wait()
        stats.wait_time_two += wait.stop()

        state.settle(stats)
    stats.time_taken = total.stop()


def page_rank_parallel(
    graph: Graph,
    max_iters: int,
    n_workers: int,
    strategy: Strategy,
    use_int: bool = False,
) -> PageRankResult:
    """Run PageRank with ``n_workers`` threads, each owning a vertex range."""
    strategy = Strategy(strategy)
    if strategy is Strategy.SERIAL:
        raise ValueError("parallel PageRank needs the vertex or edge strategy")
    arith = _arithmetic(use_int)

    partition_timer = Timer()
    partition_timer.start()
    if strategy is Strategy.VERTEX:
        ranges = partition_by_vertices(graph, n_workers)
    else:
        ranges = partition_by_edges(graph, n_workers)
    partition_time = partition_timer.stop()

    state = _SharedState(graph, max_iters, n_workers, arith)
    workers = [PageRankWorkerStats(i, r) for i, r in enumerate(ranges)]

    timer = Timer()
    timer.start()
    threads = [
        threading.Thread(target=_run_worker, args=(state, stats)) for stats in workers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    time_taken = timer.stop()

    return PageRankResult(
        ranks=list(state.pr_curr),
        sum_of_page_ranks=_total(state.pr_curr, arith),
        time_taken=time_taken,
        partition_time=partition_time,
        workers=workers,
    )


def _format_value(value: Rank) -> str:
    if isinstance(value, int):
        return str(value)
    return f"{value:.6f}"


def _print_worker_stats(workers: Sequence[PageRankWorkerStats]) -> None:
    print("thread_id, num_vertices, num_edges, barrier1_time, barrier2_time, total_time")
    for stats in workers:
        print(
            f"{stats.thread_id}, {stats.n_vertices}, {stats.n_edges}, "
            f"{stats.wait_time_one:.6f}, {stats.wait_time_two:.6f}, "
            f"{stats.time_taken:.6f}"
        )


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
        prog="page_rank_push",
        description="Calculate page_rank using serial and parallel execution",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--nWorkers", type=_unsigned, default=DEFAULT_NUMBER_OF_WORKERS,
        help="Number of workers",
    )
    parser.add_argument(
        "--nIterations", type=_unsigned, default=DEFAULT_MAX_ITER,
        help="Maximum number of iterations",
    )
    parser.add_argument(
        "--strategy", type=_unsigned, default=DEFAULT_STRATEGY,
        help="Strategy to be used",
    )
    parser.add_argument(
        "--inputFile", default=DEFAULT_INPUT_FILE, help="Input graph file path"
    )
    parser.add_argument(
        "--useInt", action="store_true",
        help="Use fixed-point integer ranks instead of floats",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    args = _parser().parse_args(sys.argv[1:] if argv is None else list(argv))
    print("Using INT" if args.useInt else "Using FLOAT")
    print(f"Number of workers : {args.nWorkers}")
    print(f"Task decomposition strategy : {args.strategy}")
    print(f"Iterations : {args.nIterations}")

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
            result = page_rank_serial(graph, args.nIterations, args.useInt)
            print(f"Sum of page rank : {_format_value(result.sum_of_page_ranks)}")
            print(f"Time taken (in seconds) : {result.time_taken:.6f}")
        elif args.strategy in (Strategy.VERTEX, Strategy.EDGE):
            if args.strategy == Strategy.VERTEX:
                print("\nVertex-based work partitioning")
            else:
                print("\nEdge-based work partitioning")
            result = page_rank_parallel(
                graph, args.nIterations, args.nWorkers,
                Strategy(args.strategy), args.useInt,
            )
            _print_worker_stats(result.workers)
            print(f"Sum of page rank : {_format_value(result.sum_of_page_ranks)}")
            print(f"Partitioning time (in seconds) : {result.partition_time:.6f}")
            print(f"Time taken (in seconds) : {result.time_taken:.6f}")
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())