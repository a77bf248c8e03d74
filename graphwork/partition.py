"""Splitting a graph's vertices into contiguous ranges, one per worker."""

from __future__ import annotations

from enum import IntEnum
from typing import List

from graphwork.graph import Graph


class Strategy(IntEnum):
    """How work is handed out to workers."""

    SERIAL = 0
    VERTEX = 1
    EDGE = 2


def _check_workers(n_workers: int) -> None:
    if n_workers < 1:
        raise ValueError("at least one worker is needed")


def partition_by_vertices(graph: Graph, n_workers: int) -> List[range]:
    """Give each worker an equal share of vertices; the last takes the rest."""
    _check_workers(n_workers)
    n = graph.n
    size = n // n_workers
    bounds = [i * size for i in range(n_workers)] + [n]
    return [range(start, end) for start, end in zip(bounds, bounds[1:])]


def partition_by_edges(graph: Graph, n_workers: int) -> List[range]:
    """Give each worker consecutive vertices until it holds ``m // n_workers``
    out-edges; the last worker takes every remaining vertex."""
    _check_workers(n_workers)
    n = graph.n
    degrees = [vertex.out_degree for vertex in graph.vertices]
    work_size = sum(degrees) // n_workers
    ranges: List[range] = []
    start = end = 0
    for _ in range(n_workers):
        edge_count = 0
        while edge_count < work_size and end < n:
            edge_count += degrees[end]
            end += 1
        ranges.append(range(start, end))
        start = end
    ranges[-1] = range(ranges[-1].start, n)
    return ranges