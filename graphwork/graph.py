"""Directed graph held as sorted adjacency lists, with a CSR/CSC binary format.

A graph stored at ``<path>`` lives in two files, ``<path>.csr`` and
``<path>.csc``. Each is a flat array of little-endian 32-bit integers::

    n, m, offset[0], ..., offset[n-1], edge[0], ..., edge[m-1]

In the ``.csr`` file the edges are the out-neighbours grouped by source
vertex; in the ``.csc`` file they are the in-neighbours grouped by
destination vertex. ``offset[i]`` is where vertex ``i``'s group starts; the
last group runs to ``m``.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from graphwork.sorting import insertion_sort, quick_sort

PathLike = Union[str, os.PathLike]

_INT = struct.Struct("<i")
_HEADER_LEN = 2


@dataclass(frozen=True)
class Vertex:
    """A vertex with its out- and in-neighbours, each sorted ascending."""

    out_neighbors: Tuple[int, ...] = field(default_factory=tuple)
    in_neighbors: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def out_degree(self) -> int:
        return len(self.out_neighbors)

    @property
    def in_degree(self) -> int:
        return len(self.in_neighbors)


@dataclass(frozen=True)
class Graph:
    """A directed graph of ``n`` vertices numbered from 0."""

    vertices: Tuple[Vertex, ...]

    @property
    def n(self) -> int:
        """Number of vertices."""
        return len(self.vertices)

    @property
    def m(self) -> int:
        """Number of edges."""
        return sum(vertex.out_degree for vertex in self.vertices)

    @classmethod
    def from_edges(cls, n_vertices: int, edges: Iterable[Tuple[int, int]]) -> "Graph":
        """Build a graph from ``(source, destination)`` pairs."""
        out_lists, in_lists = _group_edges(n_vertices, edges)
        vertices = []
        for outs, ins in zip(out_lists, in_lists):
            quick_sort(outs)
            quick_sort(ins)
            vertices.append(Vertex(tuple(outs), tuple(ins)))
        return cls(tuple(vertices))

    def write_listing(self, output_path: PathLike = "/tmp/output/a") -> Tuple[Path, Path]:
        """Write the edges as text, one ``"u v"`` pair per line.

        Out-edges go to ``<output_path>1`` and in-edges to ``<output_path>2``;
        each vertex's neighbours are listed in descending order. A summary is
        printed to standard output. Returns the two paths written.
        """
        print("Graph :")
        print(f"n : {self.n}")
        print(f"m : {self.m}")
        print("Parsing outEdges")
        out_path = Path(f"{os.fspath(output_path)}1")
        _write_pairs(out_path, (vertex.out_neighbors for vertex in self.vertices))
        print("Parsing inEdges")
        in_path = Path(f"{os.fspath(output_path)}2")
        _write_pairs(in_path, (vertex.in_neighbors for vertex in self.vertices))
        return out_path, in_path


def _descending(neighbors: Sequence[int]) -> List[int]:
    ordered = list(neighbors)
    insertion_sort(ordered, lambda a, b: a > b)
    return ordered


def _write_pairs(path: Path, adjacency: Iterable[Sequence[int]]) -> None:
    with path.open("w", encoding="ascii") as handle:
        for u, neighbors in enumerate(adjacency):
            for v in _descending(neighbors):
                handle.write(f"{u} {v}\n")


def _group_edges(
    n_vertices: int, edges: Iterable[Tuple[int, int]]
) -> Tuple[List[List[int]], List[List[int]]]:
    if n_vertices < 0:
        raise ValueError("the number of vertices cannot be negative")
    out_lists: List[List[int]] = [[] for _ in range(n_vertices)]
    in_lists: List[List[int]] = [[] for _ in range(n_vertices)]
    for u, v in edges:
        if not (0 <= u < n_vertices and 0 <= v < n_vertices):
            raise ValueError(f"edge ({u}, {v}) has a vertex outside 0..{n_vertices - 1}")
        out_lists[u].append(v)
        in_lists[v].append(u)
    return out_lists, in_lists


def _encode(n_vertices: int, groups: Sequence[Sequence[int]]) -> bytes:
    offsets = []
    flat: List[int] = []
    for group in groups:
        offsets.append(len(flat))
        flat.extend(group)
    values = [n_vertices, len(flat), *offsets, *flat]
    return struct.pack(f"<{len(values)}i", *values)


def write_graph_to_binary(
    output_path: PathLike, n_vertices: int, edges: Iterable[Tuple[int, int]]
) -> Tuple[Path, Path]:
    """Store a graph as ``<output_path>.csr`` and ``<output_path>.csc``.

    Returns the two paths written.
    """
    out_lists, in_lists = _group_edges(n_vertices, edges)
    base = os.fspath(output_path)
    csr_path = Path(f"{base}.csr")
    csc_path = Path(f"{base}.csc")
    csr_path.write_bytes(_encode(n_vertices, out_lists))
    csc_path.write_bytes(_encode(n_vertices, in_lists))
    return csr_path, csc_path


def _read_ints(path: Path) -> Tuple[int, ...]:
    data = path.read_bytes()
    if len(data) % _INT.size:
        raise ValueError(f"{path}: size is not a multiple of {_INT.size} bytes")
    return struct.unpack(f"<{len(data) // _INT.size}i", data)


def _adjacency(contents: Sequence[int], n: int, m: int, path: Path) -> List[Tuple[int, ...]]:
    if len(contents) < _HEADER_LEN + n + m:
        raise ValueError(f"{path}: file is too short for {n} vertices and {m} edges")
    offsets = contents[_HEADER_LEN:_HEADER_LEN + n]
    edges = contents[_HEADER_LEN + n:_HEADER_LEN + n + m]
    ends = list(offsets[1:]) + [m]
    groups = []
    for start, end in zip(offsets, ends):
        if not 0 <= start <= end <= m:
            raise ValueError(f"{path}: invalid offsets {start}..{end}")
        neighbors = list(edges[start:end])
        if any(not 0 <= v < n for v in neighbors):
            raise ValueError(f"{path}: neighbour outside 0..{n - 1}")
        if len(neighbors) > 1:
            quick_sort(neighbors)
        groups.append(tuple(neighbors))
    return groups


def read_graph_from_binary(input_path: PathLike) -> Graph:
    """Load the graph stored at ``<input_path>.csr`` and ``<input_path>.csc``."""
    base = os.fspath(input_path)
    csr_path = Path(f"{base}.csr")
    csc_path = Path(f"{base}.csc")
    csr = _read_ints(csr_path)
    csc = _read_ints(csc_path)
    if len(csr) < _HEADER_LEN:
        raise ValueError(f"{csr_path}: missing header")
    n, m = csr[0], csr[1]
    if n < 0 or m < 0:
        raise ValueError(f"{csr_path}: negative vertex or edge count")
    outs = _adjacency(csr, n, m, csr_path)
    ins = _adjacency(csc, n, m, csc_path)
    return Graph(tuple(Vertex(o, i) for o, i in zip(outs, ins)))