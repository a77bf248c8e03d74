# graphwork

Graph analytics on directed graphs stored in binary CSR/CSC form: triangle
counting and push-based PageRank, run serially or with the vertices split
across worker threads.

## Install

    pip install .
    pip install ".[test]"   # with pytest

## Graph files

A graph named `PATH` is stored as two files, `PATH.csr` (out-edges) and
`PATH.csc` (in-edges). Each file holds little-endian 32-bit integers: the
vertex count, the edge count, one offset per vertex, then the neighbour lists.

- `graphwork.graph.write_graph_to_binary(path, n_vertices, edges)` writes such
  a pair from a list of `(source, destination)` pairs and returns both paths.
- `graphwork.graph.read_graph_from_binary(path)` loads it into a `Graph`,
  whose `Vertex` objects keep ascending `out_neighbors` and `in_neighbors`.
  Malformed files raise `ValueError`.
- `Graph.from_edges(n_vertices, edges)` builds a graph in memory, and
  `Graph.write_listing(output_path)` writes the edges as `u v` text lines to
  `<output_path>1` (out-edges) and `<output_path>2` (in-edges).

## Commands

Count triangles:

    graphwork-triangles --inputFile PATH --strategy 1 --nWorkers 4

Compute PageRank:

    graphwork-pagerank --inputFile PATH --strategy 2 --nWorkers 4 --nIterations 20

Add `--useInt` to `graphwork-pagerank` to use fixed-point integer ranks
instead of single-precision floats.

Strategy `0` runs serially, `1` splits vertices evenly between workers, and
`2` gives each worker consecutive vertices up to an equal share of out-edges.
Per-worker statistics are printed for the parallel strategies. Any other
strategy number reads the graph and does nothing more.

## Library use

```python
from graphwork.graph import write_graph_to_binary, read_graph_from_binary
from graphwork.triangles import triangle_count_serial
from graphwork.pagerank import page_rank_parallel
from graphwork.partition import Strategy

write_graph_to_binary("/tmp/tri", 3, [(0, 1), (1, 2), (2, 0)])
graph = read_graph_from_binary("/tmp/tri")
result = triangle_count_serial(graph)
print(result.triangle_count, result.unique_triangles)
ranks = page_rank_parallel(graph, 10, 2, Strategy.EDGE, False)
print(ranks.sum_of_page_ranks)
```

`graphwork.partition` offers `partition_by_vertices` and `partition_by_edges`,
each returning one `range` of vertices per worker.

Other building blocks: `graphwork.timer.Timer` (a stopwatch with weighted
totals), `graphwork.sorting.quick_sort` and `insertion_sort` (in-place sorts
taking a `less` function), and `graphwork.barrier.CustomBarrier` (a reusable
thread barrier).

## What it does not do

The package has no concurrent FIFO queue and no tool for checking a queue
under concurrent producers and consumers; only the graph analytics above are
provided.