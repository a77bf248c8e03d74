"""Triangle counting and PageRank on CSR/CSC graphs, serially or across worker threads."""

__version__ = "0.1.0"