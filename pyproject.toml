[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "graphwork"
version = "0.1.0"
description = "Graph analytics (triangle counting, PageRank) on CSR/CSC binary graphs with worker partitioning"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "pagerank", "triangle-counting", "csr", "csc", "threads", "partitioning"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
graphwork-triangles = "graphwork.triangles:main"
graphwork-pagerank = "graphwork.pagerank:main"

[tool.hatch.build.targets.wheel]
packages = ["graphwork"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
