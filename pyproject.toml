[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labstructs"
version = "0.1.0"
description = "Interactive console programs for classic data structures: a file-backed hash table, binary search trees, a B-tree with a cache, and a grid graph."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "data structures",
    "hash table",
    "binary search tree",
    "b-tree",
    "cache",
    "graph",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
labstructs-filetable = "labstructs.filetable_cli:main"
labstructs-bst = "labstructs.bst_cli:main"
labstructs-count = "labstructs.counting:main"
labstructs-make-numbers = "labstructs.counting:make_file_main"
labstructs-btree = "labstructs.btree_cli:main"
labstructs-cache = "labstructs.cache_cli:main"
labstructs-benchmark = "labstructs.benchmark:main"
labstructs-graph = "labstructs.graph_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["labstructs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
