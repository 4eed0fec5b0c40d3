# labstructs

Small interactive console programs, each built around one classic data
structure. Each program shows a numbered menu and reads your choice and the
values it needs from standard input. It ends when you pick `0` or when input
runs out. The structures can also be used as a library.

Nothing outside the standard library is needed.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Programs

### File-backed hash table

```
labstructs-filetable [PATH]
```

The program asks for a file name if you give none. An existing file is
opened as a table. Otherwise you are asked for the table size and a new file
is created.

Records have positive integer keys and a line of text. Several records may
share a key, and each one gets a release number. You cannot add the same key
and text twice.

The menu offers:

- add a record
- find one release of a key
- find all releases of a key
- delete all releases of a key
- clean: keep only the newest release of each key and reset releases to 0
- show the table bucket by bucket

On exit the file is rewritten with live records only.

In a library, use `labstructs.filetable.FileTable`. It is a context manager,
and closing it compacts the file:

```python
from labstructs.filetable import FileTable

with FileTable.open("table.bin", 10) as table:
    table.add(5, "five")
    print(table.find_all(5))
```

`hash_key(key, size)` gives the bucket of a key.

### Binary search tree

```
labstructs-bst
```

An unbalanced binary search tree with positive integer keys. Repeated keys
are kept as releases. The menu offers:

- add a node
- delete the first node with a key
- list nodes whose key has a given number of digits
- find a release of a key
- find a release of the smallest key
- import alternating key and info lines from a text file
- print the tree sideways
- print it as a postorder list
- write `file.dot` and render it to `result.png` with Graphviz `dot`

In a library, the tree is `labstructs.bst.BinarySearchTree`.

### Counting numbers in a binary file

```
labstructs-make-numbers [PATH [NUMBERS ...]]
labstructs-count [SOURCE [REPORT]]
```

`labstructs-make-numbers` writes integers to a file as little-endian 32-bit
values. Without arguments it asks for the file name, the count and the
numbers.

`labstructs-count` reads such a file and writes a text report. Each line of
the report is `key --- count`, in postorder of a search tree. File names
that are not given on the command line are asked for.

### B-tree

```
labstructs-btree
```

A B-tree of minimum degree 2 with string keys. Each key holds every info
line added under it. The menu offers:

- add
- delete: a key with one info is removed, otherwise you choose the release to drop
- traverse the keys below a given bound
- find a key
- special find: the smallest or largest key whose character-code sum lies farthest from the sum of a given key
- import alternating key and info lines from a file
- print the tree
- write `file.dot`, render it with `dot` and show it with `catimg`
- index every word of a text file as `filename;line;offset`

In a library, the tree is `labstructs.btree.BTree`.

### B-tree with a cache

```
labstructs-cache [CAPACITY]
```

A B-tree behind an open-addressing cache of the given size. If no size is
given, the program asks for one. Additions go to the tree and are remembered
in the cache. A find checks the cache first. A key found only in the tree is
then cached.

When the cache is full, the least aged entry is evicted. Entries marked as
recorded or deleted are applied to the tree when they are evicted, and when
the program ends. The cache is `labstructs.cache.TreeCache`.

### Timing

```
labstructs-benchmark [--structure {bst,btree}] [--operation {add,delete,find}]
                     [--sizes N ...] [--repeats R] [--output FILE]
```

Measures the average processor time of 1000 adds, deletes or finds on
randomly filled trees of each size. It prints `size,seconds` lines and saves
them as CSV. The operation and the output file are asked for when they are
not given.

### Grid graph

```
labstructs-graph
```

A directed graph whose vertices are points with positive coordinates. Each
vertex is an enter, exit or connect point, and edges join only neighbouring
points. The menu offers:

- add and delete vertices and edges
- change a vertex's type
- print the graph
- find an exit reachable from an enter point
- show the shortest path from an enter point to an exit
- write `file.dot` and render it with `dot` and `catimg`
- reduce the graph to a depth-first spanning tree
- a batch run

The batch run fills a file you name with 6000 random points. It loads them
into the graph and writes `reachability_check.txt` and
`graph_after_spanning.txt`.

In a library, the graph is `labstructs.graph.Graph`. Failed operations raise
subclasses of `GraphError`.

## What it does not do

The package writes `.dot` files, but it does not render them itself. For
images, Graphviz's `dot` must be on your `PATH`. The B-tree and graph
programs also call `catimg` to show the image. If either tool is missing,
the program says so and carries on.