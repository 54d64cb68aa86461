"""Performance benchmarks for simplerank.

This package contains microbenchmarks for the hot paths of the library:
edge insertion, power iteration and result sorting.
"""
