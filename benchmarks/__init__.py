"""
Benchmark suite for jsontree parsing performance.

Compares building a jsontree value tree against standard JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Measures parsing speed and memory usage across different document shapes.
"""
