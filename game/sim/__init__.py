"""
Determinism-friendly simulation helpers.

This package holds *small* primitives (seeded RNG, reporting contracts) so
gameplay code can avoid the global `random` module and share tick results
without import cycles.
"""
