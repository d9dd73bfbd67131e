"""Per-creator registry of timed movie voting contests."""
