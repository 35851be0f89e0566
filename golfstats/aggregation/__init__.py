"""Per-course and per-year running aggregates."""
