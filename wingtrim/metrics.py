"""Prometheus collectors for trimming runs."""

from __future__ import annotations

from prometheus_client import Counter, Histogram, Summary

TRIM_COUNTER = Counter(
    "wingtrim_trims_total",
    "Count of trimming runs",
    labelnames=("status",),
)

TRIM_DURATION = Summary(
    "wingtrim_trim_seconds",
    "Time spent parsing, analysing and rewriting a recording",
)

TRIMMED_RATIO = Histogram(
    "wingtrim_trimmed_fraction",
    "Fraction of samples removed from a recording",
    buckets=(0.1, 0.25, 0.5, 0.75, 0.9, 1.0),
)
