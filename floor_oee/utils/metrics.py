"""
Floor OEE - Application Metrics

Prometheus metrics for record ingestion and engine builds, exposed on the
/metrics endpoint of the API.
"""

from prometheus_client import Counter, Histogram

records_parsed_total = Counter(
    "floor_oee_records_parsed_total",
    "Total number of input records successfully parsed",
    ["record_type"],
)

records_dropped_total = Counter(
    "floor_oee_records_dropped_total",
    "Total number of input records dropped during parsing",
    ["record_type", "reason"],
)

intervals_overridden_total = Counter(
    "floor_oee_intervals_overridden_total",
    "Total number of automatic intervals overridden by manual records",
)

engine_build_seconds = Histogram(
    "floor_oee_engine_build_seconds",
    "Time spent building the metrics engine snapshot",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
