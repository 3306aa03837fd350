"""Prometheus metrics helpers for export observability.

Metrics taxonomy:
Export operations:
    - export_requests_total (label format)
    - export_generation_seconds (label format)
    - export_failures_total (labels format, kind)
    - export_bytes_total (counter of bytes delivered)
    - export_pages_total (pages produced by the PDF renderer)
"""
from prometheus_client import Counter, Histogram

EXPORT_REQUESTS = Counter(
    "export_requests_total",
    "Total export requests",
    ["format"]
)

# Export generation timing (markup -> format bytes)
EXPORT_GENERATION_SECONDS = Histogram(
    "export_generation_seconds",
    "Time to generate export file (docx/pdf/md/html)",
    ["format"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5)
)

# kind is "build" (renderer save step) or "task" (worker offload)
EXPORT_FAILURES = Counter(
    "export_failures_total",
    "Total failed export generations",
    ["format", "kind"]
)

EXPORT_BYTES_TOTAL = Counter(
    "export_bytes_total",
    "Total bytes generated for exports"
)

EXPORT_PAGES_TOTAL = Counter(
    "export_pages_total",
    "Total pages laid out by the PDF renderer"
)

__all__ = [
    "EXPORT_REQUESTS",
    "EXPORT_GENERATION_SECONDS",
    "EXPORT_FAILURES",
    "EXPORT_BYTES_TOTAL",
    "EXPORT_PAGES_TOTAL",
]
