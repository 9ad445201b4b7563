"""Prometheus metrics for listing traffic, stage transitions and store health"""

from prometheus_client import Counter, Histogram

# Listing metrics
listing_counter = Counter(
    "debt_gateway_listing_total",
    "Debt listings served",
    ["listing", "filter_mode"],  # candidates | new, all | any
)

listing_rows_histogram = Histogram(
    "debt_gateway_listing_rows",
    "Rows returned per listing page",
    ["listing"],
    buckets=[0, 1, 5, 10, 20, 50, 100],
)

# Stage transition metrics
debts_moved_counter = Counter(
    "debt_gateway_debts_moved_total",
    "Debt records moved between stages",
    ["to_stage"],
)

debts_unchanged_counter = Counter(
    "debt_gateway_debts_unchanged_total",
    "Requested account ids that did not move",
    ["to_stage"],
)

# Record store metrics
store_failures_counter = Counter(
    "debt_gateway_store_failures_total",
    "Failed record store operations",
    ["operation"],  # select | select_range | update
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_listing(listing: str, filter_mode: str, row_count: int) -> None:
    """Record one served listing page"""
    listing_counter.labels(listing=listing, filter_mode=filter_mode).inc()
    listing_rows_histogram.labels(listing=listing).observe(row_count)


def record_transition(to_stage: str, moved_count: int, unchanged_count: int) -> None:
    """Record the outcome of a batch stage move"""
    debts_moved_counter.labels(to_stage=to_stage).inc(moved_count)
    # unchanged may be negative when one account owns several debts in the source stage
    if unchanged_count > 0:
        debts_unchanged_counter.labels(to_stage=to_stage).inc(unchanged_count)
