"""Prometheus metrics for compliance calculations and data-store health"""

from prometheus_client import Counter, Histogram

# Calculation outcomes
tds_calculation_counter = Counter(
    "forex_tds_calculations_total",
    "TDS calculations performed",
    ["outcome"],  # applicable | not_applicable | unavailable
)

lrs_check_counter = Counter(
    "forex_lrs_limit_checks_total",
    "LRS limit checks performed",
    ["outcome"],  # allowed | warning | rejected | unavailable
)

lrs_recorded_counter = Counter(
    "forex_lrs_usage_recorded_total",
    "LRS usage ledger rows appended",
    ["service_type"],
)

city_validation_counter = Counter(
    "forex_city_validations_total",
    "Delivery city validations",
    ["result"],  # eligible | outside_radius | unknown
)

unmapped_status_counter = Counter(
    "forex_unmapped_order_status_total",
    "Raw order statuses with no canonical mapping",
    ["service_type"],
)

pricing_quote_counter = Counter(
    "forex_pricing_quotes_total",
    "Product rate quotes served",
    ["product"],
)

# Dependencies
usage_store_failures_counter = Counter(
    "usage_store_failures_total",
    "Failed reads/writes against the LRS usage ledger",
)

rates_fetch_failures_counter = Counter(
    "rates_fetch_failures_total",
    "Failed currency conversions",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_tds(applicable: bool) -> None:
    tds_calculation_counter.labels(outcome="applicable" if applicable else "not_applicable").inc()


def record_limit_check(allowed: bool, warned: bool) -> None:
    if not allowed:
        outcome = "rejected"
    elif warned:
        outcome = "warning"
    else:
        outcome = "allowed"
    lrs_check_counter.labels(outcome=outcome).inc()


def record_city_validation(matched: bool, eligible: bool) -> None:
    if eligible:
        result = "eligible"
    elif matched:
        result = "outside_radius"
    else:
        result = "unknown"
    city_validation_counter.labels(result=result).inc()
