"""Prometheus metrics for ledger activity, budget health and request latency"""

from typing import Iterable

from prometheus_client import Counter, Histogram

# Ledger activity
records_created_counter = Counter(
    "pocketledger_records_created_total",
    "Ledger records created",
    ["entity"],  # transaction | loan | payment | borrower | loan_transaction | ...
)

domain_error_counter = Counter(
    "pocketledger_domain_errors_total",
    "Requests rejected by domain validation",
    ["kind"],  # invalid_input | not_found
)

# Budget health
budget_status_counter = Counter(
    "pocketledger_budget_status_total",
    "Budget progress evaluations by status",
    ["status"],  # good | warning | over
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_created(entity: str) -> None:
    records_created_counter.labels(entity=entity).inc()


def record_domain_error(kind: str) -> None:
    domain_error_counter.labels(kind=kind).inc()


def record_budget_statuses(statuses: Iterable[str]) -> None:
    """Count evaluated budgets per status for alerting on overspend"""
    for status in statuses:
        budget_status_counter.labels(status=status).inc()
