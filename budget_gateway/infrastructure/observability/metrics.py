"""Prometheus metrics for monitoring bill activity, audit health and collaborators"""

from prometheus_client import Counter, Histogram

# Domain metrics
bill_mutation_counter = Counter(
    "budget_bill_mutations_total",
    "Bill mutations committed",
    ["action"],  # create | update | delete | payment
)

dashboard_read_counter = Counter(
    "budget_dashboard_reads_total",
    "Dashboard summaries computed",
)

# Audit trail health
activity_log_failure_counter = Counter(
    "budget_activity_log_failures_total",
    "Activity log appends that failed after the mutation committed",
)

# Collaborators
advisor_fallback_counter = Counter(
    "budget_advisor_fallbacks_total",
    "AI advisor calls answered with static fallback",
    ["operation"],  # advice | analysis
)

email_delivery_counter = Counter(
    "budget_email_deliveries_total",
    "Email notifier outcomes",
    ["outcome"],  # sent | failed | disabled
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_bill_mutation(action: str) -> None:
    """Count a committed bill mutation"""
    bill_mutation_counter.labels(action=action).inc()
