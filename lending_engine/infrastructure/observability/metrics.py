"""Prometheus metrics for score distribution and schedule generation"""

from prometheus_client import Counter, Histogram

# Scoring metrics
assessment_counter = Counter(
    "lending_credit_assessment_total",
    "Credit assessments computed",
    ["category", "path"],  # Excellent | Good | Fair | Poor ; initial | history
)

# Schedule metrics
schedule_counter = Counter(
    "lending_schedule_generated_total",
    "Repayment schedules generated",
    ["frequency"],
)

installments_generated_counter = Counter(
    "lending_installments_generated_total",
    "Installments produced by schedule generation",
    ["frequency"],
)

due_today_counter = Counter(
    "lending_due_today_total",
    "On-demand due-today installment requests",
    ["outcome"],  # created | skipped
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_assessment(category: str, initial: bool) -> None:
    """Record one computed credit assessment"""
    assessment_counter.labels(category=category, path="initial" if initial else "history").inc()


def record_schedule(frequency: str, installment_count: int) -> None:
    """Record a generated schedule and its installment volume"""
    schedule_counter.labels(frequency=frequency).inc()
    installments_generated_counter.labels(frequency=frequency).inc(installment_count)


def record_due_today(created: bool) -> None:
    due_today_counter.labels(outcome="created" if created else "skipped").inc()
