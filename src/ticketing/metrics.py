"""
Prometheus Metrics — extraction engine observability.

Exposes counters and histograms for:
- Parse outcomes (success / failure)
- Classifier fallbacks to the default category
- Date resolution source (format / rfc2822 / fragment / fallback)
- Contributor match outcome (matched / ambiguous / not_found)
- Parse stage latency

Usage
-----
    from src.ticketing.metrics import record_parse_outcome, timed_stage

    with timed_stage("parse"):
        ticket = parse_email_to_ticket(raw, contributors)

    record_parse_outcome("success")
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Parse calls by outcome.
PARSE_OUTCOMES: Counter = Counter(
    "ticket_extraction_parse_total",
    "Email parse calls by outcome (success / failure)",
    ["outcome"],
)

# Classifications that ended on the default category.
CLASSIFIER_FALLBACKS: Counter = Counter(
    "ticket_extraction_classifier_fallbacks_total",
    "Classifications that fell back to the default category",
    ["classifier"],
)

# How the received date was obtained.
DATE_SOURCES: Counter = Counter(
    "ticket_extraction_date_source_total",
    "Received-date resolutions by source",
    ["source"],
)

# Contributor resolution outcome.
CONTRIBUTOR_OUTCOMES: Counter = Counter(
    "ticket_extraction_contributor_total",
    "Contributor resolutions by outcome (matched / ambiguous / not_found)",
    ["outcome"],
)

# Latency per stage (seconds).
STAGE_LATENCY: Histogram = Histogram(
    "ticket_extraction_stage_seconds",
    "Processing time per extraction stage in seconds",
    ["stage"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_parse_outcome(outcome: str) -> None:
    """Increment the parse counter for *outcome*."""
    PARSE_OUTCOMES.labels(outcome=outcome).inc()


def record_classifier_fallback(classifier: str) -> None:
    """Increment the fallback counter for *classifier*."""
    CLASSIFIER_FALLBACKS.labels(classifier=classifier).inc()


def record_date_source(source: str) -> None:
    DATE_SOURCES.labels(source=source).inc()


def record_contributor_outcome(outcome: str) -> None:
    CONTRIBUTOR_OUTCOMES.labels(outcome=outcome).inc()


@contextmanager
def timed_stage(stage: str) -> Generator[None, None, None]:
    """
    Context manager that records stage latency.

    Usage::

        with timed_stage("classification"):
            project = classifiers.project.classify(subject, body)
    """
    with STAGE_LATENCY.labels(stage=stage).time():
        yield
