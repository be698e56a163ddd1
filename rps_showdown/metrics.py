"""Shared Prometheus metric helpers for the RPS Showdown service.

This module centralises metric registration so repeated imports (the app, the
tests and reloads under uvicorn) reuse the same collectors without raising
"Collector already registered" errors.
"""
from __future__ import annotations

from typing import Optional, Sequence
import logging

from prometheus_client import Counter, Gauge, REGISTRY

_logger = logging.getLogger(__name__)


def _get_or_create_metric(metric_cls, name: str, documentation: str, *, labelnames: Optional[Sequence[str]] = None):
    """Register (or retrieve) a metric by name."""
    try:
        return metric_cls(name, documentation, labelnames=labelnames or ())
    except ValueError:
        existing = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
        if existing is None:
            raise
        return existing


def get_counter(name: str, documentation: str, labelnames: Optional[Sequence[str]] = None):
    return _get_or_create_metric(Counter, name, documentation, labelnames=labelnames)


def get_gauge(name: str, documentation: str, labelnames: Optional[Sequence[str]] = None):
    return _get_or_create_metric(Gauge, name, documentation, labelnames=labelnames)


# Round-level metrics
_ROUNDS_COUNTER = get_counter(
    "rps_rounds_total",
    "Resolved rounds by outcome (player perspective)",
    ["outcome"],
)

_COMPUTER_MOVES_COUNTER = get_counter(
    "rps_computer_moves_total",
    "Moves drawn by the computer",
    ["move"],
)

_STALE_REVEALS_COUNTER = get_counter(
    "rps_stale_reveals_total",
    "Reveal timers discarded because a newer round superseded them",
)

# Score metrics
_SCORE_GAUGE = get_gauge(
    "rps_score",
    "Current persisted score",
    ["side"],
)

_SCORE_RESETS_COUNTER = get_counter(
    "rps_score_resets_total",
    "Confirmed score resets",
)

_PERSISTENCE_FAILURES_COUNTER = get_counter(
    "rps_score_persistence_failures_total",
    "Score store operations that failed and were recovered",
    ["operation"],
)


def record_round(outcome: str, computer_move: str) -> None:
    """Record a resolved round."""
    _ROUNDS_COUNTER.labels(outcome=outcome).inc()
    _COMPUTER_MOVES_COUNTER.labels(move=computer_move).inc()


def record_stale_reveal() -> None:
    _STALE_REVEALS_COUNTER.inc()


def update_score(player: int, computer: int) -> None:
    """Mirror the in-memory score onto the gauges."""
    _SCORE_GAUGE.labels(side="player").set(player)
    _SCORE_GAUGE.labels(side="computer").set(computer)


def record_score_reset() -> None:
    _SCORE_RESETS_COUNTER.inc()


def record_persistence_failure(operation: str) -> None:
    """Count a recovered store failure (``operation`` is ``read`` or ``write``)."""
    _PERSISTENCE_FAILURES_COUNTER.labels(operation=operation).inc()
    _logger.debug("Recorded score store %s failure", operation)


def initialize_all_metrics() -> None:
    """Touch every label combination so dashboards draw zeros instead of gaps.

    Prometheus only exports labelled series that have been used at least once.
    """
    for outcome in ("win", "loss", "tie"):
        _ROUNDS_COUNTER.labels(outcome=outcome).inc(0)
    for move in ("rock", "paper", "scissors"):
        _COMPUTER_MOVES_COUNTER.labels(move=move).inc(0)
    for operation in ("read", "write"):
        _PERSISTENCE_FAILURES_COUNTER.labels(operation=operation).inc(0)


__all__ = [
    "get_counter",
    "get_gauge",
    "record_round",
    "record_stale_reveal",
    "update_score",
    "record_score_reset",
    "record_persistence_failure",
    "initialize_all_metrics",
]
