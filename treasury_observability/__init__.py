"""Prometheus metrics for the Griffin orchestration layer."""

from .metrics import (griffin_account_polls_total, griffin_http_requests_total,
                      griffin_operations_total, griffin_payments_total)

__all__ = [
    "griffin_http_requests_total",
    "griffin_payments_total",
    "griffin_account_polls_total",
    "griffin_operations_total",
]
