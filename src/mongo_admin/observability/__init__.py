"""Logging and metrics helpers."""

from mongo_admin.observability.logging import (
    JsonFormatter,
    TextFormatter,
    bootstrap_logging,
    bootstrap_logging_from_app_settings,
    get_session_key,
    session_scope,
)
from mongo_admin.observability.metrics import (
    MetricsRecorder,
    NoopMetricsRecorder,
    PrometheusMetricsRecorder,
    configure_metrics_from_app_settings,
    configure_prometheus_metrics,
    get_metrics_recorder,
    render_prometheus_metrics,
    set_metrics_recorder,
)

__all__ = [
    "JsonFormatter",
    "MetricsRecorder",
    "NoopMetricsRecorder",
    "PrometheusMetricsRecorder",
    "TextFormatter",
    "bootstrap_logging",
    "bootstrap_logging_from_app_settings",
    "configure_metrics_from_app_settings",
    "configure_prometheus_metrics",
    "get_metrics_recorder",
    "get_session_key",
    "render_prometheus_metrics",
    "session_scope",
    "set_metrics_recorder",
]
