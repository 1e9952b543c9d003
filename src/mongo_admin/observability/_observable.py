"""Timing and error-recording mixin for operation classes."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING

from mongo_admin.errors import AdminOperationError

if TYPE_CHECKING:
    from mongo_admin.observability.metrics import MetricsRecorder


def error_label(exc: Exception) -> str:
    """Label errors by taxonomy code, falling back to the class name."""
    if isinstance(exc, AdminOperationError):
        return exc.code.value
    return type(exc).__name__


class ObservableMixin:
    """Mixin providing ``_observe_operation``, ``_observe_error``, and ``_metrics_recorder``.

    Subclasses set ``_resource_name`` and may provide ``_metrics`` to override
    the process-level recorder. With ``@dataclass(slots=True)`` declare
    ``_resource_name`` as ``ClassVar[str]``.
    """

    _resource_name: str
    _metrics: MetricsRecorder | None

    def _metrics_recorder(self) -> MetricsRecorder:
        from mongo_admin.observability.metrics import get_metrics_recorder

        return get_metrics_recorder() if self._metrics is None else self._metrics

    def _observe_operation(self, operation: str, started: float, *, success: bool) -> None:
        self._metrics_recorder().observe_operation(
            resource=self._resource_name,
            operation=operation,
            duration_seconds=perf_counter() - started,
            success=success,
        )

    def _observe_error(self, operation: str, started: float, exc: Exception) -> None:
        self._observe_operation(operation, started, success=False)
        self._metrics_recorder().observe_error(
            resource=self._resource_name,
            operation=operation,
            error_type=error_label(exc),
        )
