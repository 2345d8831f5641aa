import logging
import os
from typing import Mapping, Optional

from opentelemetry import metrics
from opentelemetry.instrumentation.logging import LoggingInstrumentor

_metrics_initialized = False
_queue_hist = None
_index_counter = None


def setup_logging(level: Optional[str] = None) -> None:
    """Configure Python logging with OpenTelemetry trace correlation.

    This is safe to call multiple times.
    """
    lvl = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.getLogger().setLevel(lvl)

    # Installs the record factory that provides the otel* format fields below
    LoggingInstrumentor().instrument(set_logging_format=True)

    logging.basicConfig(
        level=lvl,
        format=(
            "%(asctime)s %(levelname)s "
            "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s "
            "resource.service.name=%(otelServiceName)s trace_sampled=%(otelTraceSampled)s] "
            "- %(name)s: %(message)s"
        ),
    )


def _init_metrics() -> None:
    global _metrics_initialized, _queue_hist, _index_counter
    if _metrics_initialized:
        return
    try:
        meter = metrics.get_meter("photofind.observability")
        _queue_hist = meter.create_histogram(
            name="photofind.queue.depth",
            description="Approximate depth of the RQ indexing queue",
            unit="{jobs}",
        )
        _index_counter = meter.create_counter(
            name="photofind.index.events",
            description="Photo events processed by the indexing pipeline",
            unit="{events}",
        )
    except Exception:
        logging.getLogger(__name__).warning("Metrics unavailable", exc_info=True)
        _queue_hist = None
        _index_counter = None
    _metrics_initialized = True


def record_queue_depth(depth: int, attributes: Optional[Mapping[str, str]] = None) -> None:
    """Record a queue depth sample (exported via OTEL metrics)."""
    _init_metrics()
    if _queue_hist is None:
        return
    try:
        _queue_hist.record(int(depth), attributes or {"queue": "index"})
    except Exception:
        # Don't break app flow on metrics errors
        pass


def record_index_outcome(ok: bool) -> None:
    _init_metrics()
    if _index_counter is None:
        return
    try:
        _index_counter.add(1, {"outcome": "indexed" if ok else "failed"})
    except Exception:
        pass
