# backend/photofind/worker.py
import os
import logging
from typing import Any, Dict, List

from redis import Redis
from rq import Queue, Worker
from rq.exceptions import StopRequested

from opentelemetry import trace, propagate
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from photofind.observability import record_queue_depth
from photofind.pipeline import get_indexing_pipeline

logger = logging.getLogger("photofind.worker")

QUEUE_NAME = os.getenv("RQ_QUEUE", "index")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

# Ensure we use W3C tracecontext
set_global_textmap(TraceContextTextMapPropagator())
tracer = trace.get_tracer("photofind.worker")


def process_event_batch(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Background job: run the indexing pipeline over the S3 records in the payload.
    Per-record failures end up in the report, not as a failed job.
    """
    # Rehydrate parent span context (so worker spans attach to the API trace)
    ctx = propagate.extract(payload.get("otel", {}))

    with tracer.start_as_current_span("process_event_batch", context=ctx) as span:
        records: List[Dict[str, Any]] = payload.get("Records") or []
        span.set_attribute("batch.size", len(records))
        report = get_indexing_pipeline().run(records)
        logger.info("Processed queued batch", extra={"indexed": report.indexed, "failed": report.failed})
        return {"ok": True, **report.summary()}


def enqueue_event_batch(records: List[Dict[str, Any]]) -> str:
    """
    Inject current trace context and enqueue for the worker.
    This preserves parent/child relationships in traces across API → worker.
    """
    carrier: Dict[str, str] = {}
    propagate.inject(carrier)

    job_payload = {"Records": list(records), "otel": carrier}

    redis_conn = Redis.from_url(REDIS_URL)
    q = Queue(QUEUE_NAME, connection=redis_conn)

    record_queue_depth(q.count)

    job = q.enqueue(process_event_batch, job_payload)
    return job.get_id()


def run_worker():
    redis_conn = Redis.from_url(REDIS_URL)
    w = Worker([QUEUE_NAME], connection=redis_conn)
    try:
        w.work(with_scheduler=False)
    except StopRequested:
        logger.info("RQ worker stopping gracefully (StopRequested)")
    finally:
        tp = trace.get_tracer_provider()
        if hasattr(tp, "shutdown"):
            tp.shutdown()


if __name__ == "__main__":
    from photofind.observability import setup_logging

    setup_logging()
    run_worker()
