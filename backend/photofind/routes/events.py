import logging
from typing import Any, Dict

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from opentelemetry import trace

from photofind.pipeline import get_indexing_pipeline
from photofind.routes.cors import INDEX_CORS_HEADERS, preflight
from photofind.services.config import IndexingConfig
from photofind.worker import enqueue_event_batch

router = APIRouter(prefix="/events", tags=["events"])
logger = logging.getLogger("photofind.routes.events")
tracer = trace.get_tracer(__name__)


@router.options("/s3")
def events_preflight():
    return preflight(INDEX_CORS_HEADERS)


@router.post("/s3")
def receive_s3_events(event: Dict[str, Any] = Body(...)):
    """
    Object-created notifications from S3 (or MinIO webhooks, same record shape).
    Individual records that fail are logged and skipped; only a failure of the
    handler itself turns into a 500.
    """
    with tracer.start_as_current_span("events.s3"):
        try:
            records = event.get("Records") or []
            if IndexingConfig().mode == "queue":
                job_id = enqueue_event_batch(records)
                return JSONResponse(
                    {"message": "Queued records for indexing", "job_id": job_id},
                    headers=INDEX_CORS_HEADERS,
                )

            report = get_indexing_pipeline().run(records)
            return JSONResponse(
                {"message": "Indexed all records", **report.summary()},
                headers=INDEX_CORS_HEADERS,
            )
        except Exception:
            logger.exception("Handler level error while indexing")
            return JSONResponse(
                {"error": "Internal error while indexing"},
                status_code=500,
                headers=INDEX_CORS_HEADERS,
            )
