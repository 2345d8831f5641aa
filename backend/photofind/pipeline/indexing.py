"""Indexing pipeline: object-created notifications in, one search document out per photo."""
import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional

from opentelemetry import trace

from photofind.models import BatchReport, ItemResult, LabelSet, PhotoEvent, SearchDocument
from photofind.observability import record_index_outcome
from photofind.pipeline.documents import build_document, decode_object_key
from photofind.pipeline.labels import normalize, split_custom_labels
from photofind.services.search_base import Blob, Search, Vision

logger = logging.getLogger("photofind.indexing")
tracer = trace.get_tracer("photofind.indexing")


class IndexingPipeline:
    def __init__(self, vision: Vision, blob: Blob, search: Search, max_workers: int = 1):
        self.vision = vision
        self.blob = blob
        self.search = search
        self.max_workers = max(1, max_workers)

    def fetch_labels(self, bucket: str, key: str) -> LabelSet:
        """Fetch automated and custom labels concurrently and merge them."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            automated = pool.submit(self.vision.detect_labels, bucket, key)
            custom = pool.submit(self.blob.custom_labels, bucket, key)
            rek_labels = automated.result() or []
            custom_labels = split_custom_labels(custom.result())

        logger.info("Labels for %s/%s: automated=%s custom=%s", bucket, key, rek_labels, custom_labels)
        return normalize(rek_labels, custom_labels)

    def index_event(self, event: PhotoEvent) -> SearchDocument:
        event = dataclasses.replace(event, object_key=decode_object_key(event.object_key))
        with tracer.start_as_current_span("index_event") as span:
            span.set_attribute("photo.bucket", event.bucket or "")
            span.set_attribute("photo.key", event.object_key or "")

            labels = self.fetch_labels(event.bucket, event.object_key)
            doc = build_document(event, labels)
            span.set_attribute("photo.label_count", len(doc.labels))

            self.search.index_photo(doc.to_dict())
            logger.info("Indexed photo bucket=%s key=%s labels=%s", doc.bucket, doc.object_key, list(doc.labels))
            return doc

    def _process_record(self, record: Dict[str, Any]) -> ItemResult:
        bucket: Optional[str] = None
        key: Optional[str] = None
        raw_key: Optional[str] = None
        try:
            event = PhotoEvent.from_record(record)
            bucket, raw_key = event.bucket, event.object_key
            key = decode_object_key(raw_key)
            logger.info("Processing %s bucket=%s key=%s created=%s", event.event_name, bucket, key, event.event_time)
            self.index_event(event)
            result = ItemResult(bucket=bucket, object_key=key, raw_key=raw_key, ok=True)
        except Exception as e:
            logger.exception("Error processing record bucket=%s key=%s raw_key=%s", bucket, key, raw_key)
            result = ItemResult(bucket=bucket, object_key=key, raw_key=raw_key, ok=False, error=repr(e))
        record_index_outcome(result.ok)
        return result

    def run(self, records: Iterable[Dict[str, Any]]) -> BatchReport:
        """Index every record; a failing record is reported, never raised."""
        records = list(records)
        with tracer.start_as_current_span("index_batch") as span:
            span.set_attribute("batch.size", len(records))
            if self.max_workers == 1:
                items: List[ItemResult] = [self._process_record(r) for r in records]
            else:
                with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                    items = list(pool.map(self._process_record, records))

            report = BatchReport(items=items)
            span.set_attribute("batch.indexed", report.indexed)
            span.set_attribute("batch.failed", report.failed)
            logger.info("Batch done: %d indexed, %d failed", report.indexed, report.failed)
            return report
