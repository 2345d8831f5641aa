import logging
from typing import Any, Callable, Dict, List, Sequence

from opentelemetry import trace

from photofind.models import SearchResult
from photofind.services.search_base import Search

logger = logging.getLogger("photofind.retrieval")
tracer = trace.get_tracer("photofind.retrieval")


def build_labels_query(keywords: Sequence[str]) -> Dict[str, Any]:
    # Any-of match on labels; the engine's analyzer takes care of casing
    return {
        "query": {
            "bool": {
                "should": [{"match": {"labels": k}} for k in keywords],
                "minimum_should_match": 1,
            }
        }
    }


def to_result(hit: Dict[str, Any], public_url: Callable[[str, str], str]) -> SearchResult:
    src = hit.get("_source") or {}
    bucket = src.get("bucket")
    key = src.get("objectKey")
    return SearchResult(
        url=public_url(bucket, key) if bucket and key else None,
        labels=src.get("labels") or [],
        objectKey=key,
        bucket=bucket,
        createdTimestamp=src.get("createdTimestamp"),
    )


class RetrievalPipeline:
    def __init__(self, search: Search, public_url: Callable[[str, str], str]):
        self.search = search
        self.public_url = public_url

    def run(self, keywords: Sequence[str]) -> List[SearchResult]:
        """Errors from the search engine propagate; a query fails as a whole."""
        if not keywords:
            return []
        with tracer.start_as_current_span("search_photos") as span:
            span.set_attribute("search.keyword_count", len(keywords))
            hits = self.search.search_photos(build_labels_query(keywords))
            span.set_attribute("search.hit_count", len(hits))
            logger.info("Search %s returned %d hits", list(keywords), len(hits))
            return [to_result(h, self.public_url) for h in hits]
