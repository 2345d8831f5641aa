# backend/photofind/routes/search.py
import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from opentelemetry import trace

from photofind.models import SearchResponse
from photofind.pipeline import get_query_interpreter, get_retrieval_pipeline
from photofind.routes.cors import SEARCH_CORS_HEADERS, preflight

router = APIRouter(tags=["search"])
logger = logging.getLogger("photofind.routes.search")
tracer = trace.get_tracer(__name__)


@router.options("/search")
def search_preflight():
    return preflight(SEARCH_CORS_HEADERS)


@router.get("/search")
def search_photos(q: Optional[str] = Query(None, description="free text, e.g. 'dogs and cats'")):
    """
    Interpret the query (intent slot, falling back to the literal text) and
    return every photo whose labels match any keyword.
    """
    with tracer.start_as_current_span("photos.search") as span:
        if not (q or "").strip():
            return JSONResponse(SearchResponse().model_dump(), headers=SEARCH_CORS_HEADERS)
        try:
            keywords = get_query_interpreter().interpret(q)
            span.set_attribute("search.keywords", keywords)
            results = get_retrieval_pipeline().run(keywords)
        except Exception as e:
            logger.exception("Search failed for query %r", q)
            return JSONResponse({"error": str(e)}, status_code=500, headers=SEARCH_CORS_HEADERS)
        body = SearchResponse(results=results).model_dump(exclude_none=True)
        return JSONResponse(body, headers=SEARCH_CORS_HEADERS)
