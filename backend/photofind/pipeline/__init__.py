from photofind.services import get_blob, get_intent, get_search, get_vision
from photofind.services.config import IndexingConfig

from .indexing import IndexingPipeline
from .query import QueryInterpreter
from .retrieval import RetrievalPipeline


def get_indexing_pipeline() -> IndexingPipeline:
    return IndexingPipeline(
        vision=get_vision(),
        blob=get_blob(),
        search=get_search(),
        max_workers=IndexingConfig().max_workers,
    )


def get_query_interpreter() -> QueryInterpreter:
    return QueryInterpreter(intent=get_intent())


def get_retrieval_pipeline() -> RetrievalPipeline:
    return RetrievalPipeline(search=get_search(), public_url=get_blob().public_url)
