from .config import AwsConfig, BlobConfig, IntentConfig, SearchConfig, VisionConfig
from .search_base import Blob, Intent, Search, Vision
from .search_elastic import ElasticSearchService
from .blob_s3 import S3Blob
from .vision_rekognition import RekognitionVision
from .intent_lex import LexIntent

_search_singleton: Search | None = None
_blob_singleton: Blob | None = None
_vision_singleton: Vision | None = None
_intent_singleton: Intent | None = None


def get_search() -> Search:
    # Raises ConfigError until ELASTIC_SEARCH_HOST / _USER / _PASSWORD are set
    global _search_singleton
    if _search_singleton is None:
        _search_singleton = ElasticSearchService(SearchConfig())
    return _search_singleton


def get_blob() -> Blob:
    global _blob_singleton
    if _blob_singleton is None:
        _blob_singleton = S3Blob(BlobConfig(), AwsConfig())
    return _blob_singleton


def get_vision() -> Vision:
    global _vision_singleton
    if _vision_singleton is None:
        _vision_singleton = RekognitionVision(VisionConfig(), AwsConfig())
    return _vision_singleton


def get_intent() -> Intent:
    global _intent_singleton
    if _intent_singleton is None:
        _intent_singleton = LexIntent(IntentConfig(), AwsConfig())
    return _intent_singleton
