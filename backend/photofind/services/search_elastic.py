import logging
from typing import Any, Dict, List

from elasticsearch import Elasticsearch, UnsupportedProductError

from photofind.search.index_bootstrap import ensure_index

from .config import ConfigError, SearchConfig

logger = logging.getLogger("photofind.search")


class IndexWriteError(RuntimeError):
    """The search engine answered a document write with status >= 300."""


def _body(res: Any) -> Dict[str, Any]:
    # elasticsearch-py wraps responses in ObjectApiResponse; plain dicts pass through
    return getattr(res, "body", res)


def _status(res: Any) -> int:
    meta = getattr(res, "meta", None)
    return getattr(meta, "status", 200)


class ElasticSearchService:
    def __init__(self, cfg: SearchConfig, client: Elasticsearch = None):
        cfg.require()
        self.cfg = cfg
        self.es = client or Elasticsearch(
            hosts=[cfg.endpoint],
            basic_auth=(cfg.username, cfg.password),
            request_timeout=cfg.timeout,
        )
        logger.info("Initialized ElasticSearchService for %s (index=%s)", cfg.endpoint, cfg.index)

    def index_photo(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        # POST /<index>/_doc: one write per event, the engine assigns the _id
        try:
            res = self.es.index(index=self.cfg.index, document=doc)
        except UnsupportedProductError as e:
            raise self._not_elasticsearch() from e
        status = _status(res)
        body = _body(res)
        logger.debug("Index response status=%s body=%s", status, body)
        if status >= 300:
            raise IndexWriteError(f"Failed to index document: status={status} body={body}")
        return body

    def search_photos(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            res = _body(self.es.search(index=self.cfg.index, **body))
        except UnsupportedProductError as e:
            raise self._not_elasticsearch() from e
        return res.get("hits", {}).get("hits", [])

    def _not_elasticsearch(self) -> ConfigError:
        logger.error("Search engine at %s did not identify as Elasticsearch", self.cfg.endpoint)
        return ConfigError(
            f"{self.cfg.endpoint} is not an Elasticsearch cluster; ELASTIC_SEARCH_HOST must point at one"
        )

    def ensure_index(self) -> None:
        ensure_index(self.es, self.cfg.index)
