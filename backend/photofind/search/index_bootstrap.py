# photofind/search/index_bootstrap.py
import logging

from elasticsearch import Elasticsearch

log = logging.getLogger("photofind.search")

MAPPING = {
    "mappings": {
        "properties": {
            "objectKey":        {"type": "keyword"},
            "bucket":           {"type": "keyword"},
            "createdTimestamp": {"type": "date"},
            # text so `match` goes through the analyzer; keyword for exact filters
            "labels": {
                "type": "text",
                "fields": {"keyword": {"type": "keyword"}},
            },
        }
    }
}


def ensure_index(es: Elasticsearch, index: str) -> None:
    if es.indices.exists(index=index):
        return
    es.indices.create(index=index, **MAPPING)
    log.info("Created index %s", index)
