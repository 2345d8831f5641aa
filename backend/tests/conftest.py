import threading
from typing import Any, Dict, List, Optional

import pytest


def s3_record(bucket: str = "photos", key: str = "img.jpg", event_time: str = "2025-11-20T10:00:00.000Z") -> Dict[str, Any]:
    return {
        "eventName": "ObjectCreated:Put",
        "eventTime": event_time,
        "s3": {"bucket": {"name": bucket}, "object": {"key": key}},
    }


class FakeVision:
    def __init__(self, labels: Optional[Dict[str, List[str]]] = None, fail_on: tuple = ()):
        self.labels = labels or {}
        self.fail_on = set(fail_on)
        self.calls: List[tuple] = []

    def detect_labels(self, bucket: str, key: str) -> List[str]:
        self.calls.append((bucket, key))
        if key in self.fail_on:
            raise RuntimeError(f"rekognition unavailable for {key}")
        return self.labels.get(key, [])


class FakeBlob:
    def __init__(self, metadata: Optional[Dict[str, str]] = None):
        self.metadata = metadata or {}
        self.calls: List[tuple] = []

    def custom_labels(self, bucket: str, key: str) -> Optional[str]:
        self.calls.append((bucket, key))
        return self.metadata.get(key)

    def public_url(self, bucket: str, key: str) -> str:
        return f"https://{bucket}.s3.amazonaws.com/{key}"


class FakeSearch:
    def __init__(self, hits: Optional[List[Dict[str, Any]]] = None, fail_on: tuple = ()):
        self.hits = hits or []
        self.fail_on = set(fail_on)
        self.indexed: List[Dict[str, Any]] = []
        self.queries: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def index_photo(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        if doc["objectKey"] in self.fail_on:
            raise RuntimeError("Failed to index document: status=503")
        with self._lock:
            self.indexed.append(doc)
        return {"result": "created"}

    def search_photos(self, body: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.queries.append(body)
        return self.hits

    def ensure_index(self) -> None:
        pass


@pytest.fixture
def fake_vision():
    return FakeVision()


@pytest.fixture
def fake_blob():
    return FakeBlob()


@pytest.fixture
def fake_search():
    return FakeSearch()
