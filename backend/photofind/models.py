from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

# Sorted, lowercase, unique labels
LabelSet = Tuple[str, ...]


@dataclass(frozen=True)
class PhotoEvent:
    """One "object created" notification from object storage.

    ``object_key`` is kept exactly as delivered (percent-encoded, ``+`` for
    spaces); decoding happens in the indexing pipeline.
    """

    bucket: str
    object_key: str
    event_time: str
    event_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PhotoEvent":
        # S3 and MinIO share the same record shape
        s3 = record["s3"]
        return cls(
            bucket=s3["bucket"]["name"],
            object_key=s3["object"]["key"],
            event_time=record.get("eventTime"),
            event_name=record.get("eventName"),
        )


@dataclass(frozen=True)
class SearchDocument:
    object_key: str
    bucket: str
    created_timestamp: str
    labels: LabelSet = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "objectKey": self.object_key,
            "bucket": self.bucket,
            "createdTimestamp": self.created_timestamp,
            "labels": list(self.labels),
        }


class SearchResult(BaseModel):
    url: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    objectKey: Optional[str] = None
    bucket: Optional[str] = None
    createdTimestamp: Optional[str] = None


class SearchResponse(BaseModel):
    results: List[SearchResult] = Field(default_factory=list)


@dataclass(frozen=True)
class ItemResult:
    # object_key is the decoded key the collaborators saw; raw_key is as delivered
    bucket: Optional[str]
    object_key: Optional[str]
    ok: bool
    error: Optional[str] = None
    raw_key: Optional[str] = None


@dataclass
class BatchReport:
    items: List[ItemResult] = field(default_factory=list)

    @property
    def indexed(self) -> int:
        return sum(1 for i in self.items if i.ok)

    @property
    def failed(self) -> int:
        return sum(1 for i in self.items if not i.ok)

    def summary(self) -> Dict[str, Any]:
        return {"indexed": self.indexed, "failed": self.failed}
