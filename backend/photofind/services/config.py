from dataclasses import dataclass
import os


class ConfigError(RuntimeError):
    """Required configuration is missing."""


def _float_env(name: str, default: float) -> float:
    return float(os.getenv(name, str(default)))


@dataclass(frozen=True)
class SearchConfig:
    # Elasticsearch cluster, e.g. https://photos.es.example.com:9243
    # elasticsearch-py refuses servers that are not Elasticsearch (OpenSearch included)
    endpoint: str = os.getenv("ELASTIC_SEARCH_HOST", "")
    index: str = os.getenv("ELASTIC_SEARCH_INDEX", "photos")
    username: str = os.getenv("ELASTIC_SEARCH_USER", "")
    password: str = os.getenv("ELASTIC_SEARCH_PASSWORD", "")
    timeout: float = _float_env("SEARCH_TIMEOUT", 10.0)

    def require(self) -> None:
        if not self.endpoint:
            raise ConfigError("ELASTIC_SEARCH_HOST env var is not set")
        if not self.username or not self.password:
            raise ConfigError("ELASTIC_SEARCH_USER / ELASTIC_SEARCH_PASSWORD env vars are not set")


@dataclass(frozen=True)
class AwsConfig:
    region: str = os.getenv("AWS_REGION", "us-east-1")
    # Bounded timeouts for every boto3 call (S3, Rekognition, Lex)
    connect_timeout: float = _float_env("AWS_CONNECT_TIMEOUT", 3.0)
    read_timeout: float = _float_env("AWS_CALL_TIMEOUT", 10.0)
    max_attempts: int = int(os.getenv("AWS_MAX_ATTEMPTS", "2"))


@dataclass(frozen=True)
class BlobConfig:
    # Leave empty for AWS S3; set for MinIO and other S3-compatible stores
    endpoint: str = os.getenv("S3_ENDPOINT", "")
    bucket: str = os.getenv("PHOTOS_BUCKET", "photos")
    url_template: str = os.getenv("PHOTO_URL_TEMPLATE", "https://{bucket}.s3.amazonaws.com/{key}")
    # S3 lowercases user metadata keys, so lookups are case-insensitive
    custom_labels_key: str = os.getenv("CUSTOM_LABELS_METADATA_KEY", "customLabels")
    access_key: str = os.getenv("S3_ACCESS_KEY", "")
    secret_key: str = os.getenv("S3_SECRET_KEY", "")


@dataclass(frozen=True)
class VisionConfig:
    max_labels: int = int(os.getenv("VISION_MAX_LABELS", "50"))
    min_confidence: float = _float_env("VISION_MIN_CONFIDENCE", 70.0)


@dataclass(frozen=True)
class IntentConfig:
    bot_id: str = os.getenv("LEX_BOT_ID", "")
    bot_alias_id: str = os.getenv("LEX_BOT_ALIAS_ID", "")
    locale_id: str = os.getenv("LEX_LOCALE_ID", "en_US")
    session_id: str = os.getenv("LEX_SESSION_ID", "user-session")
    slot_name: str = os.getenv("LEX_SLOT_NAME", "SearchQuery")


@dataclass(frozen=True)
class IndexingConfig:
    # "inline" runs the pipeline in the request, "queue" hands it to the RQ worker
    mode: str = os.getenv("INDEX_MODE", "inline")
    max_workers: int = int(os.getenv("INDEX_MAX_WORKERS", "1"))
