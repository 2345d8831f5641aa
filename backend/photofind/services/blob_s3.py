import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from . import aws
from .config import AwsConfig, BlobConfig

logger = logging.getLogger("photofind.blob")


class S3Blob:
    def __init__(self, cfg: BlobConfig, aws_cfg: AwsConfig, s3=None):
        self.cfg = cfg
        # path-style addressing keeps MinIO happy when an endpoint is configured
        self.s3 = s3 or aws.client(
            "s3",
            aws_cfg,
            endpoint_url=cfg.endpoint,
            access_key=cfg.access_key,
            secret_key=cfg.secret_key,
            s3={"addressing_style": "path"} if cfg.endpoint else None,
        )

    def custom_labels(self, bucket: str, key: str) -> Optional[str]:
        """Raw custom-labels metadata value for an object, or None."""
        head = self.s3.head_object(Bucket=bucket, Key=key)
        wanted = self.cfg.custom_labels_key.lower()
        for name, value in (head.get("Metadata") or {}).items():
            if name.lower() == wanted:
                return value
        return None

    def put_photo(self, key: str, data: bytes, content_type: str, custom_labels: str) -> Dict[str, Any]:
        metadata = {self.cfg.custom_labels_key: custom_labels} if custom_labels else {}
        self.s3.put_object(
            Bucket=self.cfg.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or "application/octet-stream",
            Metadata=metadata,
        )
        logger.info("Stored photo bucket=%s key=%s size=%d", self.cfg.bucket, key, len(data))
        return {"bucket": self.cfg.bucket, "key": key}

    def public_url(self, bucket: str, key: str) -> str:
        return self.cfg.url_template.format(bucket=bucket, key=quote(key, safe=""))
