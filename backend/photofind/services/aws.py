from typing import Any, Dict, Optional

import boto3
from botocore.client import Config

from .config import AwsConfig


def client(
    service: str,
    cfg: AwsConfig,
    endpoint_url: Optional[str] = None,
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    s3: Optional[Dict[str, Any]] = None,
):
    """boto3 client with bounded timeouts; a timeout surfaces as that service's failure."""
    return boto3.client(
        service,
        endpoint_url=endpoint_url or None,
        region_name=cfg.region,
        aws_access_key_id=access_key or None,
        aws_secret_access_key=secret_key or None,
        config=Config(
            signature_version="s3v4" if service == "s3" else None,
            s3=s3,
            connect_timeout=cfg.connect_timeout,
            read_timeout=cfg.read_timeout,
            retries={"max_attempts": cfg.max_attempts},
        ),
    )
