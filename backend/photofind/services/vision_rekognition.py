from typing import List

from . import aws
from .config import AwsConfig, VisionConfig


class RekognitionVision:
    def __init__(self, cfg: VisionConfig, aws_cfg: AwsConfig, rekognition=None):
        self.cfg = cfg
        self.rekognition = rekognition or aws.client("rekognition", aws_cfg)

    def detect_labels(self, bucket: str, key: str) -> List[str]:
        resp = self.rekognition.detect_labels(
            Image={"S3Object": {"Bucket": bucket, "Name": key}},
            MaxLabels=self.cfg.max_labels,
            MinConfidence=self.cfg.min_confidence,
        )
        # Confidence is already filtered server-side; only names are kept
        return [label["Name"] for label in resp.get("Labels") or []]
