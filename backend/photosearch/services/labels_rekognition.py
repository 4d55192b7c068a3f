from typing import List, Tuple

import boto3

from .config import LabelConfig


class RekognitionLabeler:
    def __init__(self, cfg: LabelConfig, client=None):
        self.cfg = cfg
        self.rek = client or boto3.client("rekognition", region_name=cfg.region)

    def detect_labels(
        self,
        bucket: str,
        key: str,
        max_labels: int,
        min_confidence: float,
    ) -> List[Tuple[str, float]]:
        out = self.rek.detect_labels(
            Image={"S3Object": {"Bucket": bucket, "Name": key}},
            MaxLabels=max_labels,
            MinConfidence=min_confidence,
        )
        return [(l["Name"], float(l.get("Confidence", 0.0))) for l in out.get("Labels", [])]
