from typing import Dict

import boto3

from .config import BlobConfig


class S3Blob:
    def __init__(self, cfg: BlobConfig, client=None):
        self.cfg = cfg
        self.s3 = client or boto3.client(
            "s3",
            endpoint_url=cfg.endpoint or None,
            region_name=cfg.region,
            aws_access_key_id=cfg.access_key or None,
            aws_secret_access_key=cfg.secret_key or None,
        )

    def head_metadata(self, bucket: str, key: str) -> Dict[str, str]:
        # User metadata comes back with the x-amz-meta- prefix stripped and keys lower-cased
        head = self.s3.head_object(Bucket=bucket, Key=key)
        return dict(head.get("Metadata") or {})
