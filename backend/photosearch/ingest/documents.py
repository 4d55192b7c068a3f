from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field, field_validator

from photosearch.services.search_base import Search


def document_id(bucket: str, object_key: str) -> str:
    return f"{bucket}/{object_key}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PhotoDocument(BaseModel):
    objectKey: str
    bucket: str
    # Stored sorted so the same label set always serializes the same way
    labels: List[str] = Field(default_factory=list)
    createdTimestamp: str = Field(default_factory=_now_iso, description="Time of indexing")

    @field_validator("labels", mode="before")
    @classmethod
    def _dedupe_labels(cls, v: Iterable[str]) -> List[str]:
        return sorted({str(s).strip().lower() for s in v if s and str(s).strip()})

    @property
    def id(self) -> str:
        return document_id(self.bucket, self.objectKey)


def build_document(bucket: str, object_key: str, labels: Iterable[str]) -> PhotoDocument:
    return PhotoDocument(objectKey=object_key, bucket=bucket, labels=list(labels))


def upsert(search: Search, doc: PhotoDocument, index: str) -> Dict[str, Any]:
    """Write or overwrite the document at its identity key; engine errors propagate."""
    return search.upsert(index, doc.id, doc.model_dump())
