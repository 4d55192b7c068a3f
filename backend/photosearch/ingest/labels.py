from typing import AbstractSet, Iterable, Mapping, Set, Tuple

from photosearch.services.labels_base import Labeler

# Accepted spellings of the operator label metadata key, checked in order
CUSTOM_LABEL_KEYS: Tuple[str, ...] = ("customlabels", "custom-labels")

MAX_LABELS = 50
MIN_CONFIDENCE = 60


def _normalize(labels: Iterable[str]) -> Set[str]:
    return {s.strip().lower() for s in labels if s and s.strip()}


def custom_labels(metadata: Mapping[str, str]) -> Set[str]:
    """Operator labels from object metadata; missing metadata yields an empty set."""
    raw = ""
    for key in CUSTOM_LABEL_KEYS:
        if metadata.get(key):
            raw = metadata[key]
            break
    if not raw:
        return set()
    return _normalize(raw.split(","))


def detect_labels(
    labeler: Labeler,
    bucket: str,
    key: str,
    max_labels: int = MAX_LABELS,
    min_confidence: float = MIN_CONFIDENCE,
) -> Set[str]:
    # Errors from the detection service are left to the caller
    found = labeler.detect_labels(bucket, key, max_labels, min_confidence)
    return _normalize(name for name, _confidence in found)


def merge_labels(a: AbstractSet[str], b: AbstractSet[str]) -> Set[str]:
    return set(a) | set(b)
