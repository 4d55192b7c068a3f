"""
Shared fixtures: in-memory stand-ins for the storage, detection, NLU and
search collaborators, so orchestrators can be exercised without AWS or a
search cluster.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from photosearch.ingest.pipeline import IngestionOrchestrator
from photosearch.search.keywords import KeywordExtractor
from photosearch.search.service import SearchOrchestrator
from photosearch.services.search_base import IndexAlreadyExists


class FakeSearch:
    """Keeps documents per index in dicts and evaluates bool/should label matches."""

    def __init__(self):
        self.indices: Dict[str, Dict[str, Any]] = {}
        self.docs: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.upsert_calls: List[Tuple[str, str]] = []
        self.search_calls: List[Dict[str, Any]] = []
        self.fail_upsert_for: set = set()
        self.fail_search = False

    def index_exists(self, index: str) -> bool:
        return index in self.indices

    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None:
        if index in self.indices:
            raise IndexAlreadyExists(index)
        self.indices[index] = dict(mappings)

    def upsert(self, index: str, doc_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        self.upsert_calls.append((index, doc_id))
        if doc_id in self.fail_upsert_for:
            raise ConnectionError("write rejected")
        existed = doc_id in self.docs.setdefault(index, {})
        self.docs[index][doc_id] = dict(doc)
        return {"_id": doc_id, "result": "updated" if existed else "created"}

    def search(self, index: str, query: Dict[str, Any], size: int) -> Dict[str, Any]:
        self.search_calls.append({"index": index, "query": query, "size": size})
        if self.fail_search:
            raise ConnectionError("cluster unavailable")
        terms = [c["match"]["labels"]["query"] for c in query["bool"]["should"]]
        hits = [
            {"_id": doc_id, "_source": doc}
            for doc_id, doc in self.docs.get(index, {}).items()
            if any(t in doc["labels"] for t in terms)
        ]
        return {"hits": {"total": {"value": len(hits)}, "hits": hits[:size]}}


class FakeBlob:
    def __init__(self, metadata: Optional[Dict[Tuple[str, str], Dict[str, str]]] = None):
        self.metadata = metadata or {}
        self.calls: List[Tuple[str, str]] = []

    def head_metadata(self, bucket: str, key: str) -> Dict[str, str]:
        self.calls.append((bucket, key))
        if (bucket, key) not in self.metadata:
            raise KeyError(f"NoSuchKey: {bucket}/{key}")
        return self.metadata[(bucket, key)]


class FakeLabeler:
    def __init__(self, labels: Optional[Dict[Tuple[str, str], List[str]]] = None):
        self.labels = labels or {}
        self.calls: List[Tuple[str, str, int, float]] = []

    def detect_labels(self, bucket, key, max_labels, min_confidence):
        self.calls.append((bucket, key, max_labels, min_confidence))
        found = self.labels.get((bucket, key), [])
        if isinstance(found, Exception):
            raise found
        return [(name, 99.0) for name in found]


class FakeNlu:
    def __init__(self, values: Optional[List[Optional[str]]] = None, error: Optional[Exception] = None):
        self.values = values or []
        self.error = error
        self.calls: List[str] = []

    def slot_values(self, text: str) -> List[Optional[str]]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return list(self.values)


@pytest.fixture
def search():
    return FakeSearch()


@pytest.fixture
def blob():
    return FakeBlob()


@pytest.fixture
def labeler():
    return FakeLabeler()


@pytest.fixture
def ingestion(search, blob, labeler):
    return IngestionOrchestrator(search=search, blob=blob, labeler=labeler)


@pytest.fixture
def searcher(search):
    return SearchOrchestrator(search=search, extractor=KeywordExtractor(None))


def s3_event(*pairs: Tuple[str, str]) -> Dict[str, Any]:
    return {
        "Records": [
            {"s3": {"bucket": {"name": bucket}, "object": {"key": key}}}
            for bucket, key in pairs
        ]
    }


@pytest.fixture
def make_event():
    return s3_event
