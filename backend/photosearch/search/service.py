# photosearch/search/service.py
import logging
from typing import Any, Dict, List, Optional

from opentelemetry import trace

from photosearch.search.index_bootstrap import INDEX
from photosearch.search.keywords import KeywordExtractor
from photosearch.search.query import MAX_RESULTS, build_label_query
from photosearch.services.search_base import Search

log = logging.getLogger("photosearch.search")
tracer = trace.get_tracer("photosearch.search")


class SearchExecutionError(RuntimeError):
    """The engine rejected or failed the query. Distinct from 'no matches'."""


def unwrap_hits(res: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [h.get("_source", {}) for h in (res.get("hits") or {}).get("hits") or []]


class SearchOrchestrator:
    def __init__(
        self,
        search: Search,
        extractor: KeywordExtractor,
        index: str = INDEX,
        size: int = MAX_RESULTS,
    ):
        self.search_backend = search
        self.extractor = extractor
        self.index = index
        self.size = size

    def search(self, query: Optional[str]) -> List[Dict[str, Any]]:
        with tracer.start_as_current_span("photos.search") as span:
            if not query:
                return []

            keywords = self.extractor.extract(query)
            span.set_attribute("search.keyword_count", len(keywords))
            log.info("Extracted keywords: %s", sorted(keywords))
            if not keywords:
                return []

            try:
                res = self.search_backend.search(self.index, build_label_query(keywords), self.size)
            except Exception as e:
                log.exception("Search query failed")
                span.record_exception(e)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(e)))
                raise SearchExecutionError(str(e)) from e

            results = unwrap_hits(res)
            span.set_attribute("search.hits", len(results))
            return results
