import logging
from typing import Any, Dict, Mapping, Optional

from elasticsearch import BadRequestError, Elasticsearch

from .config import SearchConfig
from .search_base import IndexAlreadyExists

log = logging.getLogger("photosearch.services.search")

_ALREADY_EXISTS = "resource_already_exists_exception"


def _error_type(e: BadRequestError) -> Optional[str]:
    body = getattr(e, "body", None)
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("type")
    return getattr(e, "error", None)


class ElasticSearchService:
    def __init__(self, cfg: SearchConfig, client: Elasticsearch | None = None):
        self.cfg = cfg
        if client is None:
            auth: Dict[str, Any] = {}
            if cfg.api_key:
                auth["api_key"] = cfg.api_key
            elif cfg.username:
                auth["basic_auth"] = (cfg.username, cfg.password)
            client = Elasticsearch(hosts=[cfg.host], request_timeout=30, **auth)
        self.es = client
        log.info("Initialized ElasticSearchService for %s", cfg.host)

    def index_exists(self, index: str) -> bool:
        return bool(self.es.indices.exists(index=index))

    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None:
        try:
            self.es.indices.create(index=index, mappings=dict(mappings))
        except BadRequestError as e:
            # Another invocation created it between our exists check and create
            if _error_type(e) == _ALREADY_EXISTS:
                raise IndexAlreadyExists(index) from e
            raise

    def upsert(self, index: str, doc_id: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        # refresh=True: the write is only done once the doc is searchable
        res = self.es.index(index=index, id=doc_id, document=doc, refresh=True)
        return res.body

    def search(self, index: str, query: Dict[str, Any], size: int) -> Dict[str, Any]:
        res = self.es.search(index=index, query=query, size=size)
        return res.body
