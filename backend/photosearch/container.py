"""Wires the orchestrators to the configured collaborators.

Routes, the Lambda handlers and the rq worker all build their orchestrators
here; tests construct them directly with fakes instead.
"""
from functools import lru_cache

from photosearch.ingest.pipeline import IngestionOrchestrator
from photosearch.search.keywords import KeywordExtractor
from photosearch.search.service import SearchOrchestrator
from photosearch.services import get_blob, get_labeler, get_nlu, get_search
from photosearch.services.config import IngestConfig, SearchConfig


@lru_cache(maxsize=1)
def get_ingestion() -> IngestionOrchestrator:
    sc = SearchConfig()
    return IngestionOrchestrator(
        search=get_search(),
        blob=get_blob(),
        labeler=get_labeler(),
        index=sc.photos_index,
        workers=IngestConfig().workers,
    )


@lru_cache(maxsize=1)
def get_search_orchestrator() -> SearchOrchestrator:
    sc = SearchConfig()
    return SearchOrchestrator(
        search=get_search(),
        extractor=KeywordExtractor(get_nlu()),
        index=sc.photos_index,
        size=sc.result_size,
    )
