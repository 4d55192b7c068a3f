# photosearch/routes/search.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from typing import Optional

from photosearch.container import get_search_orchestrator
from photosearch.search.service import SearchExecutionError, SearchOrchestrator

router = APIRouter(tags=["search"])


@router.get("/search")
def search_photos(
    q: Optional[str] = Query(None, description="free text, e.g. 'cats and dogs'"),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
):
    """
    Photos whose labels match any keyword extracted from ``q``.
    An empty query or one with no usable keywords returns no results.
    """
    try:
        results = orchestrator.search(q)
    except SearchExecutionError:
        return JSONResponse(status_code=500, content={"error": "Search failed"})
    return {"results": results}
