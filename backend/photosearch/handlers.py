# photosearch/handlers.py
"""Lambda-style entrypoints taking the raw event dicts.

ingest_handler is wired to S3 ObjectCreated notifications, search_handler to
an API gateway GET with a ``q`` query parameter.
"""
import json
import logging
from typing import Any, Dict

from photosearch.container import get_ingestion, get_search_orchestrator
from photosearch.observability import setup_logging
from photosearch.ingest.pipeline import INGEST_ACK
from photosearch.search.service import SearchExecutionError

setup_logging()
logger = logging.getLogger("photosearch.handlers")

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


def _search_response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json", **CORS_HEADERS},
        "body": json.dumps(body),
    }


def query_from_event(event: Dict[str, Any]) -> str:
    params = event.get("queryStringParameters") or {}
    return params.get("q") or event.get("q") or ""


def ingest_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    logger.debug("Received S3 event: %s", json.dumps(event))
    report = get_ingestion().handle_event(event)
    logger.info("Ingestion batch done: %d indexed, %d failed", len(report.indexed), len(report.failed))
    # Same acknowledgment whatever happened to individual objects
    return {"statusCode": 200, "body": INGEST_ACK}


def search_handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    logger.debug("Incoming event: %s", json.dumps(event))
    try:
        results = get_search_orchestrator().search(query_from_event(event))
    except SearchExecutionError:
        return _search_response(500, {"error": "Search failed"})
    return _search_response(200, {"results": results})
