# photosearch/routes/ingest.py
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from redis.exceptions import RedisError

from photosearch.container import get_ingestion
from photosearch.ingest.pipeline import INGEST_ACK, IngestionOrchestrator
from photosearch.services.config import IngestConfig
from photosearch.worker import enqueue_ingest_event

router = APIRouter(prefix="/ingest", tags=["ingest"])
logger = logging.getLogger("photosearch.routes.ingest")


def get_ingest_config() -> IngestConfig:
    return IngestConfig()


@router.post("/events")
def ingest_events(
    event: Dict[str, Any] = Body(..., description="S3 notification payload with a Records list"),
    cfg: IngestConfig = Depends(get_ingest_config),
    orchestrator: IngestionOrchestrator = Depends(get_ingestion),
):
    """
    Index the photos named in an S3 upload notification. The acknowledgment
    is the same whether or not individual objects failed.
    """
    logger.debug("Received S3 event: %s", event)
    job_id: Optional[str] = None
    if cfg.mode == "queue":
        try:
            job_id = enqueue_ingest_event(event, cfg)
        except RedisError:
            # Queue unavailable: index in-request rather than drop the batch
            logger.exception("Could not enqueue ingestion batch; processing inline")

    if job_id is None:
        report = orchestrator.handle_event(event)
        logger.info("Ingestion batch done: %d indexed, %d failed", len(report.indexed), len(report.failed))

    return {"statusCode": 200, "message": INGEST_ACK, "job_id": job_id}
