# photosearch/worker.py
import logging
from typing import Dict, Any

from redis import Redis
from rq import Queue, Worker
from rq.exceptions import StopRequested

from opentelemetry import trace, propagate
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from photosearch.container import get_ingestion
from photosearch.observability import record_queue_depth
from photosearch.services.config import IngestConfig

logger = logging.getLogger("photosearch.worker")

# Ensure we use W3C tracecontext
set_global_textmap(TraceContextTextMapPropagator())
tracer = trace.get_tracer("photosearch.worker")


def process_ingest_event(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Background job: run one S3 notification batch through the ingestion
    pipeline. Per-object failures are already isolated and logged there.
    """
    # Rehydrate parent span context (so worker spans attach to the API trace)
    ctx = propagate.extract(payload.get("otel", {}))

    with tracer.start_as_current_span("process_ingest_event", context=ctx) as span:
        report = get_ingestion().handle_event(payload.get("event") or {})
        span.set_attribute("ingest.indexed", len(report.indexed))
        span.set_attribute("ingest.failed", len(report.failed))
        logger.info("Ingested batch", extra={"indexed": len(report.indexed), "failed": len(report.failed)})
        return {"ok": True, "indexed": report.indexed, "failed": report.failed}


def _queue(cfg: IngestConfig) -> Queue:
    return Queue(cfg.queue_name, connection=Redis.from_url(cfg.redis_url))


def enqueue_ingest_event(event: Dict[str, Any], cfg: IngestConfig | None = None) -> str:
    """
    Inject current trace context and enqueue for the worker.
    This preserves parent/child relationships in traces across API → worker.
    """
    cfg = cfg or IngestConfig()
    carrier: Dict[str, str] = {}
    propagate.inject(carrier)

    q = _queue(cfg)

    # Best-effort metric about queue depth
    try:
        record_queue_depth(q.count)
    except Exception:
        pass

    job = q.enqueue(process_ingest_event, {"event": event, "otel": carrier})
    return job.get_id()


def run_worker():
    cfg = IngestConfig()
    w = Worker([cfg.queue_name], connection=Redis.from_url(cfg.redis_url))
    try:
        w.work(with_scheduler=False)
    except StopRequested:
        logger.info("RQ worker stopping gracefully (StopRequested)")
    finally:
        # best-effort OTel flush on shutdown
        try:
            tp = trace.get_tracer_provider()
            if hasattr(tp, "shutdown"):
                tp.shutdown()
        except Exception:
            pass


if __name__ == "__main__":
    run_worker()
