import logging
import os
from typing import Optional, Mapping

try:
    # Logging correlation
    from opentelemetry.instrumentation.logging import LoggingInstrumentor
except Exception:  # pragma: no cover
    LoggingInstrumentor = None  # type: ignore

try:
    from opentelemetry import metrics
except Exception:  # pragma: no cover
    metrics = None  # type: ignore

_metrics_initialized = False
_queue_hist = None
_ingest_counter = None
_keyword_counter = None

def setup_logging(level: Optional[str] = None) -> None:
    """Configure Python logging and (optionally) OpenTelemetry log correlation.

    This is safe to call multiple times.
    """
    lvl = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    try:
        logging.getLogger().setLevel(lvl)
    except Exception:
        pass

    fmt = "%(asctime)s %(levelname)s - %(name)s: %(message)s"
    if LoggingInstrumentor is not None:
        try:
            LoggingInstrumentor().instrument(set_logging_format=True)
            fmt = (
                "%(asctime)s %(levelname)s "
                "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s "
                "resource.service.name=%(otelServiceName)s trace_sampled=%(otelTraceSampled)s] "
                "- %(name)s: %(message)s"
            )
        except Exception:
            # Best-effort; don't crash the app if OTEL libs are missing at build time
            pass

    logging.basicConfig(level=lvl, format=fmt)

def _init_metrics() -> None:
    global _metrics_initialized, _queue_hist, _ingest_counter, _keyword_counter
    if _metrics_initialized or metrics is None:
        _metrics_initialized = True
        return
    try:
        meter = metrics.get_meter("photosearch.observability")
        _queue_hist = meter.create_histogram(
            name="photosearch.queue.depth",
            description="Approximate depth of the RQ ingest queue",
            unit="{jobs}",
        )
        _ingest_counter = meter.create_counter(
            name="photosearch.ingest.objects",
            description="Photos processed by ingestion, by outcome",
            unit="{objects}",
        )
        _keyword_counter = meter.create_counter(
            name="photosearch.keywords.path",
            description="Keyword extractions, by path taken (nlu or fallback)",
            unit="{queries}",
        )
    except Exception:
        _queue_hist = _ingest_counter = _keyword_counter = None
    _metrics_initialized = True

def record_queue_depth(depth: int, attributes: Optional[Mapping[str, str]] = None) -> None:
    """Record a queue depth sample (exported via OTEL metrics)."""
    if not _metrics_initialized:
        _init_metrics()
    if _queue_hist is None:
        return
    try:
        _queue_hist.record(int(depth), attributes or {"queue": "ingest"})
    except Exception:
        # Don't break app flow on metrics errors
        pass

def record_ingest_outcome(outcome: str) -> None:
    if not _metrics_initialized:
        _init_metrics()
    if _ingest_counter is None:
        return
    try:
        _ingest_counter.add(1, {"outcome": outcome})
    except Exception:
        pass

def record_keyword_path(path: str) -> None:
    if not _metrics_initialized:
        _init_metrics()
    if _keyword_counter is None:
        return
    try:
        _keyword_counter.add(1, {"path": path})
    except Exception:
        pass
