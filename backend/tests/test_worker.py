"""
Tests for the rq background ingestion job
"""
from unittest.mock import MagicMock, patch

from photosearch import worker
from photosearch.services.config import IngestConfig


def test_process_ingest_event_runs_pipeline(ingestion, blob, search, make_event):
    blob.metadata[("b", "k.jpg")] = {"customlabels": "fox"}
    with patch.object(worker, "get_ingestion", return_value=ingestion):
        out = worker.process_ingest_event({"event": make_event(("b", "k.jpg")), "otel": {}})

    assert out == {"ok": True, "indexed": ["b/k.jpg"], "failed": []}
    assert "b/k.jpg" in search.docs["photos"]


def test_enqueue_carries_trace_context(make_event):
    queue = MagicMock()
    queue.count = 3
    queue.enqueue.return_value.get_id.return_value = "job-42"
    event = make_event(("b", "k.jpg"))

    with patch.object(worker, "_queue", return_value=queue):
        job_id = worker.enqueue_ingest_event(event, IngestConfig(mode="queue"))

    assert job_id == "job-42"
    func, payload = queue.enqueue.call_args.args
    assert func is worker.process_ingest_event
    assert payload["event"] == event
    assert "otel" in payload
