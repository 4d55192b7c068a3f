# photosearch/ingest/pipeline.py
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple
from urllib.parse import unquote_plus

from opentelemetry import trace

from photosearch.ingest import documents
from photosearch.ingest.labels import custom_labels, detect_labels, merge_labels
from photosearch.observability import record_ingest_outcome
from photosearch.search.index_bootstrap import INDEX, IndexProvisioningError, ensure_index
from photosearch.services.blob_base import Blob
from photosearch.services.labels_base import Labeler
from photosearch.services.search_base import Search

logger = logging.getLogger("photosearch.ingest")
tracer = trace.get_tracer("photosearch.ingest")

INGEST_ACK = "Ingestion OK"

INDEXED = "indexed"
FAILED = "failed"


class ObjectRef(NamedTuple):
    bucket: str
    key: str


@dataclass
class IngestReport:
    indexed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def parse_records(event: Dict[str, Any]) -> List[ObjectRef]:
    """Pull (bucket, key) pairs out of an S3 notification event.

    Keys arrive URL-encoded with '+' for spaces; they are decoded here so the
    same string is used for the storage lookup and the document identity.
    """
    refs: List[ObjectRef] = []
    for record in event.get("Records") or []:
        try:
            s3 = record["s3"]
            refs.append(ObjectRef(s3["bucket"]["name"], unquote_plus(s3["object"]["key"])))
        except (KeyError, TypeError):
            logger.warning("Skipping malformed notification record: %r", record)
    return refs


class IngestionOrchestrator:
    def __init__(
        self,
        search: Search,
        blob: Blob,
        labeler: Labeler,
        index: str = INDEX,
        workers: int = 1,
    ):
        self.search = search
        self.blob = blob
        self.labeler = labeler
        self.index = index
        self.workers = max(1, workers)

    def provision(self) -> None:
        try:
            ensure_index(self.search, self.index)
        except IndexProvisioningError:
            # The index may already exist from an earlier run; writes still get a chance
            logger.exception("Index provisioning failed; continuing with label writes")

    def process_object(self, ref: ObjectRef) -> documents.PhotoDocument:
        with tracer.start_as_current_span("ingest.object") as span:
            span.set_attribute("photo.bucket", ref.bucket)
            span.set_attribute("photo.key", ref.key)
            logger.info("Processing: %s/%s", ref.bucket, ref.key)

            metadata = self.blob.head_metadata(ref.bucket, ref.key)
            operator = custom_labels(metadata)
            machine = detect_labels(self.labeler, ref.bucket, ref.key)
            logger.debug("Custom labels: %s; detected labels: %s", sorted(operator), sorted(machine))

            doc = documents.build_document(ref.bucket, ref.key, merge_labels(operator, machine))
            span.set_attribute("photo.label_count", len(doc.labels))
            result = documents.upsert(self.search, doc, self.index)
            logger.info("Indexed %s with %d labels (result=%s)", doc.id, len(doc.labels), result.get("result"))
            return doc

    def _safe_process(self, ref: ObjectRef) -> str:
        try:
            self.process_object(ref)
        except Exception as e:
            # One bad object must not take the rest of the batch down with it
            logger.exception("Error processing %s/%s", ref.bucket, ref.key)
            trace.get_current_span().record_exception(e)
            record_ingest_outcome(FAILED)
            return FAILED
        record_ingest_outcome(INDEXED)
        return INDEXED

    def ingest(self, refs: Iterable[ObjectRef]) -> IngestReport:
        refs = list(refs)
        report = IngestReport()
        with tracer.start_as_current_span("ingest.batch") as span:
            span.set_attribute("ingest.objects", len(refs))
            self.provision()

            if self.workers > 1 and len(refs) > 1:
                with ThreadPoolExecutor(max_workers=self.workers) as pool:
                    outcomes = list(pool.map(self._safe_process, refs))
            else:
                outcomes = [self._safe_process(ref) for ref in refs]

            for ref, outcome in zip(refs, outcomes):
                target = report.indexed if outcome == INDEXED else report.failed
                target.append(documents.document_id(ref.bucket, ref.key))

            span.set_attribute("ingest.failed", len(report.failed))
        return report

    def handle_event(self, event: Dict[str, Any]) -> IngestReport:
        return self.ingest(parse_records(event))
