from dataclasses import dataclass, field
import os


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


@dataclass(frozen=True)
class SearchConfig:
    # Provider switch
    provider: str = field(default_factory=lambda: os.getenv("SEARCH_PROVIDER", "elastic"))
    # Elastic credentials (only used when provider == "elastic")
    host: str = field(default_factory=lambda: os.getenv("ELASTIC_SEARCH_HOST", "http://localhost:9200"))
    api_key: str = field(default_factory=lambda: os.getenv("ELASTIC_SEARCH_API_KEY", ""))
    # Basic auth is used only when no API key is set
    username: str = field(default_factory=lambda: os.getenv("ELASTIC_SEARCH_USERNAME", ""))
    password: str = field(default_factory=lambda: os.getenv("ELASTIC_SEARCH_PASSWORD", ""))

    photos_index: str = field(default_factory=lambda: os.getenv("PHOTOS_INDEX", "photos"))
    result_size: int = field(default_factory=lambda: _env_int("SEARCH_RESULT_SIZE", 100))


@dataclass(frozen=True)
class BlobConfig:
    provider: str = field(default_factory=lambda: os.getenv("BLOB_PROVIDER", "s3"))
    # Empty endpoint means the AWS default for the region
    endpoint: str = field(default_factory=lambda: os.getenv("S3_ENDPOINT", ""))
    region: str = field(default_factory=lambda: os.getenv("S3_REGION", "us-east-1"))
    access_key: str = field(default_factory=lambda: os.getenv("S3_ACCESS_KEY", ""))
    secret_key: str = field(default_factory=lambda: os.getenv("S3_SECRET_KEY", ""))


@dataclass(frozen=True)
class LabelConfig:
    provider: str = field(default_factory=lambda: os.getenv("LABELS_PROVIDER", "rekognition"))
    region: str = field(default_factory=lambda: os.getenv("REKOGNITION_REGION", "us-east-1"))
    max_labels: int = field(default_factory=lambda: _env_int("REKOGNITION_MAX_LABELS", 50))
    min_confidence: int = field(default_factory=lambda: _env_int("REKOGNITION_MIN_CONFIDENCE", 60))


@dataclass(frozen=True)
class NluConfig:
    provider: str = field(default_factory=lambda: os.getenv("NLU_PROVIDER", "lex"))
    bot_id: str = field(default_factory=lambda: os.getenv("LEX_BOT_ID", ""))
    bot_alias_id: str = field(default_factory=lambda: os.getenv("LEX_BOT_ALIAS_ID", ""))
    locale: str = field(default_factory=lambda: os.getenv("LEX_LOCALE", "en_US"))
    region: str = field(default_factory=lambda: os.getenv("LEX_REGION", "us-east-1"))


@dataclass(frozen=True)
class IngestConfig:
    # "inline" runs the batch in the request, "queue" hands it to the rq worker
    mode: str = field(default_factory=lambda: os.getenv("INGEST_MODE", "inline"))
    workers: int = field(default_factory=lambda: _env_int("INGEST_WORKERS", 1))
    queue_name: str = field(default_factory=lambda: os.getenv("RQ_QUEUE", "ingest"))
    redis_url: str = field(default_factory=lambda: os.getenv("REDIS_URL", "redis://redis:6379/0"))
