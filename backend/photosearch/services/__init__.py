from .config import SearchConfig, BlobConfig, LabelConfig, NluConfig
from .search_base import Search, IndexAlreadyExists
from .search_elastic import ElasticSearchService
from .blob_base import Blob
from .blob_s3 import S3Blob
from .labels_base import Labeler
from .labels_rekognition import RekognitionLabeler
from .nlu_base import IntentService
from .nlu_lex import LexIntentService

_search_singleton: Search | None = None
_blob_singleton: Blob | None = None
_labeler_singleton: Labeler | None = None
_nlu_singleton: IntentService | None = None

def get_search() -> Search:
    global _search_singleton
    if _search_singleton is None:
        sc = SearchConfig()
        if sc.provider == "elastic":
            _search_singleton = ElasticSearchService(sc)
        else:
            raise NotImplementedError(f"Unknown SEARCH_PROVIDER: {sc.provider}")
    return _search_singleton

def get_blob() -> Blob:
    global _blob_singleton
    if _blob_singleton is None:
        bc = BlobConfig()
        if bc.provider == "s3":
            _blob_singleton = S3Blob(bc)
        else:
            raise NotImplementedError(f"Unknown BLOB_PROVIDER: {bc.provider}")
    return _blob_singleton

def get_labeler() -> Labeler:
    global _labeler_singleton
    if _labeler_singleton is None:
        lc = LabelConfig()
        if lc.provider == "rekognition":
            _labeler_singleton = RekognitionLabeler(lc)
        else:
            raise NotImplementedError(f"Unknown LABELS_PROVIDER: {lc.provider}")
    return _labeler_singleton

def get_nlu() -> IntentService | None:
    """Returns None when no bot is configured; keyword extraction then uses its fallback."""
    global _nlu_singleton
    if _nlu_singleton is None:
        nc = NluConfig()
        if not nc.bot_id:
            return None
        if nc.provider == "lex":
            _nlu_singleton = LexIntentService(nc)
        else:
            raise NotImplementedError(f"Unknown NLU_PROVIDER: {nc.provider}")
    return _nlu_singleton
