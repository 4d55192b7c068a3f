# photosearch/search/index_bootstrap.py
import logging

from photosearch.services.search_base import IndexAlreadyExists, Search

log = logging.getLogger("photosearch.search.bootstrap")

INDEX = "photos"

MAPPINGS = {
    "properties": {
        "objectKey":        {"type": "keyword"},
        "bucket":           {"type": "keyword"},
        "labels":           {"type": "keyword"},
        "createdTimestamp": {"type": "date"},
    }
}


class IndexProvisioningError(RuntimeError):
    pass


def ensure_index(search: Search, index: str = INDEX) -> bool:
    """Create the photos index if it is missing.

    Returns True when this call created the index. Exists-then-create is not
    atomic across invocations, so losing the creation race counts as success.
    """
    try:
        if search.index_exists(index):
            log.debug("Index '%s' exists", index)
            return False
        log.info("Index '%s' missing. Creating...", index)
        search.create_index(index, MAPPINGS)
    except IndexAlreadyExists:
        log.info("Index '%s' was created concurrently", index)
        return False
    except Exception as e:
        raise IndexProvisioningError(f"could not ensure index '{index}': {e}") from e
    log.info("Index '%s' created", index)
    return True
