from typing import Any, Dict, Mapping, Protocol


class Search(Protocol):
    def index_exists(self, index: str) -> bool: ...
    def create_index(self, index: str, mappings: Mapping[str, Any]) -> None: ...
    def upsert(self, index: str, doc_id: str, doc: Dict[str, Any]) -> Dict[str, Any]: ...
    def search(self, index: str, query: Dict[str, Any], size: int) -> Dict[str, Any]: ...


class IndexAlreadyExists(Exception):
    """Raised by a Search adapter when create_index loses a creation race."""
