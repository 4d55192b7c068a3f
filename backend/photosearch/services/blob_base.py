from typing import Dict, Protocol


class Blob(Protocol):
    def head_metadata(self, bucket: str, key: str) -> Dict[str, str]: ...
