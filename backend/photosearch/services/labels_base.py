from typing import List, Protocol, Tuple


class Labeler(Protocol):
    def detect_labels(
        self,
        bucket: str,
        key: str,
        max_labels: int,
        min_confidence: float,
    ) -> List[Tuple[str, float]]: ...
