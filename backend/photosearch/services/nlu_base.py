from typing import List, Optional, Protocol


class IntentService(Protocol):
    def slot_values(self, text: str) -> List[Optional[str]]: ...
