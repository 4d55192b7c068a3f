import logging
import time
from typing import Any, Dict, List, Optional

import boto3

from .config import NluConfig

log = logging.getLogger("photosearch.services.nlu")


class LexIntentService:
    def __init__(self, cfg: NluConfig, client=None):
        self.cfg = cfg
        self.lex = client or boto3.client("lexv2-runtime", region_name=cfg.region)

    def recognize(self, text: str) -> Dict[str, Any]:
        # Fresh session per query: no conversational state is carried between searches
        return self.lex.recognize_text(
            botId=self.cfg.bot_id,
            botAliasId=self.cfg.bot_alias_id,
            localeId=self.cfg.locale,
            sessionId=f"sess-{int(time.time() * 1000)}",
            text=text,
        )

    def slot_values(self, text: str) -> List[Optional[str]]:
        """Interpreted value of every slot the bot filled, in no particular order."""
        resp = self.recognize(text)
        log.debug("Lex response: %s", resp)
        intent = (resp.get("sessionState") or {}).get("intent") or {}
        slots = intent.get("slots") or {}
        values: List[Optional[str]] = []
        for slot in slots.values():
            # Unfilled slots come back as null
            value = (slot or {}).get("value") or {}
            values.append(value.get("interpretedValue"))
        return values
