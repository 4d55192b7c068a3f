# photosearch/search/keywords.py
import logging
import re
from typing import Iterable, Optional, Set

from photosearch.observability import record_keyword_path
from photosearch.services.nlu_base import IntentService

log = logging.getLogger("photosearch.search.keywords")

_SLOT_SPLIT = re.compile(r",|\band\b")
_AND = re.compile(r"\band\b")
_NON_WORD = re.compile(r"\W+")

MIN_FALLBACK_TOKEN = 3


def split_slot_values(values: Iterable[Optional[str]]) -> Set[str]:
    """'Cats, dogs and birds' -> {'cats', 'dogs', 'birds'}; null slots are skipped."""
    keywords: Set[str] = set()
    for value in values:
        if not value:
            continue
        for part in _SLOT_SPLIT.split(value.lower()):
            part = part.strip()
            if part:
                keywords.add(part)
    return keywords


def fallback_keywords(query: str) -> Set[str]:
    text = _AND.sub(" ", (query or "").lower())
    return {tok for tok in _NON_WORD.split(text) if len(tok) >= MIN_FALLBACK_TOKEN}


class KeywordExtractor:
    def __init__(self, nlu: IntentService | None = None):
        self.nlu = nlu

    def _from_nlu(self, query: str) -> Set[str]:
        if self.nlu is None:
            return set()
        try:
            return split_slot_values(self.nlu.slot_values(query))
        except Exception:
            log.warning("NLU keyword extraction failed; using fallback tokenizer", exc_info=True)
            return set()

    def extract(self, query: str) -> Set[str]:
        if not query:
            return set()
        keywords = self._from_nlu(query)
        if keywords:
            record_keyword_path("nlu")
            return keywords
        log.info("Using fallback tokenizer")
        record_keyword_path("fallback")
        return fallback_keywords(query)
