from typing import Any, Dict, Iterable, List

LABELS_FIELD = "labels"
MAX_RESULTS = 100


def build_label_query(keywords: Iterable[str]) -> Dict[str, Any]:
    """Match photos carrying any of the keywords as a label.

    Callers short-circuit on an empty keyword set; a bool query with no
    should clauses and minimum_should_match=1 would match nothing anyway.
    """
    should: List[Dict[str, Any]] = [
        {"match": {LABELS_FIELD: {"query": k, "operator": "or"}}}
        for k in sorted(keywords)
    ]
    return {"bool": {"should": should, "minimum_should_match": 1}}
