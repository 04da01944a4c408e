# serialize_core.py
# Store <-> JSON text. A Store on disk is always a single JSON array.
import json
from typing import Any, List

from store_core import Record

JSON_INDENT = 2


def store_to_json(records: List[Record]) -> str:
    return json.dumps(records, ensure_ascii=False, indent=JSON_INDENT)


def _loads(raw: str) -> Any:
    try:
        return json.loads(raw)
    except RecursionError as exc:
        raise ValueError("store content is nested too deeply to parse") from exc


def store_from_json(raw: str) -> Any:
    # No shape check: whatever the file holds is returned as parsed
    return _loads(raw)


def records_from_json(raw: str) -> List[Record]:
    """Parse `raw` for mutation.

    Raises ValueError on malformed JSON and TypeError when the document
    is valid JSON but not an array.
    """
    value = _loads(raw)
    if not isinstance(value, list):
        raise TypeError(f"store content is not a JSON array (got {type(value).__name__})")
    return value


def empty_store() -> str:
    return store_to_json([])
