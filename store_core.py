# store_core.py
from dataclasses import dataclass
from enum import Enum
import logging
import uuid
from typing import Any, Dict, List, Mapping, Optional

Record = Dict[str, Any]

ID_FIELD = "id"


class ErrorKind(str, Enum):
    FILE_NOT_READABLE = "file_not_readable"
    PARSE_FAILURE = "parse_failure"
    INVALID_STORE = "invalid_store"
    FILE_WRITE_FAILURE = "file_write_failure"
    RECORD_NOT_FOUND = "record_not_found"
    PATH_REMOVAL_FAILURE = "path_removal_failure"
    DIRECTORY_FAILURE = "directory_failure"
    LOCK_TIMEOUT = "lock_timeout"
    STORAGE_UNAVAILABLE = "storage_unavailable"


class StoreError(Exception):
    def __init__(self, kind: ErrorKind, path: str, message: str = ""):
        super().__init__(f"{kind.value}: {path}" + (f" ({message})" if message else ""))
        self.kind = kind
        self.path = path
        self.message = message


class StorageUnavailable(StoreError):
    """A store could neither be read nor recreated."""

    def __init__(self, path: str, message: str = ""):
        super().__init__(ErrorKind.STORAGE_UNAVAILABLE, path, message)


@dataclass
class Result:
    """Outcome of one store operation. Truthy when the operation succeeded."""
    ok: bool
    path: str
    error: Optional[ErrorKind] = None
    message: str = ""
    record: Optional[Record] = None  # the record as written, for push/replace/append
    removed: int = 0                 # number of records dropped by remove_record

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, path: str, **kwargs) -> "Result":
        return cls(ok=True, path=path, **kwargs)

    @classmethod
    def failure(cls, path: str, error: ErrorKind, message: str = "") -> "Result":
        return cls(ok=False, path=path, error=error, message=message)


def log_failure(logger: logging.Logger, op: str, path: str, error: ErrorKind, exc: Any) -> Result:
    logger.warning("%s failed for %s: %s", op, path, exc)
    return Result.failure(path, error, str(exc))


# ------------------------
# Records
# ------------------------
def new_record_id() -> str:
    return str(uuid.uuid4())


def has_id(item: Any, record_id: str) -> bool:
    return isinstance(item, dict) and item.get(ID_FIELD) == record_id


def find_index(records: List[Any], record_id: str) -> Optional[int]:
    """Position of the first record carrying `record_id`, or None."""
    for i, item in enumerate(records):
        if has_id(item, record_id):
            return i
    return None


def with_id(data: Mapping[str, Any], record_id: str) -> Record:
    record = dict(data)
    record[ID_FIELD] = record_id
    return record


def merge_record(existing: Mapping[str, Any], patch: Mapping[str, Any], record_id: str) -> Record:
    # shallow: union of keys, patch wins, id always restored
    merged = dict(existing)
    merged.update(patch)
    merged[ID_FIELD] = record_id
    return merged


def drop_records(records: List[Any], record_id: str) -> List[Any]:
    return [item for item in records if not has_id(item, record_id)]
