# record_store.py
# Record-level writes. Each call is one locked read-modify-write of one store.
import logging
import os
from typing import Any, Callable, List, Mapping

from filelock import Timeout

from persist import locked, read_text, remove_tree, write_text
from serialize_core import records_from_json, store_to_json
from store_core import (
    ErrorKind, Result,
    drop_records, find_index, log_failure, merge_record, new_record_id, with_id,
)

logger = logging.getLogger(__name__)

Mutator = Callable[[List[Any]], Result]


def _mutate(op: str, path: str, apply: Mutator) -> Result:
    """Load the store at `path`, let `apply` edit the list in place, write it back.

    `apply` returns the Result to hand to the caller; the store is only
    rewritten when that Result is a success.
    """
    try:
        with locked(path):
            try:
                raw = read_text(path)
            except UnicodeDecodeError as exc:
                return log_failure(logger, op, path, ErrorKind.PARSE_FAILURE, exc)
            except OSError as exc:
                return log_failure(logger, op, path, ErrorKind.FILE_NOT_READABLE, exc)
            try:
                records = records_from_json(raw)
            except TypeError as exc:
                return log_failure(logger, op, path, ErrorKind.INVALID_STORE, exc)
            except ValueError as exc:
                return log_failure(logger, op, path, ErrorKind.PARSE_FAILURE, exc)

            result = apply(records)
            if not result:
                logger.warning("%s failed for %s: %s", op, path, result.message)
                return result

            try:
                write_text(path, store_to_json(records))
            except (OSError, TypeError, ValueError, RecursionError) as exc:
                return log_failure(logger, op, path, ErrorKind.FILE_WRITE_FAILURE, exc)
    except Timeout as exc:
        return log_failure(logger, op, path, ErrorKind.LOCK_TIMEOUT, exc)
    except OSError as exc:
        return log_failure(logger, op, path, ErrorKind.FILE_NOT_READABLE, exc)
    logger.debug("%s ok for %s", op, path)
    return result


def _not_found(path: str, record_id: str) -> Result:
    return Result.failure(path, ErrorKind.RECORD_NOT_FOUND, f"no record with id {record_id!r}")


def push(path, data: Mapping[str, Any]) -> Result:
    """Append a copy of `data` under a freshly generated id."""
    path = os.fspath(path)
    record = with_id(data, new_record_id())

    def apply(records: List[Any]) -> Result:
        records.append(record)
        return Result.success(path, record=record)

    return _mutate("push", path, apply)


def replace(path, record_id: str, data: Mapping[str, Any]) -> Result:
    """Swap the first record with `record_id` for `data`, keeping the id."""
    path = os.fspath(path)

    def apply(records: List[Any]) -> Result:
        index = find_index(records, record_id)
        if index is None:
            return _not_found(path, record_id)
        records[index] = with_id(data, record_id)
        return Result.success(path, record=records[index])

    return _mutate("replace", path, apply)


def append(path, record_id: str, data: Mapping[str, Any]) -> Result:
    """Merge the fields of `data` into the first record with `record_id`."""
    path = os.fspath(path)

    def apply(records: List[Any]) -> Result:
        index = find_index(records, record_id)
        if index is None:
            return _not_found(path, record_id)
        records[index] = merge_record(records[index], data, record_id)
        return Result.success(path, record=records[index])

    return _mutate("append", path, apply)


def remove_record(path, record_id: str) -> Result:
    """Drop every record carrying `record_id`; the others keep their order."""
    path = os.fspath(path)

    def apply(records: List[Any]) -> Result:
        kept = drop_records(records, record_id)
        removed = len(records) - len(kept)
        if not removed:
            return _not_found(path, record_id)
        records[:] = kept
        return Result.success(path, removed=removed)

    return _mutate("remove_record", path, apply)


def remove_path(path) -> Result:
    """Delete the file or directory tree at `path`."""
    path = os.fspath(path)
    try:
        with locked(path):
            remove_tree(path)
    except Timeout as exc:
        return log_failure(logger, "remove_path", path, ErrorKind.LOCK_TIMEOUT, exc)
    except OSError as exc:
        return log_failure(logger, "remove_path", path, ErrorKind.PATH_REMOVAL_FAILURE, exc)
    logger.debug("removed %s", path)
    return Result.success(path)
