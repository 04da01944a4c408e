# file_store.py
# Directories and whole-store reads/creation.
import logging
import os
from typing import Any

from filelock import Timeout

from persist import locked, make_dirs, read_text, write_text
from serialize_core import empty_store, store_from_json
from store_core import ErrorKind, Result, StorageUnavailable, log_failure

logger = logging.getLogger(__name__)


def make_directory(path) -> Result:
    """Create `path` and any missing parents. Succeeds if it already exists."""
    path = os.fspath(path)
    try:
        make_dirs(path)
    except OSError as exc:
        return log_failure(logger, "mkdir", path, ErrorKind.DIRECTORY_FAILURE, exc)
    return Result.success(path)


def create(path) -> Result:
    """Overwrite `path` with an empty store."""
    path = os.fspath(path)
    try:
        with locked(path):
            write_text(path, empty_store())
    except Timeout as exc:
        return log_failure(logger, "create", path, ErrorKind.LOCK_TIMEOUT, exc)
    except OSError as exc:
        return log_failure(logger, "create", path, ErrorKind.FILE_WRITE_FAILURE, exc)
    logger.debug("created empty store %s", path)
    return Result.success(path)


def read(path) -> Any:
    """Return the parsed content of the store at `path`.

    A missing, unreadable or unparsable file is replaced by an empty store
    and read again. Raises StorageUnavailable when that second attempt fails
    too, or when the store's lock can't be taken.
    """
    path = os.fspath(path)
    try:
        with locked(path):
            try:
                return store_from_json(read_text(path))
            except FileNotFoundError:
                logger.info("store %s does not exist, creating it", path)
            except (OSError, ValueError) as exc:
                logger.warning("store %s unreadable (%s), resetting to empty", path, exc)
            try:
                write_text(path, empty_store())
                return store_from_json(read_text(path))
            except (OSError, ValueError) as exc:
                logger.warning("open failed for %s: %s", path, exc)
                raise StorageUnavailable(path, str(exc)) from exc
    except (Timeout, OSError) as exc:
        logger.warning("open failed for %s: %s", path, exc)
        raise StorageUnavailable(path, str(exc)) from exc
