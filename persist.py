# persist.py
import errno
import os
import shutil
from contextlib import contextmanager, suppress

from filelock import FileLock

LOCK_TIMEOUT = 10  # seconds
LOCK_SUFFIX = ".lock"
TMP_SUFFIX = ".tmp"


def lock_path(path: str) -> str:
    return path + LOCK_SUFFIX


@contextmanager
def locked(path: str):
    # FileLock would create missing parents for the sidecar; refuse instead
    parent = os.path.dirname(os.path.abspath(path))
    if not os.path.isdir(parent):
        raise FileNotFoundError(errno.ENOENT, "parent directory does not exist", parent)
    lock = FileLock(lock_path(path))
    lock.acquire(timeout=LOCK_TIMEOUT)
    try:
        yield
    finally:
        lock.release()


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_text(path: str, text: str) -> None:
    """Write `text` to `path` through a temp file and os.replace.

    A failure at any point leaves the previous content of `path` in place.
    """
    tmp = path + TMP_SUFFIX
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError:
        with suppress(OSError):
            os.remove(tmp)
        raise


def make_dirs(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def remove_tree(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)
