# localbase.py
"""Local JSON-array stores.

    db = localbase("data")
    db.create("notes.json")
    res = db.push("notes.json", {"title": "hello"})
    db.append("notes.json", res.record["id"], {"body": "world"})
    db.open("notes.json")

Every mutating call returns a Result and never raises for I/O problems;
`open` raises StorageUnavailable when a store can't be read or recreated.
"""
import os
from typing import Any, Mapping, Optional

import file_store
import record_store
from store_core import ErrorKind, Record, Result, StorageUnavailable, StoreError

__all__ = [
    "LocalBase", "localbase",
    "ErrorKind", "Record", "Result", "StoreError", "StorageUnavailable",
]


class LocalBase:
    """Store operations with relative paths resolved under `root`.

    Absolute paths are used as given, even when `root` is set, following
    os.path.join.
    """

    def __init__(self, root=None):
        self.root: Optional[str] = os.fspath(root) if root is not None else None
        if self.root is not None:
            file_store.make_directory(self.root)

    def resolve(self, path) -> str:
        path = os.fspath(path)
        if self.root is None:
            return path
        return os.path.join(self.root, path)

    # ----- directories & whole stores -----
    def mkdir(self, path) -> Result:
        return file_store.make_directory(self.resolve(path))

    def create(self, path) -> Result:
        return file_store.create(self.resolve(path))

    def open(self, path) -> Any:
        return file_store.read(self.resolve(path))

    # ----- records -----
    def push(self, path, data: Mapping[str, Any]) -> Result:
        return record_store.push(self.resolve(path), data)

    def replace(self, path, record_id: str, data: Mapping[str, Any]) -> Result:
        return record_store.replace(self.resolve(path), record_id, data)

    def append(self, path, record_id: str, data: Mapping[str, Any]) -> Result:
        return record_store.append(self.resolve(path), record_id, data)

    def remove_record(self, path, record_id: str) -> Result:
        return record_store.remove_record(self.resolve(path), record_id)

    def remove_path(self, path) -> Result:
        return record_store.remove_path(self.resolve(path))


def localbase(root=None) -> LocalBase:
    return LocalBase(root)
