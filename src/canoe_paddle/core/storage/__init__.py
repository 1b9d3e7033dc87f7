# src/canoe_paddle/core/storage/__init__.py
"""Storage: seleção de objetos por chave e transferência de commits."""

from .errors import (
    InvalidStoragePathError,
    MissingKeysError,
    ObjectNotFoundError,
    StorageError,
)
from .objects import StoragePath, StoredObject, filter_objects
from .store import InMemoryObjectStore, ObjectStore
from .transfer import (
    HEAD,
    artifact_prefix,
    commit_directory,
    fetch_objects,
    new_commit_id,
    resolve_commit,
)

__all__ = [
    "InvalidStoragePathError",
    "MissingKeysError",
    "ObjectNotFoundError",
    "StorageError",
    "StoragePath",
    "StoredObject",
    "filter_objects",
    "InMemoryObjectStore",
    "ObjectStore",
    "HEAD",
    "artifact_prefix",
    "commit_directory",
    "fetch_objects",
    "new_commit_id",
    "resolve_commit",
]
