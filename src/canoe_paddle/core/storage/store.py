# src/canoe_paddle/core/storage/store.py
"""
Contrato do store remoto de objetos.

O acesso de rede (S3) é um colaborador externo; o core depende apenas
desta capacidade mínima:

    list_objects(bucket, prefix) -> objetos
    get_object(bucket, key)      -> bytes
    put_object(bucket, key, data)

`InMemoryObjectStore` implementa o contrato em memória para testes e
execuções locais (dry-run).
"""

from __future__ import annotations

from typing import Dict, List, Protocol, Tuple, runtime_checkable

from .errors import ObjectNotFoundError
from .objects import StoredObject


@runtime_checkable
class ObjectStore(Protocol):
    """Capacidade de listagem/transferência consumida pelo core."""

    def list_objects(self, bucket: str, prefix: str) -> List[StoredObject]:
        ...

    def get_object(self, bucket: str, key: str) -> bytes:
        ...

    def put_object(self, bucket: str, key: str, data: bytes) -> None:
        ...


class InMemoryObjectStore:
    """Store em memória (bucket, key) -> bytes, com listagem ordenada por key."""

    def __init__(self) -> None:
        self._objects: Dict[Tuple[str, str], bytes] = {}

    def list_objects(self, bucket: str, prefix: str) -> List[StoredObject]:
        return [
            StoredObject(key=key, size=len(data))
            for (b, key), data in sorted(self._objects.items())
            if b == bucket and key.startswith(prefix)
        ]

    def get_object(self, bucket: str, key: str) -> bytes:
        try:
            return self._objects[(bucket, key)]
        except KeyError:
            raise ObjectNotFoundError(f"object not found: s3://{bucket}/{key}") from None

    def put_object(self, bucket: str, key: str, data: bytes) -> None:
        self._objects[(bucket, key)] = bytes(data)

    def keys(self, bucket: str) -> List[str]:
        return sorted(key for (b, key) in self._objects if b == bucket)
