# src/canoe_paddle/core/storage/errors.py
"""Erros canônicos do domínio de storage.

A seleção de objetos é all-or-nothing: quando qualquer chave solicitada
não é encontrada, nenhum objeto é retornado.
"""

from __future__ import annotations

from typing import Iterable, Tuple


class StorageError(Exception):
    """Erro base do domínio de storage."""


class InvalidStoragePathError(StorageError, ValueError):
    """URI de storage malformada (esperado: s3://bucket/prefixo)."""


class MissingKeysError(StorageError, LookupError):
    """Uma ou mais chaves solicitadas não existem sob o prefixo informado."""

    def __init__(self, keys: Iterable[str], *, bucket: str = "", prefix: str = "") -> None:
        self.keys: Tuple[str, ...] = tuple(keys)
        self.bucket = bucket
        self.prefix = prefix
        location = f"s3://{bucket}/{prefix}" if bucket else prefix
        super().__init__(f"keys not found under {location}: {', '.join(self.keys)}")


class ObjectNotFoundError(StorageError, KeyError):
    """Objeto inexistente no store."""

    def __str__(self) -> str:
        return Exception.__str__(self)
