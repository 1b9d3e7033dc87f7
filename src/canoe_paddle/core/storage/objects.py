# src/canoe_paddle/core/storage/objects.py
"""
Seleção de objetos do storage remoto por prefixo e lista de chaves.

Regras (v1):
    - Sem chaves solicitadas: todos os objetos listados cujo key começa
      com o prefixo são selecionados
    - Com chaves solicitadas: cada chave precisa casar com exatamente um
      objeto cujo key é igual a `prefixo + chave` (igualdade exata, nunca
      glob ou regex)
    - Qualquer chave não resolvida invalida a seleção inteira
      (MissingKeysError); resultados parciais são descartados

Decisões:
    - O resultado preserva a ordem da listagem
    - Chaves solicitadas repetidas contam uma única vez
    - Objetos repetidos na listagem para a mesma chave produzem um único objeto
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set

from .errors import InvalidStoragePathError, MissingKeysError


_SCHEME = "s3://"


@dataclass(frozen=True)
class StoragePath:
    """Localização no storage: bucket + prefixo de chave."""

    bucket: str
    path: str = ""

    @classmethod
    def from_uri(cls, uri: str) -> "StoragePath":
        """Converte `s3://bucket/prefixo` em StoragePath."""
        if not uri.startswith(_SCHEME):
            raise InvalidStoragePathError(f"storage uri must start with {_SCHEME}: {uri}")
        rest = uri[len(_SCHEME):]
        bucket, _, path = rest.partition("/")
        if not bucket:
            raise InvalidStoragePathError(f"storage uri has no bucket: {uri}")
        return cls(bucket=bucket, path=path)

    def key_for(self, relative: str) -> str:
        return f"{self.path}{relative}"

    def __str__(self) -> str:
        return f"{_SCHEME}{self.bucket}/{self.path}"


@dataclass(frozen=True)
class StoredObject:
    """Objeto listado no storage."""

    key: str
    size: int = 0


def filter_objects(
    location: StoragePath,
    objects: Iterable[StoredObject],
    keys: Sequence[str],
) -> List[StoredObject]:
    """Seleciona os objetos que satisfazem `keys` sob `location.path`.

    Raises:
        MissingKeysError: se alguma chave solicitada não for encontrada.
    """
    listed = list(objects)

    if not keys:
        return [o for o in listed if o.key.startswith(location.path)]

    wanted = {location.key_for(k): k for k in keys}
    selected: List[StoredObject] = []
    found: Set[str] = set()
    for o in listed:
        if o.key in wanted and o.key not in found:
            selected.append(o)
            found.add(o.key)

    missing = [k for full, k in wanted.items() if full not in found]
    if missing:
        raise MissingKeysError(missing, bucket=location.bucket, prefix=location.path)

    return selected
