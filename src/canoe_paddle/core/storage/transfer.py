# src/canoe_paddle/core/storage/transfer.py
"""
Transferência de artefatos entre o volume local e o store remoto.

Layout das chaves (tokens normalizados por `sanitize_name`):

    {step}/{version}/{branch}/HEAD                   → aponta para o último commit
    {step}/{version}/{branch}/{commit_id}/{arquivo}  → conteúdo de um commit

Operações:
    - commit_directory: publica um diretório como novo commit e atualiza HEAD
    - fetch_objects: resolve um commit (HEAD ou explícito), seleciona os
      objetos via `filter_objects` (all-or-nothing) e baixa para um diretório

Invariantes:
    - HEAD só é atualizado depois que todos os arquivos do commit foram enviados
    - Nenhum arquivo é baixado se alguma chave solicitada não existir
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence

from canoe_paddle.core.naming import sanitize_name

from .errors import StorageError
from .objects import StoragePath, filter_objects
from .store import ObjectStore


logger = logging.getLogger(__name__)

HEAD = "HEAD"


def artifact_prefix(step: str, version: str, branch: str) -> str:
    return f"{sanitize_name(step)}/{sanitize_name(version)}/{sanitize_name(branch)}/"


def new_commit_id(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H-%M-%SZ")


def commit_directory(
    store: ObjectStore,
    bucket: str,
    source: Path,
    *,
    step: str,
    version: str,
    branch: str,
    commit_id: Optional[str] = None,
) -> List[str]:
    """
    Publica todos os arquivos de `source` como um novo commit.

    Returns:
        List[str]: chaves enviadas (sem incluir HEAD), em ordem determinística.

    Raises:
        StorageError: se `source` não for um diretório.
    """
    source = Path(source)
    if not source.is_dir():
        raise StorageError(f"commit source is not a directory: {source}")

    prefix = artifact_prefix(step, version, branch)
    folder = f"{prefix}{commit_id or new_commit_id()}/"

    uploaded: List[str] = []
    for file in sorted(p for p in source.rglob("*") if p.is_file()):
        key = folder + file.relative_to(source).as_posix()
        store.put_object(bucket, key, file.read_bytes())
        uploaded.append(key)

    store.put_object(bucket, prefix + HEAD, folder.encode("utf-8"))
    logger.info("committed %d objects to s3://%s/%s", len(uploaded), bucket, folder)
    return uploaded


def resolve_commit(
    store: ObjectStore,
    bucket: str,
    *,
    step: str,
    version: str,
    branch: str,
    path: str = HEAD,
) -> StoragePath:
    """Resolve a pasta de um commit; `HEAD` (ou vazio) segue o ponteiro HEAD."""
    prefix = artifact_prefix(step, version, branch)
    if not path or path == HEAD:
        folder = store.get_object(bucket, prefix + HEAD).decode("utf-8").strip()
    else:
        folder = prefix + path.strip("/") + "/"
    return StoragePath(bucket=bucket, path=folder)


def _safe_relative(relative: str) -> PurePosixPath:
    rel = PurePosixPath(relative)
    if rel.is_absolute() or ".." in rel.parts or not rel.parts:
        raise StorageError(f"refusing to write object outside destination: {relative!r}")
    return rel


def fetch_objects(
    store: ObjectStore,
    bucket: str,
    destination: Path,
    *,
    step: str,
    version: str,
    branch: str,
    path: str = HEAD,
    keys: Sequence[str] = (),
) -> List[Path]:
    """
    Baixa os objetos de um commit para `destination`.

    Raises:
        MissingKeysError: se alguma chave em `keys` não existir no commit.
        ObjectNotFoundError: se HEAD não existir para step/version/branch.
    """
    location = resolve_commit(store, bucket, step=step, version=version, branch=branch, path=path)
    listed = store.list_objects(bucket, location.path)
    selected = filter_objects(location, listed, keys)

    plan = [(obj, _safe_relative(obj.key[len(location.path):])) for obj in selected]

    destination = Path(destination)
    written: List[Path] = []
    for obj, rel in plan:
        target = destination.joinpath(*rel.parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(store.get_object(bucket, obj.key))
        written.append(target)

    logger.info("fetched %d objects from %s into %s", len(written), location, destination)
    return written
