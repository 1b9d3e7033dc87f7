# src/canoe_paddle/core/compiler/pod.py
"""
Descritor de unidade de execução (pod) do canoe-paddle.

O `PodDefinition` é derivado de um par (pipeline, step) e contém todos
os dados de que o renderer precisa, já normalizados. O renderer é uma
função pura do descritor: nenhuma normalização acontece durante a
renderização.

Ciclo de vida:
    - construído uma vez por step (`build_pod_definition`)
    - secrets são anexados pelo chamador (`with_secrets`) antes do render
    - renderizado exatamente uma vez e descartado

Invariantes:
    - bucket nunca é vazio (documento ou `PaddleSettings.bucket`)
    - pod_name = sanitize(pipeline)-sanitize(step)-sanitize(branch)
    - step_name, step_version e branch_name já estão normalizados
    - o payload do step é uma cópia: overrides posteriores na definição
      não alteram um descritor já construído
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Tuple

from canoe_paddle.core.config.settings import PaddleSettings
from canoe_paddle.core.naming import sanitize_name
from canoe_paddle.core.pipeline.model import PipelineDefinition, PipelineStep

from .errors import MissingBucketError, SecretBindingError


@dataclass(frozen=True)
class PodSecret:
    """Variável de ambiente injetada a partir de uma chave de secret Kubernetes."""

    name: str
    store: str
    key: str


def parse_secret_binding(binding: str) -> PodSecret:
    """
    Converte `ENV_NAME:secret-store:secret-key` em PodSecret.

    Raises:
        SecretBindingError: se o binding não tiver exatamente três partes não vazias.
    """
    parts = binding.split(":")
    if len(parts) != 3 or not all(p.strip() for p in parts):
        raise SecretBindingError(
            f"secret binding must be ENV_NAME:secret-store:secret-key, got {binding!r}"
        )
    name, store, key = (p.strip() for p in parts)
    return PodSecret(name=name, store=store, key=key)


@dataclass(frozen=True)
class PodDefinition:
    pod_name: str
    namespace: str
    bucket: str
    step_name: str
    step_version: str
    branch_name: str
    step: PipelineStep
    settings: PaddleSettings = field(default_factory=PaddleSettings)
    secrets: Tuple[PodSecret, ...] = ()

    def with_secrets(self, secrets: Iterable[PodSecret]) -> "PodDefinition":
        """Retorna um novo descritor com os bindings anexados aos existentes."""
        return replace(self, secrets=self.secrets + tuple(secrets))


def resolve_bucket(definition: PipelineDefinition, settings: PaddleSettings) -> str:
    """Bucket do documento ou, na falta dele, o bucket padrão das settings."""
    bucket = definition.bucket or settings.bucket
    if not bucket:
        raise MissingBucketError(
            f"pipeline {definition.pipeline!r} has no bucket and no default bucket is configured"
        )
    return bucket


def build_pod_definition(
    definition: PipelineDefinition,
    step: PipelineStep,
    settings: Optional[PaddleSettings] = None,
) -> PodDefinition:
    settings = settings or PaddleSettings()
    step_name = sanitize_name(step.step)
    branch_name = sanitize_name(step.branch)
    step_version = sanitize_name(step.version)
    bucket = resolve_bucket(definition, settings)

    return PodDefinition(
        pod_name=f"{sanitize_name(definition.pipeline)}-{step_name}-{branch_name}",
        namespace=definition.namespace,
        bucket=bucket,
        step_name=step_name,
        step_version=step_version,
        branch_name=branch_name,
        step=copy.deepcopy(step),
        settings=settings,
        secrets=(),
    )
