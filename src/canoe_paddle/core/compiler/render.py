# src/canoe_paddle/core/compiler/render.py
"""
Renderização de `PodDefinition` em manifest YAML (Kubernetes Pod).

Decisões arquiteturais:
    - o manifest é montado como estrutura Python (dicts com ordem de
      inserção) e emitido com `yaml.safe_dump(sort_keys=False)`; não há
      template textual
    - função pura do descritor: mesma entrada ⇒ texto byte-idêntico
    - nenhuma normalização de nomes acontece aqui

Estrutura emitida:
    - metadata com labels `canoe.executor` e `canoe.step.*`
    - `restartPolicy: Never`
    - um único volume `emptyDir` compartilhado pelos dois containers
    - containers `main` (imagem do step + limites) e `paddle` (imagem paddle)
    - secrets do chamador injetados nos dois containers

Raises:
    RenderError: qualquer falha ao compor ou serializar o manifest.
"""

from __future__ import annotations

from typing import Any, Dict, List

import yaml

from .errors import RenderError
from .pod import PodDefinition, PodSecret
from .protocol import main_command, paddle_command


SHARED_VOLUME = "shared-data"
EXECUTOR_LABEL = "paddle"


def _secret_env(name: str, store: str, key: str) -> Dict[str, Any]:
    return {"name": name, "valueFrom": {"secretKeyRef": {"name": store, "key": key}}}


def _credentials_env(store: str) -> List[Dict[str, Any]]:
    return [
        _secret_env("AWS_ACCESS_KEY_ID", store, "aws-access-key-id"),
        _secret_env("AWS_SECRET_ACCESS_KEY", store, "aws-secret-access-key"),
    ]


def _caller_env(secrets: tuple) -> List[Dict[str, Any]]:
    out = []
    for s in secrets:
        if not isinstance(s, PodSecret):
            raise RenderError(f"secret binding must be a PodSecret, got {type(s).__name__}")
        out.append(_secret_env(s.name, s.store, s.key))
    return out


def _limits(pod: PodDefinition) -> Dict[str, str]:
    resources = pod.step.resources
    limits = {"cpu": str(resources.cpu), "memory": resources.memory}
    if resources.storage_mb > 0:
        limits["ephemeral-storage"] = f"{resources.storage_mb}Mi"
    return limits


def build_manifest(pod: PodDefinition) -> Dict[str, Any]:
    """Estrutura do manifest (antes da serialização)."""
    settings = pod.settings
    data_path = settings.data_path
    # cada container recebe listas próprias: objetos compartilhados viram
    # âncoras (&id001) no safe_dump
    def mounts() -> List[Dict[str, Any]]:
        return [{"name": SHARED_VOLUME, "mountPath": data_path}]

    def paths_env() -> List[Dict[str, Any]]:
        root = data_path.rstrip("/")
        return [
            {"name": "INPUT_PATH", "value": f"{root}/input"},
            {"name": "OUTPUT_PATH", "value": f"{root}/output"},
        ]

    main = {
        "name": "main",
        "image": pod.step.image,
        "volumeMounts": mounts(),
        "resources": {"limits": _limits(pod)},
        "command": ["/bin/sh", "-c", main_command(pod.step.commands, settings)],
        "env": paths_env()
        + _credentials_env(settings.main_credentials_secret)
        + _caller_env(pod.secrets),
    }

    paddle = {
        "name": "paddle",
        "image": settings.paddle_image,
        "volumeMounts": mounts(),
        "command": [
            "/bin/sh",
            "-c",
            paddle_command(
                pod.step.inputs,
                step_name=pod.step_name,
                step_version=pod.step_version,
                branch_name=pod.branch_name,
                settings=settings,
            ),
        ],
        "env": paths_env()
        + [
            {"name": "BUCKET", "value": pod.bucket},
            {"name": "AWS_REGION", "value": settings.aws_region},
        ]
        + _credentials_env(settings.paddle_credentials_secret)
        + _caller_env(pod.secrets),
    }

    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": pod.pod_name,
            "namespace": pod.namespace,
            "labels": {
                "canoe.executor": EXECUTOR_LABEL,
                "canoe.step.name": pod.step_name,
                "canoe.step.branch": pod.branch_name,
                "canoe.step.version": pod.step_version,
            },
        },
        "spec": {
            "restartPolicy": "Never",
            "volumes": [{"name": SHARED_VOLUME, "emptyDir": {}}],
            "containers": [main, paddle],
        },
    }


def render_pod(pod: PodDefinition) -> str:
    """Renderiza o descritor em YAML determinístico."""
    if not isinstance(pod, PodDefinition):
        raise RenderError(f"expected PodDefinition, got {type(pod).__name__}")
    try:
        manifest = build_manifest(pod)
    except RenderError:
        raise
    except (AttributeError, TypeError, ValueError) as e:
        raise RenderError(f"failed to build manifest for pod {pod.pod_name!r}: {e}") from e

    try:
        return yaml.safe_dump(
            manifest,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
            width=float("inf"),
        )
    except yaml.YAMLError as e:
        raise RenderError(f"failed to serialize manifest for pod {pod.pod_name!r}: {e}") from e
