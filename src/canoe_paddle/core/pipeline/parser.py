# src/canoe_paddle/core/pipeline/parser.py
"""Parser canônico de definições de pipeline (YAML).

Formato esperado:

    pipeline: sample
    bucket: "{{ bucket | default('canoe-sample') }}"
    namespace: modeltraining
    steps:
      - step: step1
        version: version1
        branch: master
        image: repo/image:latest
        inputs:
          - step: step0
            version: version0
            branch: master
            path: HEAD
            bucket: other-bucket   # opcional
        commands:
          - echo hello
        resources:
          cpu: 2
          memory: 2Gi
          storage-mb: 1000

Notas:
- Campos ausentes assumem o valor zero do tipo ("", 0, []).
- Escalares numéricos/booleanos em campos texto são convertidos para texto.
- O bucket passa pelo adapter de default opcional (`defaults.py`).
- Nomes de step duplicados são rejeitados (DuplicateStepError).
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Set, Union

import yaml

from .defaults import parse_optional_default
from .errors import DuplicateStepError, PipelineParseError
from .model import InputReference, PipelineDefinition, PipelineStep, ResourceRequest


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise PipelineParseError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _as_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise PipelineParseError(f"{where} must be a list, got {type(value).__name__}")
    return value


def _as_str(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    raise PipelineParseError(f"{where} must be a scalar, got {type(value).__name__}")


def _as_int(value: Any, where: str) -> int:
    if value is None:
        return 0
    # bool é subclasse de int; não é um valor aceitável aqui
    if isinstance(value, bool) or not isinstance(value, int):
        raise PipelineParseError(f"{where} must be an integer, got {type(value).__name__}")
    return value


def _parse_input(raw: Any, where: str) -> InputReference:
    data = _as_mapping(raw, where)
    return InputReference(
        step=_as_str(data.get("step"), f"{where}.step"),
        version=_as_str(data.get("version"), f"{where}.version"),
        branch=_as_str(data.get("branch"), f"{where}.branch"),
        path=_as_str(data.get("path"), f"{where}.path"),
        bucket=_as_str(data.get("bucket"), f"{where}.bucket"),
    )


def _parse_resources(raw: Any, where: str) -> ResourceRequest:
    data = _as_mapping(raw, where)
    return ResourceRequest(
        cpu=_as_int(data.get("cpu"), f"{where}.cpu"),
        memory=_as_str(data.get("memory"), f"{where}.memory"),
        storage_mb=_as_int(data.get("storage-mb"), f"{where}.storage-mb"),
    )


def _parse_step(raw: Any, where: str) -> PipelineStep:
    data = _as_mapping(raw, where)
    inputs = [
        _parse_input(item, f"{where}.inputs[{i}]")
        for i, item in enumerate(_as_list(data.get("inputs"), f"{where}.inputs"))
    ]
    commands = [
        _as_str(item, f"{where}.commands[{i}]")
        for i, item in enumerate(_as_list(data.get("commands"), f"{where}.commands"))
    ]
    return PipelineStep(
        step=_as_str(data.get("step"), f"{where}.step"),
        version=_as_str(data.get("version"), f"{where}.version"),
        branch=_as_str(data.get("branch"), f"{where}.branch"),
        image=_as_str(data.get("image"), f"{where}.image"),
        inputs=inputs,
        commands=commands,
        resources=_parse_resources(data.get("resources"), f"{where}.resources"),
    )


def parse_pipeline(data: Union[bytes, str]) -> PipelineDefinition:
    """Decodifica um documento YAML em uma PipelineDefinition.

    Raises:
        PipelineParseError: documento vazio, YAML inválido ou estrutura inesperada.
        DuplicateStepError: dois steps com o mesmo nome.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PipelineParseError(f"pipeline document is not valid UTF-8: {e}") from e

    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise PipelineParseError(f"invalid pipeline YAML: {e}") from e

    if doc is None:
        raise PipelineParseError("pipeline document is empty")
    if not isinstance(doc, dict):
        raise PipelineParseError("pipeline root must be a mapping/dict")

    steps = [
        _parse_step(item, f"steps[{i}]")
        for i, item in enumerate(_as_list(doc.get("steps"), "steps"))
    ]

    seen: Set[str] = set()
    for s in steps:
        if s.step in seen:
            raise DuplicateStepError(f"Duplicate step name: {s.step}")
        seen.add(s.step)

    bucket = parse_optional_default(_as_str(doc.get("bucket"), "bucket")).resolve()

    return PipelineDefinition(
        pipeline=_as_str(doc.get("pipeline"), "pipeline"),
        bucket=bucket,
        namespace=_as_str(doc.get("namespace"), "namespace"),
        steps=steps,
        secrets=[
            _as_str(item, f"secrets[{i}]")
            for i, item in enumerate(_as_list(doc.get("secrets"), "secrets"))
        ],
    )


def load_pipeline(path: Union[str, Path]) -> PipelineDefinition:
    """Lê e parseia um arquivo de pipeline."""
    p = Path(path)
    if not p.exists():
        raise PipelineParseError(f"pipeline file not found: {p}")
    return parse_pipeline(p.read_bytes())
