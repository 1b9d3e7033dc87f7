# src/canoe_paddle/core/pipeline/__init__.py
"""
# Pipeline Definition (canoe-paddle)

Este pacote define o modelo declarativo de um pipeline, o parser do
documento YAML e as operações de override aplicadas antes da compilação.

## Componentes

- **model**: `PipelineDefinition`, `PipelineStep`, `InputReference`, `ResourceRequest`
- **parser**: `parse_pipeline`, `load_pipeline`
- **defaults**: adapter da sintaxe `default('X')` do executor legado
- **errors**: `PipelineError`, `PipelineParseError`, `DuplicateStepError`, `UnknownStepError`

## Limites Explícitos

- Não compila pods (ver `core.compiler`)
- Não acessa o storage remoto
"""

from .defaults import OptionalDefault, parse_optional_default
from .errors import DuplicateStepError, PipelineError, PipelineParseError, UnknownStepError
from .model import InputReference, PipelineDefinition, PipelineStep, ResourceRequest
from .parser import load_pipeline, parse_pipeline

__all__ = [
    "OptionalDefault",
    "parse_optional_default",
    "PipelineError",
    "PipelineParseError",
    "DuplicateStepError",
    "UnknownStepError",
    "InputReference",
    "PipelineDefinition",
    "PipelineStep",
    "ResourceRequest",
    "load_pipeline",
    "parse_pipeline",
]
