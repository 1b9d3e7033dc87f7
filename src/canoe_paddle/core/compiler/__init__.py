# src/canoe_paddle/core/compiler/__init__.py
"""
Compilador de unidades de execução.

    PipelineDefinition + PipelineStep → PodDefinition → manifest YAML
"""

from .errors import CompilerError, MissingBucketError, RenderError, SecretBindingError
from .pod import (
    PodDefinition,
    PodSecret,
    build_pod_definition,
    parse_secret_binding,
    resolve_bucket,
)
from .protocol import conjunction, input_command, main_command, paddle_command
from .render import SHARED_VOLUME, build_manifest, render_pod

__all__ = [
    "CompilerError",
    "MissingBucketError",
    "RenderError",
    "SecretBindingError",
    "PodDefinition",
    "PodSecret",
    "build_pod_definition",
    "parse_secret_binding",
    "resolve_bucket",
    "conjunction",
    "input_command",
    "main_command",
    "paddle_command",
    "SHARED_VOLUME",
    "build_manifest",
    "render_pod",
]
