# src/canoe_paddle/core/engine/__init__.py
"""
Fachada de compilação do canoe-paddle.

Componentes principais:
    - planner → seleção validada dos steps (ordem de declaração)
    - context → eventos estruturados, warnings e erro da compilação
    - engine  → `PipelineCompiler`: overrides + build + render por step
"""

from .context import PIPELINE_SCOPE, CompileContext
from .engine import CompiledUnit, CompileOptions, CompileResult, PipelineCompiler, compile_pipeline
from .planner import CompilePlan, plan_compilation

__all__ = [
    "PIPELINE_SCOPE",
    "CompileContext",
    "CompiledUnit",
    "CompileOptions",
    "CompileResult",
    "PipelineCompiler",
    "compile_pipeline",
    "CompilePlan",
    "plan_compilation",
]
