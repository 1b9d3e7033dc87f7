# src/canoe_paddle/core/engine/engine.py
"""
Fachada de compilação do canoe-paddle.

    PipelineDefinition + PaddleSettings + CompileOptions
        → plan (seleção validada)
        → overrides (in-place na definição)
        → PodDefinition + secrets → manifest, um por step

`CompileOptions` é o valor explícito que substitui as flags globais da CLI
(tag, version, branch, override de inputs, steps, secrets).

Decisões arquiteturais:
    - a seleção é validada antes de qualquer override (nada muta se um
      nome de step for desconhecido)
    - falhas não são engolidas: o payload do erro é registrado no
      `CompileContext` e a exceção original é relançada
    - unidades são produzidas na ordem de declaração dos steps

Limites explícitos:
    - não submete pods ao cluster
    - não acessa o storage remoto
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from canoe_paddle.core.compiler.pod import (
    PodSecret,
    build_pod_definition,
    parse_secret_binding,
    resolve_bucket,
)
from canoe_paddle.core.compiler.render import render_pod
from canoe_paddle.core.config.hashing import compute_text_hash
from canoe_paddle.core.config.settings import PaddleSettings
from canoe_paddle.core.errors import error_payload_from_exception
from canoe_paddle.core.pipeline.model import PipelineDefinition, PipelineStep

from .context import PIPELINE_SCOPE, CompileContext
from .planner import plan_compilation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileOptions:
    tag: str = ""
    version: str = ""
    branch: str = ""
    override_inputs: bool = False
    steps: Sequence[str] = ()
    secrets: Sequence[str] = ()


@dataclass(frozen=True)
class CompiledUnit:
    step: str
    pod_name: str
    manifest: str
    manifest_hash: str


@dataclass(frozen=True)
class CompileResult:
    units: Dict[str, CompiledUnit] = field(default_factory=dict)
    skipped: List[str] = field(default_factory=list)

    def manifests(self) -> List[str]:
        return [u.manifest for u in self.units.values()]


class PipelineCompiler:
    """Compila os steps selecionados de um pipeline em manifests de pod."""

    def __init__(
        self,
        definition: PipelineDefinition,
        settings: Optional[PaddleSettings] = None,
        options: Optional[CompileOptions] = None,
        *,
        ctx: Optional[CompileContext] = None,
    ) -> None:
        self.definition = definition
        self.settings = settings or PaddleSettings()
        self.options = options or CompileOptions()
        self.ctx = ctx or CompileContext(
            compile_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            pipeline=definition.pipeline,
            settings_hash=self.settings.fingerprint(),
        )

    def _fail(self, exc: Exception, step: str) -> None:
        payload = error_payload_from_exception(exc, step=None if step == PIPELINE_SCOPE else step)
        self.ctx.error = payload
        self.ctx.log(step=step, level="error", message=payload.message, error=payload.to_dict())
        logger.error("compilation failed at %s: %s", step, exc)

    def _secrets(self) -> List[PodSecret]:
        bindings = list(self.definition.secrets) + list(self.options.secrets)
        return [parse_secret_binding(b) for b in bindings]

    def _check_step(self, step: PipelineStep) -> None:
        if not step.image:
            self.ctx.add_warning(step=step.step, message="step has no image")
        if not step.commands:
            self.ctx.add_warning(step=step.step, message="step has no commands; main will run `true`")

    def _compile_step(self, step: PipelineStep, secrets: List[PodSecret]) -> CompiledUnit:
        pod = build_pod_definition(self.definition, step, self.settings).with_secrets(secrets)
        manifest = render_pod(pod)
        return CompiledUnit(
            step=step.step,
            pod_name=pod.pod_name,
            manifest=manifest,
            manifest_hash=compute_text_hash(manifest),
        )

    def compile(self) -> CompileResult:
        opts = self.options
        self.ctx.log(step=PIPELINE_SCOPE, level="info", message="compilation started")

        try:
            # toda validação antes de qualquer mutação da definição
            plan = plan_compilation(self.definition, opts.steps)
            secrets = self._secrets()
            resolve_bucket(self.definition, self.settings)
            self.definition.apply_overrides(
                tag=opts.tag,
                version=opts.version,
                branch=opts.branch,
                override_inputs=opts.override_inputs,
                steps=plan.selected_names() if opts.steps else None,
            )
        except Exception as e:
            self._fail(e, PIPELINE_SCOPE)
            raise

        units: Dict[str, CompiledUnit] = {}
        owners: Dict[str, str] = {}
        for step in plan.selected:
            self._check_step(step)
            try:
                unit = self._compile_step(step, secrets)
            except Exception as e:
                self._fail(e, step.step)
                raise

            if unit.pod_name in owners:
                self.ctx.add_warning(
                    step=step.step,
                    message=f"pod name {unit.pod_name} collides with step {owners[unit.pod_name]}",
                )
            owners[unit.pod_name] = step.step
            units[step.step] = unit
            self.ctx.log(
                step=step.step,
                level="info",
                message="unit compiled",
                pod_name=unit.pod_name,
                manifest_hash=unit.manifest_hash,
            )
            logger.debug("compiled %s as pod %s", step.step, unit.pod_name)

        for name in plan.skipped:
            self.ctx.log(step=name, level="info", message="skipped (not selected)")

        logger.info(
            "compiled %d unit(s) for pipeline %s (%d skipped)",
            len(units),
            self.definition.pipeline,
            len(plan.skipped),
        )
        return CompileResult(units=units, skipped=list(plan.skipped))


def compile_pipeline(
    definition: PipelineDefinition,
    settings: Optional[PaddleSettings] = None,
    options: Optional[CompileOptions] = None,
) -> CompileResult:
    return PipelineCompiler(definition, settings, options).compile()
