# src/canoe_paddle/core/pipeline/model.py
"""
Modelo canônico da definição de pipeline do canoe-paddle.

Um pipeline é uma sequência ordenada de steps. Cada step roda uma imagem
de container com uma lista de comandos, consome artefatos produzidos por
outros steps (InputReference) e publica seu próprio output no storage
remoto sob a identidade step/version/branch.

Componentes principais:
    - ResourceRequest    → limites de cpu, memória e storage do step
    - InputReference     → ponteiro para o output de outro step
    - PipelineStep       → unidade de trabalho (compilada em um pod)
    - PipelineDefinition → pipeline completo (nome, bucket, namespace, steps)

Ciclo de vida:
    - A definição é criada uma única vez a partir do documento parseado
    - Overrides (tag, version, branch) mutam a definição in-place
    - O compilador lê a definição uma vez por step

Invariantes:
    - String vazia é o sentinela "não alterar" dos overrides; nunca é um
      valor-alvo válido
    - O override em cascata para os inputs só ocorre quando solicitado
      explicitamente pelo chamador
    - A imagem é assumida no formato "repositorio:tag"; segmentos
      adicionais separados por ":" são descartados no override de tag

Limites explícitos:
    - Não persiste a definição
    - Não valida existência das imagens ou dos steps referenciados em inputs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import UnknownStepError


@dataclass
class ResourceRequest:
    """Limites de recursos declarados para o container principal do step."""

    cpu: int = 0
    memory: str = ""
    storage_mb: int = 0


@dataclass
class InputReference:
    """
    Referência ao artefato produzido por outro step.

    Campos:
        - step: nome do step produtor
        - version: versão do artefato
        - branch: branch do artefato
        - path: commit a ser buscado ("" equivale a HEAD)
        - bucket: override opcional do bucket do pipeline ("" = sem override)
    """

    step: str = ""
    version: str = ""
    branch: str = ""
    path: str = ""
    bucket: str = ""


@dataclass
class PipelineStep:
    """
    Step declarado no documento de pipeline.

    Os três métodos `override_*` são setters idempotentes: chamá-los
    repetidamente com o mesmo valor não vazio produz o mesmo estado, e
    chamá-los com string vazia não altera nada.
    """

    step: str = ""
    version: str = ""
    branch: str = ""
    image: str = ""
    inputs: List[InputReference] = field(default_factory=list)
    commands: List[str] = field(default_factory=list)
    resources: ResourceRequest = field(default_factory=ResourceRequest)

    def override_tag(self, tag: str) -> None:
        if not tag:
            return
        repository = self.image.split(":")[0]
        self.image = f"{repository}:{tag}"

    def override_version(self, version: str, override_inputs: bool = False) -> None:
        if not version:
            return
        self.version = version
        if override_inputs:
            for ref in self.inputs:
                ref.version = version

    def override_branch(self, branch: str, override_inputs: bool = False) -> None:
        if not branch:
            return
        self.branch = branch
        if override_inputs:
            for ref in self.inputs:
                ref.branch = branch


@dataclass
class PipelineDefinition:
    """Pipeline completo, tal como declarado no documento."""

    pipeline: str = ""
    bucket: str = ""
    namespace: str = ""
    steps: List[PipelineStep] = field(default_factory=list)
    secrets: List[str] = field(default_factory=list)

    def step_names(self) -> List[str]:
        return [s.step for s in self.steps]

    def get_step(self, name: str) -> PipelineStep:
        for s in self.steps:
            if s.step == name:
                return s
        raise UnknownStepError(f"Unknown step '{name}' in pipeline '{self.pipeline}'")

    def select_steps(self, names: Optional[Iterable[str]] = None) -> List[PipelineStep]:
        """
        Retorna os steps selecionados, preservando a ordem de declaração.

        Sem seleção (None ou vazio), todos os steps são retornados.
        Nomes inexistentes levantam UnknownStepError antes de qualquer mutação.
        """
        wanted = list(names or [])
        if not wanted:
            return list(self.steps)

        known = set(self.step_names())
        for name in wanted:
            if name not in known:
                raise UnknownStepError(f"Unknown step '{name}' in pipeline '{self.pipeline}'")

        selected = set(wanted)
        return [s for s in self.steps if s.step in selected]

    def apply_overrides(
        self,
        *,
        tag: str = "",
        version: str = "",
        branch: str = "",
        override_inputs: bool = False,
        steps: Optional[Iterable[str]] = None,
    ) -> None:
        """Aplica tag/version/branch aos steps selecionados (in-place)."""
        for s in self.select_steps(steps):
            s.override_tag(tag)
            s.override_version(version, override_inputs)
            s.override_branch(branch, override_inputs)
