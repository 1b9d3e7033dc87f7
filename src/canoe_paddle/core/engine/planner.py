# src/canoe_paddle/core/engine/planner.py
"""
Planejamento de uma compilação.

Seleciona os steps a compilar e valida, antes de qualquer override ou
renderização, que a seleção é resolvível.

Invariantes:
    - A ordem dos steps selecionados é a ordem de declaração no documento
    - Nomes desconhecidos são erro fatal (UnknownStepError) e nenhuma
      mutação acontece antes dessa validação
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from canoe_paddle.core.pipeline.model import PipelineDefinition, PipelineStep


@dataclass(frozen=True)
class CompilePlan:
    selected: List[PipelineStep]
    skipped: List[str] = field(default_factory=list)

    def selected_names(self) -> List[str]:
        return [s.step for s in self.selected]


def plan_compilation(
    definition: PipelineDefinition,
    steps: Optional[Iterable[str]] = None,
) -> CompilePlan:
    selected = definition.select_steps(steps)
    chosen = {s.step for s in selected}
    skipped = [name for name in definition.step_names() if name not in chosen]
    return CompilePlan(selected=selected, skipped=skipped)
