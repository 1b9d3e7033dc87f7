# src/canoe_paddle/core/engine/context.py
"""
Contexto de uma compilação.

O `CompileContext` acumula, para uma única chamada de
`PipelineCompiler.compile()`, os eventos estruturados, os warnings não
fatais por step e o payload de erro do step que falhou.

Invariantes:
    - Eventos sempre incluem `compile_id` e `step`
    - Warnings são agrupados por step
    - Um contexto pertence a uma única compilação

Limites explícitos:
    - Não compila nada
    - Não persiste eventos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from canoe_paddle.core.errors import PaddleErrorPayload


# step usado para eventos que não pertencem a um step específico
PIPELINE_SCOPE = "*"


@dataclass
class CompileContext:
    compile_id: str
    created_at: datetime
    pipeline: str
    settings_hash: str = ""

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)
    error: Optional[PaddleErrorPayload] = field(default=None, init=False)

    def log(self, *, step: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "compile_id": self.compile_id,
            "step": step,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step: str, message: str) -> None:
        if step not in self.warnings:
            self.warnings[step] = []
        self.warnings[step].append(message)
