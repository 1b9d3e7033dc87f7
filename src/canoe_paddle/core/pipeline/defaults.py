# src/canoe_paddle/core/pipeline/defaults.py
"""
Adapter da sintaxe de default opcional herdada do executor Ansible.

Definições de pipeline antigas eram também consumidas por um executor
Ansible, e por isso alguns campos carregam uma expressão de template no
formato:

    {{ bucket | default('meu-bucket') }}

Este adapter isola o reconhecimento dessa sintaxe: ele extrai o literal
entre aspas simples de `default('...')`. Quando a expressão não está
presente, o valor bruto é utilizado sem alteração.

Limites explícitos:
    - Não avalia templates Jinja/Ansible
    - Apenas o primeiro `default('...')` do valor é considerado
    - Literais vazios (`default('')`) não são considerados defaults
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


_DEFAULT_EXPRESSION = re.compile(r"default\('(.+)'\)")


@dataclass(frozen=True)
class OptionalDefault:
    """Valor bruto de um campo e o default declarado nele (se houver)."""

    raw: str
    default: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def resolve(self) -> str:
        """Retorna o default declarado ou, na ausência dele, o valor bruto."""
        if self.default is not None:
            return self.default
        return self.raw


def parse_optional_default(raw: str) -> OptionalDefault:
    match = _DEFAULT_EXPRESSION.search(raw)
    if match is None:
        return OptionalDefault(raw=raw)
    return OptionalDefault(raw=raw, default=match.group(1))
