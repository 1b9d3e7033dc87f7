# src/canoe_paddle/core/config/hashing.py
"""
Hashing canônico (SHA-256 sobre JSON canônico).

Usado para:
    - identificar a configuração efetiva de uma compilação
    - identificar o texto de cada manifest renderizado

Política (v1):
    - JSON com chaves ordenadas e separadores compactos
    - UTF-8, SHA-256, saída hexadecimal de 64 caracteres
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """Gera o hash determinístico de um dicionário de configuração."""
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def compute_text_hash(text: str) -> str:
    """Gera o hash SHA-256 de um texto (ex.: manifest renderizado)."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
