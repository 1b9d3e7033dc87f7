# src/canoe_paddle/core/naming.py
"""
Normalização canônica de identificadores do canoe-paddle.

Este módulo converte identificadores livres (nome do pipeline, do step,
branch e versão) em tokens seguros para uso em manifests Kubernetes e
em chaves de objetos no storage remoto.

Regras (v1):
    - todo o texto é convertido para minúsculas
    - "_" é substituído por "-"
    - "/" é substituído por "-"

Invariantes:
    - A função é total: nunca levanta exceção para uma string
    - O resultado nunca contém "_" nem "/"
    - sanitize_name(sanitize_name(x)) == sanitize_name(x)

Limites explícitos:
    - Não valida o tamanho máximo de nomes DNS-1123
    - Não remove outros caracteres inválidos para Kubernetes
"""

from __future__ import annotations


_REPLACED_CHARS = ("_", "/")


def sanitize_name(name: str) -> str:
    """Retorna o token normalizado (minúsculo, sem "_" nem "/")."""
    token = name.lower()
    for char in _REPLACED_CHARS:
        token = token.replace(char, "-")
    return token
