# src/canoe_paddle/core/compiler/errors.py
"""Erros do compilador de unidades de execução."""


class CompilerError(Exception):
    """Erro base do compilador."""


class SecretBindingError(CompilerError, ValueError):
    """Binding de secret malformado (esperado: ENV_NAME:secret-store:secret-key)."""


class RenderError(CompilerError, RuntimeError):
    """
    Falha ao compor o manifest a partir do template estrutural.

    É sempre um erro de programação (template ou descritor inconsistente),
    nunca uma condição recuperável pelo usuário.
    """


class MissingBucketError(CompilerError, ValueError):
    """Pipeline sem bucket e nenhum bucket padrão configurado."""
