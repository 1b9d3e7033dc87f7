# src/canoe_paddle/core/errors.py
"""
Payload canônico de erros do canoe-paddle.

Exceções continuam sendo o mecanismo de propagação; este módulo apenas as
converte em uma estrutura serializável para o log de eventos da compilação
(`CompileContext`) e para quem reporta falhas ao operador.

Os códigos de tipo são estáveis (não são texto livre).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type

from canoe_paddle.core.compiler.errors import MissingBucketError, RenderError, SecretBindingError
from canoe_paddle.core.config.errors import ConfigError
from canoe_paddle.core.pipeline.errors import (
    DuplicateStepError,
    PipelineParseError,
    UnknownStepError,
)
from canoe_paddle.core.protocol.errors import ProtocolError
from canoe_paddle.core.storage.errors import MissingKeysError, StorageError


@dataclass(frozen=True)
class PaddleErrorPayload:
    """
    Campos:
    - type: código estável do erro
    - message: mensagem curta e objetiva
    - details: dados estruturados para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Pipeline
PIPELINE_PARSE_ERROR = "PIPELINE_PARSE_ERROR"
PIPELINE_DUPLICATE_STEP = "PIPELINE_DUPLICATE_STEP"
PIPELINE_UNKNOWN_STEP = "PIPELINE_UNKNOWN_STEP"

# Storage
STORAGE_MISSING_KEYS = "STORAGE_MISSING_KEYS"
STORAGE_ERROR = "STORAGE_ERROR"

# Compilador
COMPILER_RENDER_ERROR = "COMPILER_RENDER_ERROR"
COMPILER_SECRET_BINDING_ERROR = "COMPILER_SECRET_BINDING_ERROR"
COMPILER_MISSING_BUCKET = "COMPILER_MISSING_BUCKET"

# Configuração / protocolo
CONFIG_ERROR = "CONFIG_ERROR"
PROTOCOL_ERROR = "PROTOCOL_ERROR"

UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


# ordem importa: subclasses antes das bases
_CATALOG: List[Tuple[Type[BaseException], str, str]] = [
    (DuplicateStepError, PIPELINE_DUPLICATE_STEP, "Renomeie um dos steps: nomes precisam ser únicos no pipeline."),
    (PipelineParseError, PIPELINE_PARSE_ERROR, "Corrija o documento de pipeline (YAML e tipos dos campos)."),
    (UnknownStepError, PIPELINE_UNKNOWN_STEP, "Use apenas nomes de step declarados no pipeline."),
    (MissingKeysError, STORAGE_MISSING_KEYS, "Verifique as chaves solicitadas e o commit (path) do input."),
    (StorageError, STORAGE_ERROR, "Verifique bucket, prefixo e credenciais do store."),
    (SecretBindingError, COMPILER_SECRET_BINDING_ERROR, "Use o formato ENV_NAME:secret-store:secret-key."),
    (MissingBucketError, COMPILER_MISSING_BUCKET, "Declare `bucket` no pipeline ou configure o bucket padrão."),
    (RenderError, COMPILER_RENDER_ERROR, None),
    (ConfigError, CONFIG_ERROR, "Revise o arquivo de configuração e as variáveis de ambiente."),
    (ProtocolError, PROTOCOL_ERROR, None),
]


def error_payload_from_exception(
    exc: BaseException,
    *,
    step: Optional[str] = None,
) -> PaddleErrorPayload:
    """Converte uma exceção em payload; exceções desconhecidas viram UNEXPECTED_ERROR."""
    details: Dict[str, Any] = {"exception_class": exc.__class__.__name__}
    if step is not None:
        details["step"] = step
    if isinstance(exc, MissingKeysError):
        details["missing_keys"] = list(exc.keys)

    for cls, code, hint in _CATALOG:
        if isinstance(exc, cls):
            return PaddleErrorPayload(type=code, message=str(exc), details=details, hint=hint)

    return PaddleErrorPayload(
        type=UNEXPECTED_ERROR,
        message=str(exc) or "Erro inesperado",
        details=details,
        hint="Verifique o log técnico.",
    )
