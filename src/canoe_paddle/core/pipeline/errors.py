# src/canoe_paddle/core/pipeline/errors.py
"""
Exceções canônicas da definição de pipeline.

Hierarquia:
    PipelineError
    ├── PipelineParseError   → documento malformado (YAML inválido ou estrutura inesperada)
    │   └── DuplicateStepError → dois steps com o mesmo nome
    └── UnknownStepError     → seleção de step inexistente no pipeline

Decisões arquiteturais:
    - Falhas de parse são retornadas como exceção tipada ao chamador,
      nunca encerram o processo
    - O chamador (CLI) decide se aborta ou não
"""


class PipelineError(Exception):
    """Erro base do domínio de definição de pipeline."""


class PipelineParseError(PipelineError):
    """Documento de pipeline não está em conformidade com a estrutura esperada."""


class DuplicateStepError(PipelineParseError):
    """
    Exceção levantada quando o documento declara dois steps com o mesmo nome.

    O nome do step compõe o nome do pod e a chave de commit no storage.
    Não há "last-write-wins".
    """


class UnknownStepError(PipelineError, KeyError):
    """Step solicitado não existe na definição do pipeline."""

    def __str__(self) -> str:
        return Exception.__str__(self)
