# src/canoe_paddle/core/config/errors.py
"""
Exceções canônicas da camada de configuração do canoe-paddle.

Esta hierarquia cobre o carregamento dos arquivos de configuração
(`~/.paddle.yaml` ou caminho explícito), o deep-merge com os defaults
embutidos e a materialização de `PaddleSettings`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de pipeline, compilação ou storage

Limites explícitos:
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """Exceção base para erros relacionados à configuração do canoe-paddle."""


class ConfigFileNotFoundError(ConfigError):
    """
    Exceção levantada quando um arquivo de configuração explicitamente
    informado não existe.

    Decisões arquiteturais:
        - Um caminho explícito (`--config`) ausente é erro
        - O arquivo local implícito (`~/.paddle.yaml`) é opcional e não
          levanta esta exceção
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo de configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"poll_interval_seconds": 1}
        - override: {"poll_interval_seconds": {"value": 2}}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingError(ConfigError):
    """Valor de configuração com tipo ou faixa inválidos para PaddleSettings."""
