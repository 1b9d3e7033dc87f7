# src/canoe_paddle/core/config/__init__.py
"""
Camada de configuração do canoe-paddle.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Materialização de `PaddleSettings` (com overrides de ambiente)
    - Hash canônico para rastreabilidade

Limites explícitos:
    - Não impõe um schema completo de configuração
    - Não interage com o compilador ou com o storage diretamente
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, compute_text_hash
from .loader import DEFAULT_CONFIG, default_config_path, load_config
from .merge import deep_merge
from .settings import PaddleSettings, configure_logging, load_settings

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "compute_text_hash",
    "DEFAULT_CONFIG",
    "default_config_path",
    "load_config",
    "deep_merge",
    "PaddleSettings",
    "configure_logging",
    "load_settings",
]
