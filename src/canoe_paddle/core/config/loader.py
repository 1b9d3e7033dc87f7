# src/canoe_paddle/core/config/loader.py
"""
Loader canônico de configuração do canoe-paddle.

A configuração é resolvida a partir de:
    - uma base: os defaults embutidos (`DEFAULT_CONFIG`) ou um arquivo
      de defaults explícito
    - um arquivo local de overrides (opcional, ex.: `~/.paddle.yaml`)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Overrides locais têm precedência sobre a base
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam a base

Limites explícitos:
    - Não valida semântica (ver `settings.PaddleSettings`)
    - Não lê variáveis de ambiente
"""

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


DEFAULT_CONFIG: Dict[str, Any] = {
    "bucket": "",
    "aws_region": "eu-west-1",
    "paddle_image": "paddlecontainer:latest",
    "main_credentials_secret": "aws-credentials-training",
    "paddle_credentials_secret": "aws-credentials",
    "data_path": "/data",
    "poll_interval_seconds": 1.0,
    "timeout_seconds": 86400.0,
    "log_level": "INFO",
}

CONFIG_SUFFIXES = (".yaml", ".yml", ".json")


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - Arquivos vazios são interpretados como dicionários vazios
        - O conteúdo raiz deve ser um dicionário

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def default_config_path(home: Optional[Path] = None) -> Optional[Path]:
    """
    Localiza o arquivo `.paddle.{yaml,yml,json}` no diretório home.

    Retorna None quando nenhum arquivo existe.
    """
    base = home if home is not None else Path.home()
    for suffix in CONFIG_SUFFIXES:
        candidate = base / f".paddle{suffix}"
        if candidate.exists():
            return candidate
    return None


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - Sem `defaults_path`, a base é `DEFAULT_CONFIG`
        - Com `defaults_path`, o arquivo é obrigatório
        - O arquivo local é opcional; quando presente, tem prioridade

    Args:
        defaults_path (Optional[str]): Caminho para um arquivo de configuração base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        ConfigFileNotFoundError: Se `defaults_path` for informado e não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    if defaults_path is not None:
        effective = _load_file(Path(defaults_path))
    else:
        effective = deepcopy(DEFAULT_CONFIG)

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            local = _load_file(local_file)
            effective = deep_merge(effective, local)

    return effective
