# src/canoe_paddle/core/config/settings.py
"""
Settings tipados do canoe-paddle.

`PaddleSettings` substitui o estado global de flags da CLI
por um valor explícito, passado para quem precisa dele (compilador,
transferência de objetos, máquinas de estado do protocolo).

Precedência (maior primeiro):
    1. variáveis de ambiente com o nome da chave em maiúsculas
       (ex.: `BUCKET`, `AWS_REGION`, `POLL_INTERVAL_SECONDS`)
    2. arquivo local (`--config` ou `~/.paddle.yaml`)
    3. `DEFAULT_CONFIG`
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigFileNotFoundError, InvalidSettingError
from .hashing import compute_config_hash
from .loader import DEFAULT_CONFIG, default_config_path, load_config


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class PaddleSettings:
    """
    Configuração efetiva de uma execução.

    Campos:
        - bucket: bucket default (usado quando o pipeline não declara um)
        - aws_region: região exportada para o container paddle
        - paddle_image: imagem do container paddle
        - main_credentials_secret: secret com as credenciais AWS do container main
        - paddle_credentials_secret: secret com as credenciais AWS do container paddle
        - data_path: ponto de montagem do volume compartilhado
        - poll_interval_seconds: intervalo entre verificações de sentinela
        - timeout_seconds: prazo máximo de espera de cada loop de polling
        - log_level: nível do logging
    """

    bucket: str = DEFAULT_CONFIG["bucket"]
    aws_region: str = DEFAULT_CONFIG["aws_region"]
    paddle_image: str = DEFAULT_CONFIG["paddle_image"]
    main_credentials_secret: str = DEFAULT_CONFIG["main_credentials_secret"]
    paddle_credentials_secret: str = DEFAULT_CONFIG["paddle_credentials_secret"]
    data_path: str = DEFAULT_CONFIG["data_path"]
    poll_interval_seconds: float = DEFAULT_CONFIG["poll_interval_seconds"]
    timeout_seconds: float = DEFAULT_CONFIG["timeout_seconds"]
    log_level: str = DEFAULT_CONFIG["log_level"]

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type in ("str", str) and not isinstance(value, str):
                raise InvalidSettingError(f"{f.name} must be a string, got {type(value).__name__}")
        if not self.data_path.startswith("/"):
            raise InvalidSettingError(f"data_path must be absolute, got {self.data_path!r}")
        if self.poll_interval_seconds <= 0:
            raise InvalidSettingError("poll_interval_seconds must be > 0")
        if self.timeout_seconds <= 0:
            raise InvalidSettingError("timeout_seconds must be > 0")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidSettingError(f"log_level must be one of {sorted(_LOG_LEVELS)}")

    @classmethod
    def from_mapping(
        cls,
        cfg: Mapping[str, Any],
        env: Optional[Mapping[str, str]] = None,
    ) -> "PaddleSettings":
        """Materializa settings a partir da configuração resolvida (+ ambiente)."""
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name in cfg:
                values[f.name] = cfg[f.name]
            if env is not None and f.name.upper() in env:
                values[f.name] = env[f.name.upper()]

        for name in ("poll_interval_seconds", "timeout_seconds"):
            if name in values:
                values[name] = _as_float(name, values[name])

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def fingerprint(self) -> str:
        return compute_config_hash(self.to_dict())


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidSettingError(f"{name} must be a number, got bool")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidSettingError(f"{name} must be a number, got {value!r}") from e


def load_settings(
    config_path: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> PaddleSettings:
    """
    Resolve `PaddleSettings` a partir de arquivo + ambiente.

    Um `config_path` explícito precisa existir; o arquivo implícito no
    home é opcional.
    """
    if config_path is not None:
        if not Path(config_path).exists():
            raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {config_path}")
        local: Optional[Path] = Path(config_path)
    else:
        local = default_config_path(home)

    cfg = load_config(local_path=str(local) if local is not None else None)
    return PaddleSettings.from_mapping(cfg, env=env)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
