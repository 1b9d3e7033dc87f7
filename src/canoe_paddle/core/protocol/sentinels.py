# src/canoe_paddle/core/protocol/sentinels.py
"""
Sentinelas do protocolo main/paddle.

Os dois containers do pod nunca se comunicam diretamente: eles apenas
verificam a *existência* de arquivos vazios no volume compartilhado.

    first-step.txt   paddle → main   inputs prontos
    main-passed.txt  main → paddle   comandos concluídos com sucesso
    main-failed.txt  main → paddle   algum comando falhou (exclusivo com passed)
    main.txt         main            marcador final, escrito em qualquer desfecho

Cada sentinela tem exatamente um escritor e é escrita no máximo uma vez;
leitores só verificam existência, nunca conteúdo.
"""

from __future__ import annotations

from pathlib import Path

from .errors import SentinelAlreadyWrittenError


FIRST_STEP = "first-step.txt"
MAIN_PASSED = "main-passed.txt"
MAIN_FAILED = "main-failed.txt"
MAIN_DONE = "main.txt"

ALL_SENTINELS = (FIRST_STEP, MAIN_PASSED, MAIN_FAILED, MAIN_DONE)


class SentinelVolume:
    """Volume compartilhado visto como um conjunto de flags write-once."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path(self, name: str) -> Path:
        return self.root / name

    def is_set(self, name: str) -> bool:
        return self.path(name).exists()

    def signal(self, name: str) -> None:
        """Escreve a sentinela; uma segunda escrita é erro."""
        try:
            # modo "x" falha se o arquivo já existir
            with self.path(name).open("x"):
                pass
        except FileExistsError:
            raise SentinelAlreadyWrittenError(f"sentinel already written: {name}") from None
