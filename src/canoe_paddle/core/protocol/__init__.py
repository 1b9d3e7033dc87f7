# src/canoe_paddle/core/protocol/__init__.py
"""
Protocolo de coordenação main/paddle.

Os dois processos de um pod sincronizam-se exclusivamente pela existência
de sentinelas write-once no volume compartilhado: sem IPC, sem memória
compartilhada, sem sinalização mediada pelo orquestrador.

Componentes:
    - sentinels → nomes das sentinelas e `SentinelVolume`
    - machines  → `MainProcess`, `PaddleProcess`, `run_locally`
"""

from .errors import ProtocolError, ProtocolTimeoutError, SentinelAlreadyWrittenError
from .machines import (
    MainProcess,
    MainState,
    PaddleProcess,
    PaddleState,
    run_locally,
    shell_commands,
    wait_for_any,
)
from .sentinels import (
    ALL_SENTINELS,
    FIRST_STEP,
    MAIN_DONE,
    MAIN_FAILED,
    MAIN_PASSED,
    SentinelVolume,
)

__all__ = [
    "ProtocolError",
    "ProtocolTimeoutError",
    "SentinelAlreadyWrittenError",
    "MainProcess",
    "MainState",
    "PaddleProcess",
    "PaddleState",
    "run_locally",
    "shell_commands",
    "wait_for_any",
    "ALL_SENTINELS",
    "FIRST_STEP",
    "MAIN_DONE",
    "MAIN_FAILED",
    "MAIN_PASSED",
    "SentinelVolume",
]
