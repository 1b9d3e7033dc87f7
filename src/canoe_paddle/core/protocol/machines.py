# src/canoe_paddle/core/protocol/machines.py
"""
Máquinas de estado dos processos main e paddle.

Reimplementação em Python do mesmo handshake que o manifest renderizado
executa em shell, útil para execução local de um step e para testes do
protocolo. A única comunicação entre os dois lados continua sendo a
existência de sentinelas no volume compartilhado.

main:
    WAIT_FOR_INPUT → RUN → PASSED | FAILED → DONE

paddle:
    FETCH → SIGNAL → WAIT_FOR_RESULT → COMMIT → DONE
                   (main-failed observado, ou falha no fetch) → FAILED

Polling:
    - todo polling respeita `poll_interval` e um `timeout` obrigatório
    - main em timeout escreve main-failed.txt e main.txt e sai com 1
    - paddle em timeout sai com 1 sem commit

Relógio e sleep são injetáveis para testes determinísticos.
"""

from __future__ import annotations

import logging
import subprocess
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import ProtocolError, ProtocolTimeoutError
from .sentinels import FIRST_STEP, MAIN_DONE, MAIN_FAILED, MAIN_PASSED, SentinelVolume


logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], None]


class MainState(str, Enum):
    WAIT_FOR_INPUT = "wait_for_input"
    RUN = "run"
    PASSED = "passed"
    FAILED = "failed"
    DONE = "done"


class PaddleState(str, Enum):
    FETCH = "fetch"
    SIGNAL = "signal"
    WAIT_FOR_RESULT = "wait_for_result"
    COMMIT = "commit"
    DONE = "done"
    FAILED = "failed"


def wait_for_any(
    volume: SentinelVolume,
    names: Sequence[str],
    *,
    poll_interval: float,
    timeout: float,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> str:
    """
    Aguarda até que alguma sentinela de `names` exista.

    A ordem de `names` define a prioridade quando mais de uma já existe.

    Raises:
        ProtocolTimeoutError: se nenhuma aparecer dentro do prazo.
    """
    deadline = clock() + timeout
    while True:
        for name in names:
            if volume.is_set(name):
                return name
        if clock() >= deadline:
            raise ProtocolTimeoutError(
                f"timed out after {timeout}s waiting for {', '.join(names)}"
            )
        sleep(poll_interval)


@dataclass
class MainProcess:
    """Lado main: espera os inputs, roda os comandos e publica o desfecho."""

    volume: SentinelVolume
    run_commands: Callable[[], bool]
    poll_interval: float = 1.0
    timeout: float = 86400.0
    clock: Clock = time.monotonic
    sleep: Sleep = time.sleep

    history: List[MainState] = field(default_factory=list, init=False)
    error: Optional[Exception] = field(default=None, init=False)

    @property
    def state(self) -> Optional[MainState]:
        return self.history[-1] if self.history else None

    def _enter(self, state: MainState) -> None:
        self.history.append(state)
        logger.debug("main -> %s", state.value)

    def run(self) -> int:
        self._enter(MainState.WAIT_FOR_INPUT)
        try:
            wait_for_any(
                self.volume,
                [FIRST_STEP],
                poll_interval=self.poll_interval,
                timeout=self.timeout,
                clock=self.clock,
                sleep=self.sleep,
            )
        except ProtocolTimeoutError as e:
            self.error = e
            logger.error("main: %s", e)
            return self._finish(passed=False)

        self._enter(MainState.RUN)
        try:
            passed = bool(self.run_commands())
        except Exception as e:
            # o desfecho do processo é reportado via sentinela e exit code
            self.error = e
            logger.exception("main: commands raised")
            passed = False
        return self._finish(passed=passed)

    def _finish(self, *, passed: bool) -> int:
        if passed:
            self._enter(MainState.PASSED)
            self.volume.signal(MAIN_PASSED)
        else:
            self._enter(MainState.FAILED)
            self.volume.signal(MAIN_FAILED)
        self._enter(MainState.DONE)
        self.volume.signal(MAIN_DONE)
        return 0 if passed else 1


@dataclass
class PaddleProcess:
    """Lado paddle: prepara inputs, sinaliza o main e faz commit do output."""

    volume: SentinelVolume
    fetch_inputs: Callable[[], bool]
    commit_outputs: Callable[[], bool]
    poll_interval: float = 1.0
    timeout: float = 86400.0
    clock: Clock = time.monotonic
    sleep: Sleep = time.sleep

    history: List[PaddleState] = field(default_factory=list, init=False)
    error: Optional[Exception] = field(default=None, init=False)

    @property
    def state(self) -> Optional[PaddleState]:
        return self.history[-1] if self.history else None

    def _enter(self, state: PaddleState) -> None:
        self.history.append(state)
        logger.debug("paddle -> %s", state.value)

    def _call(self, action: Callable[[], bool], what: str) -> bool:
        try:
            return bool(action())
        except Exception as e:
            self.error = e
            logger.exception("paddle: %s raised", what)
            return False

    def run(self) -> int:
        self._enter(PaddleState.FETCH)
        if not self._call(self.fetch_inputs, "fetch"):
            self._enter(PaddleState.FAILED)
            return 1

        self._enter(PaddleState.SIGNAL)
        self.volume.signal(FIRST_STEP)

        self._enter(PaddleState.WAIT_FOR_RESULT)
        try:
            outcome = wait_for_any(
                self.volume,
                [MAIN_FAILED, MAIN_PASSED],
                poll_interval=self.poll_interval,
                timeout=self.timeout,
                clock=self.clock,
                sleep=self.sleep,
            )
        except ProtocolTimeoutError as e:
            self.error = e
            logger.error("paddle: %s", e)
            self._enter(PaddleState.FAILED)
            return 1

        if outcome == MAIN_FAILED:
            self._enter(PaddleState.FAILED)
            return 1

        self._enter(PaddleState.COMMIT)
        if not self._call(self.commit_outputs, "commit"):
            self._enter(PaddleState.FAILED)
            return 1
        self._enter(PaddleState.DONE)
        return 0


def shell_commands(
    commands: Sequence[str],
    *,
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Callable[[], bool]:
    """Retorna um callable que executa `commands` em conjunção (para no primeiro erro)."""

    def run() -> bool:
        for command in commands:
            completed = subprocess.run(
                ["/bin/sh", "-c", command],
                cwd=cwd,
                env=dict(env) if env is not None else None,
                check=False,
            )
            if completed.returncode != 0:
                logger.warning("command failed (exit %d): %s", completed.returncode, command)
                return False
        return True

    return run


def run_locally(main: MainProcess, paddle: PaddleProcess) -> Tuple[int, int]:
    """
    Executa os dois processos em threads independentes sobre o mesmo volume.

    Returns:
        Tuple[int, int]: exit codes (main, paddle).
    """
    if main.volume.root != paddle.volume.root:
        raise ProtocolError("main and paddle must share the same volume")

    codes: Dict[str, int] = {}
    failures: List[BaseException] = []

    def _target(name: str, process: Callable[[], int]) -> None:
        try:
            codes[name] = process()
        except BaseException as e:
            failures.append(e)

    threads = [
        threading.Thread(target=_target, args=("main", main.run), name="main"),
        threading.Thread(target=_target, args=("paddle", paddle.run), name="paddle"),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    if failures:
        raise failures[0]
    return codes["main"], codes["paddle"]
