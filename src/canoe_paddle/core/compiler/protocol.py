# src/canoe_paddle/core/compiler/protocol.py
"""
Scripts shell do protocolo main/paddle embutidos no manifest.

Cada container roda `/bin/sh -c <script>`. Os scripts implementam as mesmas
máquinas de estado de `core/protocol/machines.py`, comunicando-se apenas
pela existência das sentinelas no volume compartilhado.

main:
    espera first-step.txt → roda os comandos (conjunção `&&`, cada um em
    subshell) → main-passed.txt ou main-failed.txt → main.txt

paddle:
    mkdir → `paddle data get` por input → first-step.txt → espera
    main-failed.txt (exit 1) ou main-passed.txt (commit, exit com o status
    do commit)

Os loops de espera dormem `poll_interval_seconds` e desistem após
`timeout_seconds`.
"""

from __future__ import annotations

import math
import shlex
from typing import List, Sequence

from canoe_paddle.core.config.settings import PaddleSettings
from canoe_paddle.core.naming import sanitize_name
from canoe_paddle.core.pipeline.model import InputReference
from canoe_paddle.core.protocol.sentinels import FIRST_STEP, MAIN_DONE, MAIN_FAILED, MAIN_PASSED
from canoe_paddle.core.storage.transfer import HEAD


def _sentinel(settings: PaddleSettings, name: str) -> str:
    return shlex.quote(f"{settings.data_path.rstrip('/')}/{name}")


def _sleep_arg(seconds: float) -> str:
    # ponto fixo: `sleep` não aceita notação científica (1e-05)
    text = f"{seconds:.6f}".rstrip("0").rstrip(".")
    return text if text != "0" else "0.000001"


def _poll_values(settings: PaddleSettings) -> tuple:
    # o prazo é comparado em segundos inteiros
    return _sleep_arg(settings.poll_interval_seconds), int(math.ceil(settings.timeout_seconds))


def conjunction(commands: Sequence[str]) -> str:
    """
    Une os comandos em uma conjunção `&&`; lista vazia vira `true`.

    Cada comando roda em um subshell delimitado por quebras de linha, para
    que um `# comentário` no fim do comando não consuma o `)`.
    """
    if not commands:
        return "true"
    return " && ".join(f"(\n{c}\n)" for c in commands)


def input_command(ref: InputReference) -> str:
    """`paddle data get` de um input, com tokens normalizados."""
    args = [
        "paddle", "data", "get",
        shlex.quote(f"{sanitize_name(ref.step)}/{sanitize_name(ref.version)}"),
        '"$INPUT_PATH"',
        "-b", shlex.quote(sanitize_name(ref.branch)),
        "-p", shlex.quote(ref.path or HEAD),
    ]
    if ref.bucket:
        args += ["--bucket", shlex.quote(ref.bucket)]
    return " ".join(args)


def main_command(commands: Sequence[str], settings: PaddleSettings) -> str:
    interval, timeout = _poll_values(settings)
    first = _sentinel(settings, FIRST_STEP)
    passed = _sentinel(settings, MAIN_PASSED)
    failed = _sentinel(settings, MAIN_FAILED)
    done = _sentinel(settings, MAIN_DONE)

    return (
        "started=$(date +%s); "
        "while true; do "
        f"if [ -e {first} ]; then "
        f"if {conjunction(commands)}; then touch {passed}; status=0; "
        f"else touch {failed}; status=1; fi; "
        f"touch {done}; exit $status; "
        "fi; "
        f"if [ $(( $(date +%s) - started )) -ge {timeout} ]; then "
        f"echo 'timed out waiting for {FIRST_STEP}' >&2; "
        f"touch {failed}; touch {done}; exit 1; "
        "fi; "
        f"sleep {interval}; "
        "done"
    )


def paddle_command(
    inputs: Sequence[InputReference],
    *,
    step_name: str,
    step_version: str,
    branch_name: str,
    settings: PaddleSettings,
) -> str:
    """
    Script do container paddle.

    `step_name`, `step_version` e `branch_name` já chegam normalizados
    (ver `build_pod_definition`).
    """
    interval, timeout = _poll_values(settings)
    first = _sentinel(settings, FIRST_STEP)
    passed = _sentinel(settings, MAIN_PASSED)
    failed = _sentinel(settings, MAIN_FAILED)

    fetch: List[str] = ['mkdir -p "$INPUT_PATH" "$OUTPUT_PATH"']
    fetch += [input_command(ref) for ref in inputs]
    fetch += [f"touch {first}", "echo first step finished"]

    commit = (
        f'paddle data commit "$OUTPUT_PATH" '
        f"{shlex.quote(f'{step_name}/{step_version}')} "
        f"-b {shlex.quote(branch_name)}"
    )
    wait = (
        "started=$(date +%s) && "
        "while true; do "
        f"if [ -e {failed} ]; then exit 1; fi; "
        f"if [ -e {passed} ]; then {commit}; exit $?; fi; "
        f"if [ $(( $(date +%s) - started )) -ge {timeout} ]; then "
        f"echo 'timed out waiting for {MAIN_PASSED}' >&2; exit 1; "
        "fi; "
        f"sleep {interval}; "
        "done"
    )
    return " && ".join(fetch + [wait])
