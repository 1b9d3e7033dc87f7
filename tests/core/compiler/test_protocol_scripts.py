# tests/core/compiler/test_protocol_scripts.py
"""
Testes dos scripts shell do protocolo main/paddle embutidos no manifest.

Aqui os scripts não são executados (ver `test_protocol_scripts_shell.py`);
os testes verificam a composição: sentinelas, conjunção dos comandos,
polling com prazo e comandos paddle.
"""

import pytest

try:
    from canoe_paddle.core.compiler.protocol import (
        conjunction,
        input_command,
        main_command,
        paddle_command,
    )
    from canoe_paddle.core.config.settings import PaddleSettings
    from canoe_paddle.core.pipeline.model import InputReference
except Exception as e:  # noqa: BLE001
    main_command = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing compiler protocol module. Import error: {_IMPORT_ERR}")


def test_conjunction():
    _require_imports()
    assert conjunction([]) == "true"
    assert conjunction(["echo a"]) == "(\necho a\n)"
    assert conjunction(["echo a", "exit 3"]) == "(\necho a\n) && (\nexit 3\n)"


def test_conjunction_survives_trailing_comment():
    _require_imports()
    script = conjunction(["python train.py  # treino", "echo ok"])
    assert "python train.py  # treino\n)" in script
    assert script.endswith("echo ok\n)")


def test_input_command_normalizes_tokens_and_defaults_to_head():
    _require_imports()
    cmd = input_command(InputReference(step="Step_0", version="V_1", branch="feature/x"))
    assert cmd == 'paddle data get step-0/v-1 "$INPUT_PATH" -b feature-x -p HEAD'


def test_input_command_with_bucket_override():
    _require_imports()
    cmd = input_command(
        InputReference(step="s", version="v", branch="b", path="2024-01-01T00-00-00Z", bucket="other")
    )
    assert cmd.endswith("-p 2024-01-01T00-00-00Z --bucket other")


def test_main_command_protocol():
    _require_imports()
    script = main_command(["echo hello", "python train.py"], PaddleSettings(poll_interval_seconds=0.5, timeout_seconds=30))

    assert "[ -e /data/first-step.txt ]" in script
    assert "if (\necho hello\n) && (\npython train.py\n); then touch /data/main-passed.txt" in script
    assert "else touch /data/main-failed.txt; status=1" in script
    assert "touch /data/main.txt; exit $status" in script
    assert "-ge 30 ]" in script
    assert "sleep 0.5" in script


def test_main_command_timeout_writes_failed_and_done():
    _require_imports()
    script = main_command([], PaddleSettings(timeout_seconds=5))
    timeout_branch = script.split("-ge 5 ]; then", 1)[1].split("fi;", 1)[0]
    assert "touch /data/main-failed.txt" in timeout_branch
    assert "touch /data/main.txt" in timeout_branch
    assert "exit 1" in timeout_branch


def test_paddle_command_protocol():
    _require_imports()
    script = paddle_command(
        [InputReference(step="a", version="v", branch="m", path="HEAD")],
        step_name="train",
        step_version="v2",
        branch_name="dev",
        settings=PaddleSettings(data_path="/shared", timeout_seconds=10.5),
    )

    assert script.startswith('mkdir -p "$INPUT_PATH" "$OUTPUT_PATH" && paddle data get a/v "$INPUT_PATH" -b m -p HEAD')
    assert "touch /shared/first-step.txt && echo first step finished" in script
    assert "if [ -e /shared/main-failed.txt ]; then exit 1; fi" in script
    assert 'if [ -e /shared/main-passed.txt ]; then paddle data commit "$OUTPUT_PATH" train/v2 -b dev; exit $?; fi' in script
    assert "-ge 11 ]" in script
    # o sinal first-step só é escrito depois de todos os fetches
    assert script.index("paddle data get") < script.index("first-step.txt")
    # main-failed é verificado antes de main-passed
    assert script.index("main-failed.txt") < script.index("main-passed.txt")


def test_paddle_command_without_inputs():
    _require_imports()
    script = paddle_command([], step_name="s", step_version="v", branch_name="b", settings=PaddleSettings())
    assert "paddle data get" not in script
    assert script.startswith('mkdir -p "$INPUT_PATH" "$OUTPUT_PATH" && touch /data/first-step.txt')


def test_sentinel_paths_are_quoted():
    _require_imports()
    settings = PaddleSettings(data_path="/shared data/")
    main = main_command(["ls"], settings)
    paddle = paddle_command([], step_name="s", step_version="v", branch_name="b", settings=settings)

    assert "[ -e '/shared data/first-step.txt' ]" in main
    assert "touch '/shared data/main.txt'" in main
    assert "touch '/shared data/first-step.txt'" in paddle
    assert "[ -e '/shared data/main-passed.txt' ]" in paddle


def test_sleep_interval_is_fixed_point():
    _require_imports()
    tiny = main_command([], PaddleSettings(poll_interval_seconds=0.00001))
    assert "sleep 0.00001;" in tiny
    assert "e-" not in tiny.split("sleep ", 1)[1].split(";", 1)[0]

    whole = paddle_command([], step_name="s", step_version="v", branch_name="b", settings=PaddleSettings(poll_interval_seconds=2))
    assert "sleep 2;" in whole
