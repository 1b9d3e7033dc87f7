# tests/core/errors_payload/test_error_payload.py
"""
Testes da conversão exceção → `PaddleErrorPayload`.

Invariantes:
    - cada família de exceção tem um código estável
    - subclasses têm precedência sobre as bases
    - o payload é serializável (`to_dict`)
"""

import json

import pytest

try:
    from canoe_paddle.core.compiler.errors import RenderError
    from canoe_paddle.core.config.errors import InvalidSettingError
    from canoe_paddle.core.errors import (
        COMPILER_RENDER_ERROR,
        CONFIG_ERROR,
        PIPELINE_DUPLICATE_STEP,
        PIPELINE_PARSE_ERROR,
        STORAGE_MISSING_KEYS,
        UNEXPECTED_ERROR,
        PaddleErrorPayload,
        error_payload_from_exception,
    )
    from canoe_paddle.core.pipeline.errors import DuplicateStepError, PipelineParseError
    from canoe_paddle.core.storage.errors import MissingKeysError
except Exception as e:  # noqa: BLE001
    error_payload_from_exception = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing error payload module. Implement:\n"
            "- src/canoe_paddle/core/errors.py (PaddleErrorPayload, error_payload_from_exception)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "exc, code",
    [
        (PipelineParseError("bad"), PIPELINE_PARSE_ERROR),
        (DuplicateStepError("dup"), PIPELINE_DUPLICATE_STEP),
        (RenderError("tmpl"), COMPILER_RENDER_ERROR),
        (InvalidSettingError("x"), CONFIG_ERROR),
        (ValueError("other"), UNEXPECTED_ERROR),
    ],
)
def test_codes(exc, code):
    _require_imports()
    payload = error_payload_from_exception(exc)
    assert payload.type == code
    assert payload.details["exception_class"] == exc.__class__.__name__


def test_missing_keys_details():
    _require_imports()
    payload = error_payload_from_exception(MissingKeysError(["a.csv"], bucket="b", prefix="p/"), step="train")
    assert payload.type == STORAGE_MISSING_KEYS
    assert payload.details["missing_keys"] == ["a.csv"]
    assert payload.details["step"] == "train"
    assert "a.csv" in payload.message


def test_payload_is_serializable():
    _require_imports()
    payload = PaddleErrorPayload(type="T", message="m", details={"k": [1]}, hint="h")
    assert json.loads(json.dumps(payload.to_dict())) == {
        "type": "T",
        "message": "m",
        "details": {"k": [1]},
        "hint": "h",
    }
