# tests/core/naming/test_sanitize_name.py
"""
Testes da normalização de identificadores (`sanitize_name`).

Invariantes verificados:
    - resultado em minúsculas, sem "_" nem "/"
    - idempotência
    - função total (string vazia incluída)
"""

import pytest

try:
    from canoe_paddle.core.naming import sanitize_name
except Exception as e:  # noqa: BLE001
    sanitize_name = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing naming module. Implement:\n"
            "- src/canoe_paddle/core/naming.py (sanitize_name)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Step_1", "step-1"),
        ("feature/new_thing", "feature-new-thing"),
        ("MASTER", "master"),
        ("already-clean", "already-clean"),
        ("", ""),
        ("a__b//c", "a--b--c"),
    ],
)
def test_sanitize_examples(raw, expected):
    _require_imports()
    assert sanitize_name(raw) == expected


@pytest.mark.parametrize("raw", ["Feature/Some_Branch", "x_Y/z", "ÁB_c", "v1.2/RC_1"])
def test_sanitize_is_idempotent_and_clean(raw):
    """Aplicar duas vezes produz o mesmo token; nenhum caractere proibido sobra."""
    _require_imports()
    once = sanitize_name(raw)
    assert sanitize_name(once) == once
    assert once == once.lower()
    assert "_" not in once
    assert "/" not in once
