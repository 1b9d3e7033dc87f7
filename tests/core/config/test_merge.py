# tests/core/config/test_merge.py
"""
Testes da política de deep-merge de configuração.

Os testes asseguram que:
- valores escalares são sobrescritos
- dicionários são mesclados recursivamente
- listas são sobrescritas integralmente
- inteiros e floats são intercambiáveis
- conflitos de tipo são rejeitados
- entradas não são mutadas
"""

import pytest

try:
    from canoe_paddle.core.config.errors import ConfigTypeConflictError
    from canoe_paddle.core.config.merge import deep_merge
except Exception as e:  # noqa: BLE001
    deep_merge = None
    ConfigTypeConflictError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(f"Missing merge module. Import error: {_IMPORT_ERR}")


def test_merge_simple_override():
    _require_imports()
    base = {"bucket": "a", "aws_region": "eu-west-1"}
    override = {"bucket": "b"}
    merged = deep_merge(base, override)

    assert merged == {"bucket": "b", "aws_region": "eu-west-1"}
    assert base == {"bucket": "a", "aws_region": "eu-west-1"}
    assert override == {"bucket": "b"}


def test_merge_nested_dicts():
    _require_imports()
    merged = deep_merge({"x": {"a": 1, "b": 2}}, {"x": {"b": 3, "c": 4}})
    assert merged == {"x": {"a": 1, "b": 3, "c": 4}}


def test_merge_lists_are_replaced():
    _require_imports()
    merged = deep_merge({"secrets": ["A:s:k", "B:s:k"]}, {"secrets": ["C:s:k"]})
    assert merged == {"secrets": ["C:s:k"]}


def test_merge_int_over_float_is_accepted():
    """`poll_interval_seconds: 2` sobre o default `1.0` não é conflito."""
    _require_imports()
    assert deep_merge({"poll_interval_seconds": 1.0}, {"poll_interval_seconds": 2}) == {
        "poll_interval_seconds": 2
    }


@pytest.mark.parametrize(
    "base, override",
    [
        ({"bucket": "a"}, {"bucket": {"name": "a"}}),
        ({"timeout_seconds": 10.0}, {"timeout_seconds": "10"}),
        ({"flag": True}, {"flag": 1}),
    ],
)
def test_merge_type_conflicts(base, override):
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge(base, override)
