# tests/core/storage/test_filter_objects.py
"""
Testes da seleção all-or-nothing de objetos (`filter_objects`).

Os exemplos reproduzem os casos de referência do comando `paddle data get`:
- lista de chaves completa sob o prefixo → todos os objetos
- sem chaves → todos os objetos sob o prefixo
- alguma chave ausente → erro, sem resultado parcial
"""

import pytest

try:
    from canoe_paddle.core.storage.errors import InvalidStoragePathError, MissingKeysError
    from canoe_paddle.core.storage.objects import StoragePath, StoredObject, filter_objects
except Exception as e:  # noqa: BLE001
    filter_objects = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing storage objects module. Implement:\n"
            "- src/canoe_paddle/core/storage/objects.py (StoragePath, StoredObject, filter_objects)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _objects(*keys):
    return [StoredObject(key=k) for k in keys]


def test_all_requested_keys_found():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    objects = _objects("path/file1.csv", "path/file2.csv", "path/folder/file3.csv")

    result = filter_objects(location, objects, ["file1.csv", "file2.csv", "folder/file3.csv"])

    assert [o.key for o in result] == [o.key for o in objects]


def test_empty_keys_returns_everything_under_prefix():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    result = filter_objects(location, _objects("path/file.csv"), [])
    assert result == _objects("path/file.csv")


@pytest.mark.parametrize("n", [0, 1, 5])
def test_empty_keys_preserves_count(n):
    """N objetos sob o prefixo entram ⇒ N objetos saem, na ordem da listagem."""
    _require_imports()
    location = StoragePath(bucket="bucket", path="p/")
    under = _objects(*[f"p/f{i}" for i in range(n)])
    result = filter_objects(location, under + _objects("other/x"), ())
    assert result == under


def test_missing_keys_raise_without_partial_result():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    result = None
    with pytest.raises(MissingKeysError) as exc:
        result = filter_objects(location, _objects("path/f1.csv"), ["f2.csv", "f3.csv"])

    assert result is None
    assert exc.value.keys == ("f2.csv", "f3.csv")
    assert isinstance(exc.value, LookupError)
    assert "f2.csv" in str(exc.value) and "f3.csv" in str(exc.value)


def test_partially_found_keys_still_fail():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    with pytest.raises(MissingKeysError) as exc:
        filter_objects(location, _objects("path/f1.csv"), ["f1.csv", "f2.csv"])
    assert exc.value.keys == ("f2.csv",)


def test_keys_match_exactly_not_by_prefix():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    with pytest.raises(MissingKeysError):
        filter_objects(location, _objects("path/file.csv.bak"), ["file.csv"])
    with pytest.raises(MissingKeysError):
        filter_objects(location, _objects("path/data.csv"), ["*.csv"])


def test_duplicates_collapse():
    _require_imports()
    location = StoragePath(bucket="bucket", path="path/")
    result = filter_objects(
        location,
        _objects("path/a", "path/a", "path/b"),
        ["b", "a", "a"],
    )
    assert [o.key for o in result] == ["path/a", "path/b"]


def test_storage_path_from_uri():
    _require_imports()
    assert StoragePath.from_uri("s3://bucket/some/prefix/") == StoragePath("bucket", "some/prefix/")
    assert StoragePath.from_uri("s3://bucket") == StoragePath("bucket", "")
    assert str(StoragePath("bucket", "x/")) == "s3://bucket/x/"


@pytest.mark.parametrize("uri", ["bucket/path", "s3:///path", "http://bucket/x"])
def test_storage_path_invalid_uri(uri):
    _require_imports()
    with pytest.raises(InvalidStoragePathError):
        StoragePath.from_uri(uri)
