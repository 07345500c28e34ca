import pytest

from ferritectl.catalog import COMMAND_DOCS, complete, lookup


@pytest.mark.ut
def test_lookup_is_case_insensitive():
    doc = lookup("get")
    assert doc is not None
    assert doc.syntax == "GET key"


@pytest.mark.ut
def test_syntax_without_arguments():
    assert lookup("PING").syntax == "PING"


@pytest.mark.ut
def test_lookup_unknown():
    assert lookup("NOPE") is None


@pytest.mark.ut
def test_complete_prefix():
    assert complete("h") == ["HGET", "HGETALL", "HSET"]
    assert complete("vector") == ["VECTOR.SEARCH"]
    assert complete("zz") == []


@pytest.mark.ut
def test_every_doc_is_indexed_by_upper_case_name():
    assert all(name == name.upper() for name in COMMAND_DOCS)
