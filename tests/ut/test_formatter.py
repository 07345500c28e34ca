import pytest

from ferritectl.formatter import NIL, OutputFormat, format_result, format_ttl


@pytest.mark.ut
@pytest.mark.parametrize("mode", list(OutputFormat))
def test_nil_in_every_mode(mode):
    assert format_result(None, mode) == NIL == "(nil)"


@pytest.mark.ut
def test_table_numbers_sequence_elements():
    assert format_result(["a", "b", "c"], "table") == '1) "a"\n2) "b"\n3) "c"'


@pytest.mark.ut
def test_table_serializes_nested_elements():
    assert format_result([1, ["x", None]], OutputFormat.TABLE) == '1) 1\n2) ["x",null]'


@pytest.mark.ut
def test_table_falls_back_for_scalars():
    assert format_result("hello", "table") == "hello"
    assert format_result(42, "table") == "42"


@pytest.mark.ut
def test_json_is_indented_by_two():
    assert format_result({"a": [1, 2]}, "json") == '{\n  "a": [\n    1,\n    2\n  ]\n}'
    assert format_result("OK", "json") == '"OK"'


@pytest.mark.ut
def test_json_decodes_bytes():
    assert format_result([b"caf\xc3\xa9"], "json") == '[\n  "café"\n]'


@pytest.mark.ut
def test_raw_is_string_coercion():
    assert format_result(["a", "b"], "raw") == "['a', 'b']"
    assert format_result(b"bytes", "raw") == "bytes"


@pytest.mark.ut
def test_unknown_mode_renders_raw():
    assert format_result(7, "yaml") == "7"


@pytest.mark.ut
@pytest.mark.parametrize(
    "ttl, expected",
    [(-1, "persistent"), (-2, "expired"), (59, "59s"), (60, "1m"), (3599, "59m"), (7200, "2h")],
)
def test_format_ttl(ttl, expected):
    assert format_ttl(ttl) == expected
