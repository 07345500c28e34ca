import pytest

from ferritectl.telemetry import extract_version, format_info_value, parse_info_section

INFO = (
    "# Server\r\n"
    "ferrite_version:0.4.2\r\n"
    "executable:/usr/bin/ferrite\r\n"
    "uptime_in_seconds:93784\r\n"
    "\r\n"
    "# Memory\r\n"
    "used_memory:2097152\r\n"
    "maxmemory_policy:noeviction\r\n"
)


@pytest.mark.ut
def test_extract_version():
    assert extract_version(INFO) == "0.4.2"
    assert extract_version("# Server\r\nredis_version:7.2\r\n") == "unknown"


@pytest.mark.ut
def test_parse_section_stops_at_next_header():
    entries = parse_info_section(INFO, "server")

    assert [e.key for e in entries] == ["ferrite_version", "executable", "uptime_in_seconds"]
    assert entries[1].value == "/usr/bin/ferrite"
    assert entries[2].value == "1d 2h"


@pytest.mark.ut
def test_parse_section_formats_memory():
    entries = parse_info_section(INFO, "Memory")
    assert [(e.key, e.value) for e in entries] == [
        ("used_memory", "2.00 MB"),
        ("maxmemory_policy", "noeviction"),
    ]


@pytest.mark.ut
def test_parse_missing_section():
    assert parse_info_section(INFO, "stats") == []


@pytest.mark.ut
@pytest.mark.parametrize(
    "key, value, expected",
    [
        ("used_memory", "512", "512"),
        ("used_memory", "2048", "2.00 KB"),
        ("used_memory_peak", str(3 * 1024 ** 3), "3.00 GB"),
        ("uptime_in_seconds", "4000", "1h 6m"),
        ("uptime_in_seconds", "125", "2m 5s"),
        ("connected_clients", "12", "12"),
    ],
)
def test_format_info_value(key, value, expected):
    assert format_info_value(key, value) == expected
