import re
from unittest import mock

import pytest

from clawtools.core import InvalidInputError, SafePermission
from clawtools.text_tools import HashTool, RandomStringTool, TextStatsTool, UuidTool


def test_hash_is_deterministic_hex():
    first = HashTool().execute({"data": "hello"})
    second = HashTool().execute({"data": "hello"})
    assert first == second
    assert first["algorithm"] == "DefaultHasher"
    assert re.fullmatch(r"[0-9a-f]{16}", first["hash"])


def test_hash_differs_for_different_inputs():
    tool = HashTool()
    hashes = {tool.execute({"data": text})["hash"] for text in ["", "a", "b", "ab", "ba"]}
    assert len(hashes) == 5


def test_hash_handles_long_unicode_input():
    result = HashTool().execute({"data": "ü" * 100})
    assert len(result["hash"]) == 16


@pytest.mark.parametrize("bad", [None, [], {"data": 5}, {}])
def test_hash_rejects_bad_input(bad):
    with pytest.raises(InvalidInputError):
        HashTool().execute(bad)


def test_uuid_shape():
    value = UuidTool().execute({})["uuid"]
    parts = value.split("-")
    assert [len(part) for part in parts] == [32, 4, 4, 4, 12]
    assert set("".join(parts)) <= set("0123456789abcdef")


def test_uuid_fields_from_timestamp():
    with mock.patch("time.time_ns", return_value=0x0123456789ABCDEF0123):
        value = UuidTool().execute(None)["uuid"]
    assert value == "0" * 32 + "-0000-0123-4567-89abcdef0123"


def test_random_string_default_length():
    result = RandomStringTool().execute({})
    assert result["length"] == 32
    assert len(result["random"]) == 32
    assert result["random"].isalnum() and result["random"].isascii()


def test_random_string_capped():
    result = RandomStringTool().execute({"length": 1000})
    assert result["length"] == 128
    assert len(result["random"]) == 128


def test_random_string_zero_length():
    assert RandomStringTool().execute({"length": 0}) == {"random": "", "length": 0}


@pytest.mark.parametrize("bad", [None, {"length": -1}, {"length": "5"}, {"length": True}])
def test_random_string_rejects_bad_input(bad):
    with pytest.raises(InvalidInputError):
        RandomStringTool().execute(bad)


def test_text_stats_counts():
    text = "one two  three\n"
    result = TextStatsTool().execute({"text": text})
    assert result["characters"] == len(text)
    assert result["words"] == 3
    assert result["lines"] == 1


def test_text_stats_empty():
    assert TextStatsTool().execute({"text": ""}) == {"characters": 0, "words": 0, "lines": 0}


def test_text_stats_trailing_newline_not_a_line():
    tool = TextStatsTool()
    assert tool.execute({"text": "a\nb\n"})["lines"] == tool.execute({"text": "a\nb"})["lines"]
    assert tool.execute({"text": "a\r\nb"})["lines"] == tool.execute({"text": "a\nb"})["lines"]


def test_text_stats_counts_characters_not_bytes():
    text = "héllo"
    assert TextStatsTool().execute({"text": text})["characters"] == len(text)


def test_text_stats_missing_field():
    with pytest.raises(InvalidInputError) as info:
        TextStatsTool().execute({})
    assert "missing field `text`" in str(info.value)


def test_schemas_and_permissions():
    assert HashTool().input_schema().required == ["data"]
    assert TextStatsTool().input_schema().required == ["text"]
    assert RandomStringTool().input_schema().properties["length"]["default"] == 32
    assert UuidTool().permission() == SafePermission()
    assert [t.name for t in (HashTool, UuidTool, RandomStringTool, TextStatsTool)] == [
        "hash",
        "uuid",
        "random_string",
        "text_stats",
    ]