import json

import pytest

from rededr_ppl.jsonformat import JsonType, format_value, quote_string
from rededr_ppl.jsontoken import TokenType, tokenize


class FakeValue:
    def __init__(self, kind, payload=None, is_valid=True):
        self.kind = kind
        self.payload = payload
        self.is_valid = is_valid

    def valid(self):
        return self.is_valid

    def type(self):
        return self.kind

    def __len__(self):
        if self.kind in (JsonType.OBJECT, JsonType.ARRAY):
            return len(self.payload)
        if self.kind in (JsonType.BAD, JsonType.NULL):
            return 0
        return 1

    def integer(self):
        return self.payload

    def frac(self):
        return self.payload

    def string(self):
        return self.payload

    def boolean(self):
        return self.payload

    def keys(self):
        return sorted(self.payload) if self.kind == JsonType.OBJECT else []

    def get(self, key):
        return self.payload[key]


def build(data):
    if isinstance(data, dict):
        return FakeValue(JsonType.OBJECT, {k: build(v) for k, v in data.items()})
    if isinstance(data, list):
        return FakeValue(JsonType.ARRAY, [build(v) for v in data])
    if isinstance(data, bool):
        return FakeValue(JsonType.BOOLEAN, data)
    if isinstance(data, int):
        return FakeValue(JsonType.INTEGER, data)
    if isinstance(data, float):
        return FakeValue(JsonType.FLOAT, data)
    if isinstance(data, str):
        return FakeValue(JsonType.STRING, data)
    return FakeValue(JsonType.NULL)


DOCUMENTS = [
    {"a": 1},
    {"name": "proc", "pid": 1234, "ok": True, "none": None},
    [1, 2, 3],
    list(range(20)),
    {"a": [1, {"b": 2, "c": 3}], "d": {"x": 1, "y": 2}, "e": "s"},
    [{"k": "value number one", "j": 2}, [1, 2, 3, 4, 5, 6, 7, 8, 9, 10], "end"],
    {"outer": {"inner": {"deep": [1.5, 2.25, "text with / slash"]}, "z": False}},
    {"list": ["alpha", "beta", "gamma", "delta"], "last": {"p": 1, "q": 2}},
]


@pytest.mark.parametrize(
    "text",
    ["plain", 'quote "inside"', "back\\slash", "a/b", "tab\tnew\nline\r", "\x08\x0c", ""],
)
def test_quote_string_round_trips_through_tokenizer(text):
    tokens = tokenize(quote_string(text))
    assert tokens == [tokens[0]]
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].value == text


def test_quote_string_escapes_slash():
    assert quote_string("/") == '"\\/"'


def test_quote_string_is_valid_json():
    text = 'mixed "q" \\ / \n end'
    assert json.loads(quote_string(text)) == text


def test_integer_renders_as_decimal():
    assert format_value(build(-98765)) == str(-98765)


def test_float_has_six_decimals():
    assert format_value(build(1.5)) == "1.500000"


@pytest.mark.parametrize("data, expected", [(True, "true"), (False, "false"), (None, "null")])
def test_literals(data, expected):
    assert format_value(build(data)) == expected


def test_invalid_value_renders_empty():
    value = FakeValue(JsonType.INTEGER, 5, is_valid=False)
    assert format_value(value) == ""
    assert format_value(value, False) == ""


def test_bad_type_renders_empty():
    assert format_value(FakeValue(JsonType.BAD)) == ""


@pytest.mark.parametrize("data", DOCUMENTS)
def test_single_line_is_valid_json(data):
    assert json.loads(format_value(build(data), True)) == data


@pytest.mark.parametrize("data", DOCUMENTS)
def test_multi_line_is_valid_json(data):
    assert json.loads(format_value(build(data), False)) == data


@pytest.mark.parametrize("data", DOCUMENTS)
def test_multi_line_without_whitespace_equals_single_line(data):
    single = format_value(build(data), True)
    multi = format_value(build(data), False)
    assert "".join(multi.split()) == single.replace(" ", "")


@pytest.mark.parametrize("data", DOCUMENTS)
def test_single_line_has_no_newlines(data):
    assert "\n" not in format_value(build(data), True)


def test_small_object_multi_line_layout():
    assert format_value(build({"a": 1}), False) == '{\n    "a":1\n}\n'


def test_short_array_stays_on_one_line():
    value = build([1, 2, 3])
    assert format_value(value, False) == format_value(value, True)


def test_long_array_is_spread_and_indented():
    output = format_value(build(list(range(10))), False)
    lines = output.splitlines()
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert len(lines) == 12
    assert all(line.startswith("    ") for line in lines[1:-1])


def test_multi_line_object_ends_with_newline():
    output = format_value(build({"x": 1, "y": {"a": 1, "b": 2}}), False)
    assert output.endswith("}\n")


def test_keys_follow_keys_order():
    output = format_value(build({"zeta": 1, "alpha": 2, "mid": 3}), True)
    pairs = json.loads(output, object_pairs_hook=lambda items: [k for k, _ in items])
    assert pairs == sorted(pairs)


def test_empty_containers():
    assert json.loads(format_value(build({}), True)) == {}
    assert json.loads(format_value(build([]), True)) == []
    assert json.loads(format_value(build({}), False)) == {}