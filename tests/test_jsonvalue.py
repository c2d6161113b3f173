from collections import deque

import pytest

from rededr_ppl.jsonformat import JsonType
from rededr_ppl.jsontoken import tokenize
from rededr_ppl.jsonvalue import JsonValue


def test_default_is_valid_null():
    value = JsonValue()
    assert value.valid() is True
    assert value.type() == JsonType.NULL
    assert len(value) == 0
    assert value.text() == "null"


def test_parse_object_round_trip():
    source = '{"a":1,"b":[true,false,null],"c":"x"}'
    value = JsonValue.parse(source)
    assert value.valid()
    assert value.type() == JsonType.OBJECT
    assert len(value) == 3
    assert value.text() == source


def test_parse_bytes_utf8():
    value = JsonValue.parse('{"k":"ä"}'.encode("utf-8"))
    assert value.get("k").string() == "ä"


def test_scalars_parse():
    assert JsonValue.parse("42").integer() == 42
    assert JsonValue.parse("-7").type() == JsonType.INTEGER
    assert JsonValue.parse("2.5").frac() == 2.5
    assert JsonValue.parse("false").boolean() is False
    assert JsonValue.parse('"hi"').string() == "hi"


def test_float_rendering():
    assert JsonValue.parse("1.5").text() == "1.500000"


def test_keys_sorted():
    value = JsonValue.parse('{"b":1,"a":2,"c":3}')
    assert value.keys() == ["a", "b", "c"]
    assert str(value) == '{"a":2,"b":1,"c":3}'


@pytest.mark.parametrize(
    "source",
    ["{", "[1 2]", '{"a" 1}', '{"":1}', '{"a":1,"a":2}', "[1,}", "}", '{"a":}'],
)
def test_invalid_json(source):
    value = JsonValue.parse(source)
    assert value.valid() is False
    assert value.text() == ""


def test_tokenize_error_gives_bad_type():
    value = JsonValue.parse('"unterminated')
    assert value.type() == JsonType.BAD
    assert len(value) == 0


def test_empty_text_is_bad_type():
    assert JsonValue.parse("").type() == JsonType.BAD


def test_lenient_forms_accepted():
    no_commas = JsonValue.parse('{"a":1 "b":2}')
    assert no_commas.valid()
    assert no_commas.keys() == ["a", "b"]
    trailing = JsonValue.parse("[1,2,]")
    assert trailing.valid()
    assert len(trailing) == 2


def test_from_tokens_consumes_deque():
    tokens = deque(tokenize("1 2"))
    value = JsonValue.from_tokens(tokens)
    assert value.integer() == 1
    assert len(tokens) == 1


def test_from_tokens_list():
    value = JsonValue.from_tokens(tokenize("[3,4]"))
    assert value.get(1).integer() == 4


def test_from_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text('{"name":"ok"}', encoding="utf-8")
    value = JsonValue.from_file(path)
    assert value.get("name").string() == "ok"


def test_from_file_missing(tmp_path):
    with pytest.raises(OSError):
        JsonValue.from_file(tmp_path / "missing.json")


def test_get_absent():
    value = JsonValue.parse("[1]")
    assert value.get(5) is None
    assert value.get("x") is None
    assert value.get(-1) is None


def test_add_to_array_and_object():
    array = JsonValue()
    assert array.add(1)
    assert array.add("s")
    assert array.add(None)
    assert array.add(True)
    assert array.type() == JsonType.ARRAY
    assert [array.get(i).type() for i in range(4)] == [
        JsonType.INTEGER,
        JsonType.STRING,
        JsonType.NULL,
        JsonType.BOOLEAN,
    ]
    obj = JsonValue()
    assert obj.add("key", 2.5)
    assert obj.add("", 1) is False
    assert obj.keys() == ["key"]
    assert obj.get("key").frac() == 2.5


def test_add_wrong_arity():
    with pytest.raises(TypeError):
        JsonValue().add()
    with pytest.raises(TypeError):
        JsonValue().add(1, 2)


def test_add_replaces_scalar_with_container():
    value = JsonValue.parse("5")
    value.add("a", 1)
    assert value.type() == JsonType.OBJECT
    assert len(value) == 1


def test_erase():
    obj = JsonValue.parse('{"a":1,"b":2}')
    assert obj.erase("a") is True
    assert obj.erase("a") is False
    assert obj.keys() == ["b"]
    array = JsonValue.parse("[1,2,3]")
    assert array.erase(0) is True
    assert array.erase(5) is False
    assert array.text() == "[2,3]"
    assert obj.erase(0) is False


def test_getitem_creates_members():
    value = JsonValue()
    child = value["x"]
    assert value.type() == JsonType.OBJECT
    assert child.type() == JsonType.NULL
    array = JsonValue()
    array[2]
    assert len(array) == 3
    assert array.text() == "[null,null,null]"


def test_getitem_bad_keys():
    value = JsonValue()
    assert value[""].valid() is False
    assert value[-1].type() == JsonType.BAD
    assert value.type() == JsonType.NULL


def test_setitem_builds_tree():
    value = JsonValue()
    value["a"] = 1
    value["b"] = "t"
    value["c"][1] = False
    rebuilt = JsonValue.parse(value.text())
    assert rebuilt.text() == value.text()
    assert rebuilt.get("c").get(1).boolean() is False


def test_setitem_rejects_empty_key():
    with pytest.raises(KeyError):
        JsonValue()[""] = 1


def test_copy_is_deep():
    original = JsonValue.parse('{"a":[1,2]}')
    duplicate = original.copy()
    duplicate["a"].add(3)
    assert len(original.get("a")) == 2
    assert len(duplicate.get("a")) == 3


def test_reset_and_load():
    value = JsonValue.parse("[1,2]")
    value.reset()
    assert value.type() == JsonType.NULL
    value.load('{"z":true}')
    assert value.get("z").boolean() is True


def test_bad_singleton():
    first = JsonValue.bad()
    assert first is JsonValue.bad()
    assert first.valid() is False
    assert first.type() == JsonType.BAD


def test_multiline_round_trip():
    source = '{"a":{"b":1,"c":2},"d":[1,2,3,4,5,6,7,8,9,10,11],"e":3}'
    value = JsonValue.parse(source)
    pretty = value.text(False)
    assert "\n" in pretty
    assert JsonValue.parse(pretty).text() == source


def test_string_escapes_round_trip():
    value = JsonValue()
    value["s"] = 'q"\\/\n\t'
    assert JsonValue.parse(value.text()).get("s").string() == 'q"\\/\n\t'