# src/e2e/test_parser_offsets.py

import pytest

from keyfinder.config import MAX_DEPTH
from keyfinder.errors import JsonParseError
from keyfinder.models import Document, JsonArray, JsonObject, JsonScalar
from keyfinder.parser import parse


def test_object_members_keep_name_offsets():
    text = '{"a": [true, null], "b": "x"}'
    root = parse(text)
    assert isinstance(root, JsonObject)
    assert root.get("a").offset == 1
    assert root.get("b").offset == text.index('"b"')


def test_scalars_keep_raw_text():
    root = parse('{"s": "x", "n": -1.5e3, "t": false, "z": null}')
    s, n, t, z = (root.get(k).value for k in ("s", "n", "t", "z"))
    assert (s.kind, s.value, s.text) == ("string", "x", '"x"')
    assert (n.kind, n.value, n.text) == ("number", -1500.0, "-1.5e3")
    assert (t.kind, t.value) == ("boolean", False)
    assert (z.kind, z.value) == ("null", None)


def test_array_source_slice():
    text = '{"list": [1, 2, {"k": 3}]}'
    doc = Document("d.json", root=parse(text), source=text)
    arr = doc.root.get("list").value
    assert isinstance(arr, JsonArray)
    assert len(arr.items) == 3
    assert doc.text_of(arr) == '[1, 2, {"k": 3}]'


def test_duplicate_keys_last_one_wins():
    root = parse('{"a": 1, "b": 0, "a": 2}')
    assert list(root.properties) == ["a", "b"]
    assert root.get("a").value.value == 2


def test_unicode_names_and_escapes():
    root = parse('{"caf\\u00e9": "\\u00fc", "naïve": 1}')
    assert root.get("café").value.value == "ü"
    assert root.get("naïve") is not None


def test_bom_is_tolerated():
    root = parse("\ufeff" + '{"a": 1}')
    assert isinstance(root, JsonObject)
    assert root.get("a").offset == 2


@pytest.mark.parametrize("text", ["", "{", '{"a" 1}', "[1,]", "1 2", "{not json}", "{'a': 1}"])
def test_invalid_json_raises(text):
    with pytest.raises(JsonParseError):
        parse(text)


@pytest.mark.parametrize("depth, ok", [(MAX_DEPTH + 1, True), (MAX_DEPTH + 2, False)])
def test_nesting_depth_is_bounded(depth, ok):
    text = "[" * depth + "]" * depth
    if ok:
        assert isinstance(parse(text), JsonArray)
    else:
        with pytest.raises(JsonParseError):
            parse(text)


def test_scalar_root_is_allowed():
    assert isinstance(parse('"just text"'), JsonScalar)


def test_line_of_is_one_based():
    doc = Document("d.json", source="a\nb\nc")
    assert doc.line_of(0) == 1
    assert doc.line_of(2) == 2
    assert doc.line_of(4) == 3
