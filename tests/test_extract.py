import pytest
from pydantic import BaseModel

from sermo import LlmProvider, PathNotFoundError, SchemaError
from sermo.extract import (
    extract_json,
    extract_json_flexible,
    extract_path,
    extract_reply,
    parse_path,
    reply_path,
)

OPENAI_BODY = {"choices": [{"message": {"role": "assistant", "content": "openai says hi"}}]}

SUCCESS_BODIES = {
    LlmProvider.OLLAMA: ({"message": {"role": "assistant", "content": "Hi there"}}, "Hi there"),
    LlmProvider.ANTHROPIC: ({"content": [{"type": "text", "text": "claude says hi"}]}, "claude says hi"),
    LlmProvider.GOOGLE: (
        {"candidates": [{"content": {"parts": [{"text": "gemini says hi"}], "role": "model"}}]},
        "gemini says hi",
    ),
}
for _p in LlmProvider:
    if _p.is_openai_compatible:
        SUCCESS_BODIES[_p] = (OPENAI_BODY, "openai says hi")


@pytest.mark.parametrize("provider", list(LlmProvider))
def test_extract_reply_success(provider):
    body, expected = SUCCESS_BODIES[provider]
    assert extract_reply(provider, body) == expected


@pytest.mark.parametrize("provider", list(LlmProvider))
def test_extract_reply_missing_field(provider):
    with pytest.raises(SchemaError):
        extract_reply(provider, {"unexpected": True})


def test_empty_choices_is_schema_error():
    with pytest.raises(PathNotFoundError):
        extract_reply(LlmProvider.OPENAI, {"choices": []})


def test_non_string_reply_is_schema_error():
    with pytest.raises(SchemaError):
        extract_reply(LlmProvider.OLLAMA, {"message": {"content": None}})


def test_empty_string_reply_is_returned_as_is():
    assert extract_reply(LlmProvider.OLLAMA, {"message": {"content": ""}}) == ""


def test_reply_paths():
    assert reply_path(LlmProvider.GROQ) == ("choices", 0, "message", "content")
    assert reply_path(LlmProvider.ANTHROPIC) == ("content", 0, "text")


def test_extract_path_nested():
    doc = {"a": {"b": [{"c": "x"}]}}
    assert extract_path(doc, ["a", "b", 0, "c"]) == "x"
    assert extract_path(doc, "a.b[0].c") == "x"
    assert extract_path(doc, []) == doc


def test_extract_path_missing_key():
    with pytest.raises(PathNotFoundError) as info:
        extract_path({"a": {"b": [{"c": "x"}]}}, ["a", "z"])
    assert info.value.position == 1
    assert info.value.path == ("a", "z")
    assert "a.z" in str(info.value)


@pytest.mark.parametrize(
    "path",
    [
        ["a", 0],  # index into object
        ["a", "b", "c"],  # key into array
        ["a", "b", 5],  # out of range
        ["a", "b", -1],  # negative index
        ["a", "b", 0, "c", "d"],  # key into string
        ["a", True],  # bool is not an index
    ],
)
def test_extract_path_type_mismatch(path):
    with pytest.raises(PathNotFoundError):
        extract_path({"a": {"b": [{"c": "x"}]}}, path)


def test_parse_path():
    assert parse_path("choices[0].message.content") == ["choices", 0, "message", "content"]
    assert parse_path("a[1][2]") == ["a", 1, 2]
    assert parse_path("") == []


def test_extract_json_object_from_prose():
    text = 'Sure! Here it is: {"name": "Ada", "tags": ["x", "y"]} Hope that helps.'
    assert extract_json(text) == {"name": "Ada", "tags": ["x", "y"]}


def test_extract_json_ignores_braces_in_strings():
    text = 'Result: {"note": "use } carefully", "n": 1} trailing }'
    assert extract_json(text) == {"note": "use } carefully", "n": 1}


def test_extract_json_array():
    assert extract_json("values: [1, [2, 3]] done", is_object=False) == [1, [2, 3]]


def test_extract_json_unbalanced_or_invalid():
    assert extract_json('{"a": 1') is None
    assert extract_json("no json here") is None
    assert extract_json("{not: valid}") is None


class Person(BaseModel):
    name: str
    age: int


def test_extract_json_with_model():
    person = extract_json('```json\n{"name": "Ada", "age": 36}\n```', model=Person)
    assert person == Person(name="Ada", age=36)
    assert extract_json('{"name": "Ada"}', model=Person) is None


def test_extract_json_flexible_fallbacks():
    assert extract_json_flexible('answer: {"ok": true}') == {"ok": True}
    assert extract_json_flexible("list: [1, 2]") == [1, 2]
    assert extract_json_flexible('The city is "Paris".') == "Paris"
    assert extract_json_flexible("The answer is 42.") == 42
    assert extract_json_flexible("It is true") is True
    assert extract_json_flexible("nothing useful") is None


def test_extract_json_flexible_with_model():
    assert extract_json_flexible("score: 7", model=int) == 7


@pytest.mark.parametrize("path", ["a]]b", "a[[b", "a[-1]", "a.", ".a", "a..b", "a[0"])
def test_malformed_dotted_path_is_rejected(path):
    doc = {"a": {"b": "x", "-1": "y"}}
    with pytest.raises(PathNotFoundError):
        parse_path(path)
    with pytest.raises(PathNotFoundError):
        extract_path(doc, path)
