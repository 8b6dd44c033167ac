from __future__ import annotations

"""Locating values inside provider responses and free-form model output.

Two families of helpers live here:

* path walking over an already-parsed JSON document (``extract_path`` and
  ``extract_reply``), which is strict and raises on any miss, and
* lenient scraping of JSON out of generated text (``extract_json`` and
  ``extract_json_flexible``), which returns ``None`` when nothing usable is
  found since models routinely wrap JSON in prose.
"""

import json
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from pydantic import TypeAdapter, ValidationError

from .errors import PathNotFoundError, SchemaError
from .providers import LlmProvider

PathSegment = Union[str, int]
JsonPath = Sequence[PathSegment]

_OPENAI_REPLY: Tuple[PathSegment, ...] = ("choices", 0, "message", "content")

_REPLY_PATHS: Dict[LlmProvider, Tuple[PathSegment, ...]] = {
    LlmProvider.OLLAMA: ("message", "content"),
    LlmProvider.ANTHROPIC: ("content", 0, "text"),
    LlmProvider.GOOGLE: ("candidates", 0, "content", "parts", 0, "text"),
}

# first segment has no leading dot; later keys must be introduced by one
_PATH_HEAD = re.compile(r"([^.\[\]]+)|\[(\d+)\]")
_PATH_STEP = re.compile(r"\.([^.\[\]]+)|\[(\d+)\]")
_STRING_RE = re.compile(r'"(?:[^"\\]|\\[\s\S])*"')
_SCALAR_RE = re.compile(r"\b(?:true|false|null)\b|-?\b\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\b")


def reply_path(provider: LlmProvider) -> Tuple[PathSegment, ...]:
    """Return where ``provider`` puts the assistant text in its response."""
    return _REPLY_PATHS.get(provider, _OPENAI_REPLY)


def parse_path(path: str) -> List[PathSegment]:
    """Turn ``"choices[0].message.content"`` into ``["choices", 0, "message", "content"]``.

    Raises :class:`PathNotFoundError` if any part of the string is not a
    ``key``, ``.key`` or ``[index]`` step.
    """
    segments: List[PathSegment] = []
    pos = 0
    while pos < len(path):
        pattern = _PATH_HEAD if pos == 0 else _PATH_STEP
        match = pattern.match(path, pos)
        if match is None:
            raise PathNotFoundError(
                [*segments, path[pos:]],
                len(segments),
                f"malformed path {path!r} at offset {pos}",
            )
        key, index = match.groups()
        segments.append(int(index) if index is not None else key)
        pos = match.end()
    return segments


def extract_path(data: Any, path: Union[str, JsonPath]) -> Any:
    """Walk ``path`` through a parsed JSON tree and return the value found.

    String segments index mappings, integer segments index lists. Any segment
    that is missing or applied to the wrong kind of node raises
    :class:`PathNotFoundError`.
    """
    segments = parse_path(path) if isinstance(path, str) else list(path)
    node = data
    for pos, seg in enumerate(segments):
        if isinstance(seg, bool) or not isinstance(seg, (str, int)):
            raise PathNotFoundError(segments, pos, f"unsupported segment type {type(seg).__name__}")
        if isinstance(seg, int):
            if not isinstance(node, list):
                raise PathNotFoundError(segments, pos, f"expected array, got {_kind(node)}")
            if not 0 <= seg < len(node):
                raise PathNotFoundError(segments, pos, f"index {seg} out of range for length {len(node)}")
            node = node[seg]
        else:
            if not isinstance(node, dict):
                raise PathNotFoundError(segments, pos, f"expected object, got {_kind(node)}")
            if seg not in node:
                raise PathNotFoundError(segments, pos, f"missing key {seg!r}")
            node = node[seg]
    return node


def extract_reply(provider: LlmProvider, data: Any) -> str:
    """Return the reply text from a provider's success response."""
    path = reply_path(provider)
    value = extract_path(data, path)
    if not isinstance(value, str):
        raise SchemaError(
            f"Reply field is {_kind(value)}, expected string",
            provider=provider.value,
        )
    return value


def extract_json(text: str, is_object: bool = True, model: Optional[Type[Any]] = None) -> Any:
    """Parse the first balanced ``{...}`` (or ``[...]``) block found in ``text``.

    When ``model`` is given the parsed value is validated against it with
    pydantic and the validated instance is returned. Returns ``None`` if no
    complete block exists or it does not parse/validate.
    """
    open_ch, close_ch = ("{", "}") if is_object else ("[", "]")
    start = text.find(open_ch)
    if start < 0:
        return None

    depth = 0
    in_string = False
    escaped = False
    end = -1
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                end = i + 1
                break
    if end < 0:
        return None
    return _load(text[start:end], model)


def extract_json_flexible(text: str, model: Optional[Type[Any]] = None) -> Any:
    """Like :func:`extract_json` but also accepts arrays, strings and scalars.

    Candidates are tried in order: object, array, first quoted string, first
    ``true``/``false``/``null``/number token.
    """
    for is_object in (True, False):
        found = extract_json(text, is_object=is_object, model=model)
        if found is not None:
            return found
    for pattern in (_STRING_RE, _SCALAR_RE):
        match = pattern.search(text)
        if match:
            found = _load(match.group(0), model)
            if found is not None:
                return found
    return None


def _load(raw: str, model: Optional[Type[Any]]) -> Any:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if model is None:
        return value
    try:
        return TypeAdapter(model).validate_python(value)
    except ValidationError:
        return None


def _kind(node: Any) -> str:
    if node is None:
        return "null"
    if isinstance(node, dict):
        return "object"
    if isinstance(node, list):
        return "array"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, (int, float)):
        return "number"
    return "string" if isinstance(node, str) else type(node).__name__


__all__ = [
    "JsonPath",
    "reply_path",
    "parse_path",
    "extract_path",
    "extract_reply",
    "extract_json",
    "extract_json_flexible",
]
