"""Rendering of JSON values as text, on one line or indented."""

from __future__ import annotations

import enum
from typing import Iterator, Protocol

__all__ = ["JsonType", "quote_string", "format_value"]

_INDENT = "    "
_SHORT_LIMIT = 20
_QUOTE_TABLE = str.maketrans(
    {
        '"': '\\"',
        "\\": "\\\\",
        "/": "\\/",
        "\x08": "\\b",
        "\x0c": "\\f",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }
)


class JsonType(enum.IntEnum):
    """Kinds of JSON value."""

    BAD = 0
    OBJECT = 1
    ARRAY = 2
    INTEGER = 3
    FLOAT = 4
    STRING = 5
    BOOLEAN = 6
    NULL = 7


class _Value(Protocol):
    """What the formatter needs from a JSON value."""

    def valid(self) -> bool: ...

    def type(self) -> JsonType: ...

    def __len__(self) -> int: ...

    def integer(self) -> int: ...

    def frac(self) -> float: ...

    def string(self) -> str: ...

    def boolean(self) -> bool: ...

    def keys(self) -> list[str]: ...

    def get(self, key): ...


def quote_string(text: str) -> str:
    """Quote and escape a string the way it is written into JSON text."""
    return '"' + text.translate(_QUOTE_TABLE) + '"'


def _indent(level: int) -> str:
    return _INDENT * level


def _elements(value: _Value) -> Iterator[tuple[_Value, bool]]:
    """Array elements, each paired with whether it is the last one."""
    count = len(value)
    for position in range(count):
        yield value.get(position), position == count - 1


def _members(value: _Value) -> Iterator[tuple[str, _Value, bool]]:
    """Object members in key order, each flagged when it is the last one."""
    keys = list(value.keys())
    for position, key in enumerate(keys):
        yield key, value.get(key), position == len(keys) - 1


class _Writer:
    def __init__(self) -> None:
        self.parts: list[str] = []

    def write(self, text: str) -> None:
        self.parts.append(text)

    def result(self) -> str:
        return "".join(self.parts)

    def value(self, value: _Value, singleline: bool = True, level: int = 0) -> None:
        if not value.valid():
            return
        kind = value.type()
        if kind == JsonType.INTEGER:
            self.write(str(value.integer()))
        elif kind == JsonType.FLOAT:
            self.write(f"{value.frac():.6f}")
        elif kind == JsonType.BOOLEAN:
            self.write("true" if value.boolean() else "false")
        elif kind == JsonType.NULL:
            self.write("null")
        elif kind == JsonType.STRING:
            self.write(quote_string(value.string()))
        elif kind == JsonType.OBJECT:
            if singleline:
                self.obj(value)
            else:
                self.obj(value, singleline, level)
        elif kind == JsonType.ARRAY:
            compact = _single(value)
            if singleline or len(compact) <= _SHORT_LIMIT:
                self.write(compact)
            else:
                self.array(value, singleline, level)

    def obj(
        self,
        value: _Value,
        singleline: bool = True,
        level: int = 0,
        addcomma: bool = False,
    ) -> None:
        inner = 0 if singleline else level + 1
        self.write(_indent(level) + "{")
        if not singleline:
            self.write("\n")

        for key, member, last in _members(value):
            newline = False
            comma_written_inside = False
            self.write(_indent(inner) + quote_string(key) + ":")

            if not singleline:
                compact = _single(member)
                kind = member.type()
                if kind == JsonType.OBJECT and len(member) > 1:
                    newline = True
                    self.write("\n")
                elif kind == JsonType.ARRAY:
                    nested = any(
                        child.type() in (JsonType.ARRAY, JsonType.OBJECT)
                        for child, _ in _elements(member)
                    )
                    if nested or len(compact) > _SHORT_LIMIT:
                        newline = True
                        self.write("\n")

            if not newline:
                self.value(member)
                if not last:
                    self.write(",")
            elif last:
                self.value(member)
            elif member.type() == JsonType.OBJECT:
                comma_written_inside = True
                self.obj(member, singleline, inner, True)
            elif member.type() == JsonType.ARRAY:
                comma_written_inside = True
                self.array(member, singleline, inner, True)
            else:
                self.value(member, singleline, inner)
                self.write(",")

            if not singleline and not comma_written_inside:
                self.write("\n")

        self._close("}", singleline, level, addcomma)

    def array(
        self,
        value: _Value,
        singleline: bool = True,
        level: int = 0,
        addcomma: bool = False,
    ) -> None:
        inner = 0 if singleline else level + 1
        self.write(_indent(level) + "[")
        if not singleline:
            self.write("\n")

        for element, last in _elements(value):
            newline_end = True
            if singleline:
                self.value(element, singleline, inner)
                if not last:
                    self.write(",")
            else:
                estimate = len(_single(element))
                kind = element.type()
                if kind == JsonType.OBJECT and (
                    len(element) > 1 or estimate > _SHORT_LIMIT
                ):
                    newline_end = False
                    self.obj(element, singleline, inner, not last)
                elif kind == JsonType.ARRAY and estimate > _SHORT_LIMIT:
                    newline_end = False
                    self.array(element, singleline, inner, not last)
                else:
                    self.write(_indent(inner))
                    self.value(element)
                    if not last:
                        self.write(",")

            if not singleline and newline_end:
                self.write("\n")

        self._close("]", singleline, level, addcomma)

    def _close(self, bracket: str, singleline: bool, level: int, addcomma: bool) -> None:
        if singleline:
            self.write(bracket)
        elif addcomma:
            self.write(_indent(level) + bracket + ",\n")
        else:
            self.write(_indent(level) + bracket + "\n")


def _single(value: _Value) -> str:
    writer = _Writer()
    writer.value(value)
    return writer.result()


def format_value(value: _Value, singleline: bool = True) -> str:
    """Render a JSON value as text.

    On one line the output holds no whitespace outside strings. Otherwise
    objects and long arrays are spread over lines indented by four spaces.
    An invalid value renders as an empty string.
    """
    writer = _Writer()
    writer.value(value, singleline)
    return writer.result()