"""A mutable JSON value tree: parsing, building, editing and rendering."""

from __future__ import annotations

import os
from collections import deque
from typing import Iterable, Optional, Union

from .jsonformat import JsonType, format_value
from .jsontoken import JsonToken, TokenizeError, TokenType, tokenize

__all__ = ["JsonValue"]

_SCALAR_TOKENS = {
    TokenType.NUMBER_INTEGER,
    TokenType.NUMBER_FLOAT,
    TokenType.STRING,
    TokenType.BOOLEAN,
    TokenType.NULL,
}
_ELEMENT_TOKENS = _SCALAR_TOKENS | {TokenType.LEFT_CURLY, TokenType.LEFT_SQUARE}

Scalar = Union[int, float, str, bool, None]


class JsonValue:
    """One JSON value: object, array, number, string, boolean or null.

    A value that failed to parse reports ``valid()`` as False. Indexing
    with a string turns the value into an object and with an integer into
    an array, creating null members as needed.
    """

    _bad_instance: Optional["JsonValue"] = None

    def __init__(self) -> None:
        self._type = JsonType.NULL
        self._valid = True
        self._integer = 0
        self._frac = 0.0
        self._string = ""
        self._boolean = True
        self._object: dict[str, JsonValue] = {}
        self._array: list[JsonValue] = []

    # construction

    @classmethod
    def parse(cls, text: Union[str, bytes, bytearray]) -> "JsonValue":
        """Parse JSON text; bytes are decoded as UTF-8."""
        value = cls()
        value.load(text)
        return value

    @classmethod
    def from_tokens(cls, tokens: Iterable[JsonToken]) -> "JsonValue":
        """Build a value from tokens. A deque is consumed in place."""
        queue = tokens if isinstance(tokens, deque) else deque(tokens)
        return cls._from_queue(queue)

    @classmethod
    def from_file(cls, path: Union[str, os.PathLike]) -> "JsonValue":
        """Parse a UTF-8 JSON file."""
        with open(path, "rb") as handle:
            return cls.parse(handle.read())

    @classmethod
    def bad(cls) -> "JsonValue":
        """The shared invalid value returned for impossible lookups."""
        if JsonValue._bad_instance is None:
            JsonValue._bad_instance = JsonValue()
        instance = JsonValue._bad_instance
        instance._type = JsonType.BAD
        instance._valid = False
        return instance

    @classmethod
    def _from_queue(cls, queue: deque) -> "JsonValue":
        value = cls()
        value._type = JsonType.BAD
        if not queue:
            return value

        kind = queue[0].type
        if kind == TokenType.LEFT_CURLY:
            value._valid = cls._parse_object(queue, value._object)
            if value._valid:
                value._type = JsonType.OBJECT
        elif kind == TokenType.LEFT_SQUARE:
            value._valid = cls._parse_array(queue, value._array)
            if value._valid:
                value._type = JsonType.ARRAY
        elif kind in _SCALAR_TOKENS:
            token = queue.popleft()
            if kind == TokenType.NUMBER_INTEGER:
                value._type = JsonType.INTEGER
                value._integer = token.value
            elif kind == TokenType.NUMBER_FLOAT:
                value._type = JsonType.FLOAT
                value._frac = token.value
            elif kind == TokenType.STRING:
                value._type = JsonType.STRING
                value._string = token.value
            elif kind == TokenType.BOOLEAN:
                value._type = JsonType.BOOLEAN
                value._boolean = token.value
            else:
                value._type = JsonType.NULL
        else:
            value._valid = False
        return value

    @classmethod
    def _parse_object(cls, queue: deque, members: dict) -> bool:
        if len(queue) < 2 or queue[0].type != TokenType.LEFT_CURLY:
            return False
        queue.popleft()

        while queue:
            kind = queue[0].type
            if kind == TokenType.RIGHT_CURLY:
                queue.popleft()
                return True
            if kind != TokenType.STRING:
                return False
            key = queue[0].value
            if not key or key in members:
                return False
            queue.popleft()
            if not queue or queue[0].type != TokenType.COLON:
                return False
            queue.popleft()
            if not queue:
                return False
            member = cls._from_queue(queue)
            if not member.valid():
                return False
            members[key] = member
            if queue and queue[0].type == TokenType.COMMA:
                queue.popleft()
        return False

    @classmethod
    def _parse_array(cls, queue: deque, elements: list) -> bool:
        if len(queue) < 2 or queue[0].type != TokenType.LEFT_SQUARE:
            return False
        queue.popleft()

        while queue:
            kind = queue[0].type
            if kind == TokenType.RIGHT_SQUARE:
                queue.popleft()
                return True
            if kind not in _ELEMENT_TOKENS:
                return False
            element = cls._from_queue(queue)
            if not element.valid():
                return False
            elements.append(element)
            if queue and queue[0].type == TokenType.COMMA:
                queue.popleft()
            elif queue and queue[0].type == TokenType.RIGHT_SQUARE:
                queue.popleft()
                return True
            else:
                return False
        return False

    # state

    def _clean(self) -> None:
        self._object.clear()
        self._array.clear()
        self._type = JsonType.NULL
        self._valid = True

    def _take_over(self, other: "JsonValue") -> None:
        self._type = other._type
        self._valid = other._valid
        self._integer = other._integer
        self._frac = other._frac
        self._string = other._string
        self._boolean = other._boolean
        self._object = other._object
        self._array = other._array

    def _assign(self, value: Union["JsonValue", Scalar]) -> None:
        if isinstance(value, JsonValue):
            self._take_over(value.copy())
            return
        self._clean()
        if value is None:
            return
        if isinstance(value, bool):
            self._type = JsonType.BOOLEAN
            self._boolean = value
        elif isinstance(value, int):
            self._type = JsonType.INTEGER
            self._integer = value
        elif isinstance(value, float):
            self._type = JsonType.FLOAT
            self._frac = value
        elif isinstance(value, str):
            self._type = JsonType.STRING
            self._string = value
        else:
            raise TypeError(f"cannot store {type(value).__name__} in a JSON value")

    @staticmethod
    def _wrap(value: Union["JsonValue", Scalar]) -> "JsonValue":
        if isinstance(value, JsonValue):
            return value
        wrapped = JsonValue()
        wrapped._assign(value)
        return wrapped

    # accessors

    def valid(self) -> bool:
        """False when the value came from malformed JSON."""
        return self._valid

    def type(self) -> JsonType:
        return self._type

    def __len__(self) -> int:
        if self._type == JsonType.OBJECT:
            return len(self._object)
        if self._type == JsonType.ARRAY:
            return len(self._array)
        if self._type in (
            JsonType.INTEGER,
            JsonType.FLOAT,
            JsonType.STRING,
            JsonType.BOOLEAN,
        ):
            return 1
        return 0

    def integer(self) -> int:
        return self._integer

    def frac(self) -> float:
        return self._frac

    def string(self) -> str:
        return self._string

    def boolean(self) -> bool:
        return self._boolean

    def reset(self) -> None:
        """Turn the value into a valid null."""
        self._clean()

    def load(self, text: Union[str, bytes, bytearray]) -> None:
        """Replace the value with the one parsed from JSON text."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        self._clean()
        try:
            tokens = tokenize(text)
        except TokenizeError:
            tokens = []
        self._take_over(self._from_queue(deque(tokens)))

    # objects and arrays

    def keys(self) -> list[str]:
        """Object member names in sorted order."""
        return sorted(self._object)

    def get(self, key: Union[str, int]) -> Optional["JsonValue"]:
        """Member by name or element by index; None when absent."""
        if isinstance(key, str):
            return self._object.get(key)
        if isinstance(key, int) and 0 <= key < len(self._array):
            return self._array[key]
        return None

    def erase(self, key: Union[str, int]) -> bool:
        """Remove a member or element; return whether one was removed."""
        if isinstance(key, str):
            return self._object.pop(key, None) is not None
        if self._type != JsonType.ARRAY or not 0 <= key < len(self):
            return False
        del self._array[key]
        return True

    def add(self, *args: Union["JsonValue", Scalar]) -> bool:
        """Append ``add(value)`` to an array or set ``add(key, value)`` in an object.

        A value of another kind is first turned into an empty array or
        object. Returns False for an empty member name.
        """
        if len(args) == 1:
            if self._type != JsonType.ARRAY:
                self._clean()
                self._type = JsonType.ARRAY
            self._array.append(self._wrap(args[0]))
            self._valid = True
            return True
        if len(args) == 2:
            key, value = args
            if not isinstance(key, str):
                raise TypeError("object member names must be strings")
            if not key:
                return False
            member = self._wrap(value)
            if self._type != JsonType.OBJECT:
                self._clean()
                self._type = JsonType.OBJECT
            self._object[key] = member
            return True
        raise TypeError(f"add() takes 1 or 2 arguments ({len(args)} given)")

    def __getitem__(self, key: Union[str, int]) -> "JsonValue":
        if isinstance(key, str):
            if not key:
                return self.bad()
            if self._type != JsonType.OBJECT:
                self._clean()
                self._type = JsonType.OBJECT
            return self._object.setdefault(key, JsonValue())
        if isinstance(key, int):
            if key < 0:
                return self.bad()
            if self._type != JsonType.ARRAY:
                self._clean()
                self._type = JsonType.ARRAY
            while len(self._array) <= key:
                self._array.append(JsonValue())
            return self._array[key]
        raise TypeError("JSON values are indexed by str or int")

    def __setitem__(self, key: Union[str, int], value: Union["JsonValue", Scalar]) -> None:
        if key == "" or (isinstance(key, int) and not isinstance(key, bool) and key < 0):
            raise KeyError(key)
        self[key]._assign(value)

    def copy(self) -> "JsonValue":
        """A deep copy sharing nothing with this value."""
        duplicate = JsonValue()
        duplicate._type = self._type
        duplicate._valid = self._valid
        duplicate._integer = self._integer
        duplicate._frac = self._frac
        duplicate._string = self._string
        duplicate._boolean = self._boolean
        duplicate._object = {name: member.copy() for name, member in self._object.items()}
        duplicate._array = [element.copy() for element in self._array]
        return duplicate

    # rendering

    def text(self, singleline: bool = True) -> str:
        """Render as JSON text; empty for an invalid value."""
        return format_value(self, singleline)

    def __str__(self) -> str:
        return self.text()