"""Lexical analysis of JSON text into a flat list of tokens."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

__all__ = ["TokenType", "JsonToken", "TokenizeError", "tokenize"]

_DIGITS = "0123456789"
_WHITESPACE = " \r\n\t"
_TOKEN_START = "[]{}:,\"-tfn" + _DIGITS
_PUNCTUATION = {
    "{": "LEFT_CURLY",
    "}": "RIGHT_CURLY",
    "[": "LEFT_SQUARE",
    "]": "RIGHT_SQUARE",
    ":": "COLON",
    ",": "COMMA",
}
_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\x08",
    "f": "\x0c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MAX = 2**31 - 1

TokenValue = Union[int, float, str, bool, None]


class TokenType(enum.Enum):
    """Kinds of token found in JSON text."""

    NUMBER_INTEGER = "integer"
    NUMBER_FLOAT = "float"
    STRING = "string"
    LEFT_CURLY = "{"
    RIGHT_CURLY = "}"
    LEFT_SQUARE = "["
    RIGHT_SQUARE = "]"
    COLON = ":"
    COMMA = ","
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class JsonToken:
    """One token: its type and, for literals, the value it carries."""

    type: TokenType
    value: TokenValue = None


class TokenizeError(ValueError):
    """Raised when the text holds a malformed token."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at position {position}")
        self.position = position


def _is_digit(char: str) -> bool:
    return char != "" and char in _DIGITS


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def take(self) -> str:
        char = self.peek()
        if char:
            self.pos += 1
        return char

    def fail(self, message: str) -> TokenizeError:
        return TokenizeError(message, self.pos)

    def find_next(self) -> bool:
        """Skip whitespace; report whether a token can start here."""
        while self.peek() != "" and self.peek() in _WHITESPACE:
            self.pos += 1
        char = self.peek()
        return char != "" and char in _TOKEN_START

    def read_token(self) -> JsonToken:
        char = self.peek()
        if char in _PUNCTUATION:
            self.pos += 1
            return JsonToken(TokenType[_PUNCTUATION[char]])
        if _is_digit(char) or char == "-":
            return self.read_number()
        if char == "t":
            self.expect_word("true")
            return JsonToken(TokenType.BOOLEAN, True)
        if char == "f":
            self.expect_word("false")
            return JsonToken(TokenType.BOOLEAN, False)
        if char == "n":
            self.expect_word("null")
            return JsonToken(TokenType.NULL)
        if char != '"':
            raise self.fail(f"unexpected character {char!r}")
        return self.read_string()

    def expect_word(self, word: str) -> None:
        for expected in word:
            if self.peek() != expected:
                raise self.fail(f"malformed literal, expected {word!r}")
            self.pos += 1

    def read_number(self) -> JsonToken:
        chars: list[str] = []
        contains_dot = False
        contains_exp = False
        negative_exp = False
        exponent = 0

        char = self.peek()
        if char == "-":
            chars.append(self.take())
            char = self.peek()

        if char == "0":
            chars.append(self.take())
            char = self.peek()
            if char != ".":
                return JsonToken(TokenType.NUMBER_INTEGER, 0)
            contains_dot = True
            chars.append(self.take())
            char = self.peek()

        while char != "" and char in _DIGITS + ".e":
            if char == ".":
                if contains_dot or not chars:
                    raise self.fail("misplaced decimal point")
                if len(chars) == 1 and not _is_digit(chars[0]):
                    raise self.fail("decimal point without leading digit")
                contains_dot = True
            if char == "e":
                contains_exp = True
                break
            chars.append(self.take())
            char = self.peek()

        if not chars or not _is_digit(chars[-1]):
            raise self.fail("number must end with a digit")

        number = "".join(chars)
        if not contains_dot and number[0] == "0" and len(number) > 1:
            raise self.fail("leading zero in number")

        if char in ("e", "E"):
            self.take()
            if self.peek() == "-":
                negative_exp = True
                self.take()
            if self.peek() == "+":
                self.take()
            exp_digits = []
            while _is_digit(self.peek()):
                exp_digits.append(self.take())
            if not exp_digits:
                raise self.fail("exponent without digits")
            exponent = int("".join(exp_digits))
            if exponent > _INT32_MAX:
                raise self.fail("exponent out of range")

        if contains_dot:
            value: Union[int, float] = float(number)
            if value in (float("inf"), float("-inf")):
                raise self.fail("number out of range")
            if value == 0.0 and any(c in "123456789" for c in number):
                raise self.fail("number out of range")
            token_type = TokenType.NUMBER_FLOAT
        else:
            value = int(number)
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise self.fail("integer out of range")
            token_type = TokenType.NUMBER_INTEGER

        if contains_exp:
            try:
                multiplier = 10.0 ** (-exponent if negative_exp else exponent)
            except OverflowError:
                raise self.fail("exponent out of range") from None
            value = float(value) * multiplier
            token_type = TokenType.NUMBER_FLOAT

        return JsonToken(token_type, value)

    def read_string(self) -> JsonToken:
        self.take()
        parts: list[str] = []
        backslash = False
        while (char := self.peek()) != "":
            if backslash:
                backslash = False
                if char == "u":
                    self.take()
                    hex_chars = [self.take() for _ in range(4)]
                    if "" in hex_chars:
                        raise self.fail("truncated unicode escape")
                    parts.append(chr(_leading_hex("".join(hex_chars))))
                    continue
                parts.append(_ESCAPES.get(char, ""))
                self.take()
            elif char == "\\":
                backslash = True
                self.take()
            elif char in "\r\n":
                raise self.fail("unexpected end of line in string")
            elif char == '"':
                self.take()
                return JsonToken(TokenType.STRING, "".join(parts))
            else:
                parts.append(self.take())
        raise self.fail("unterminated string")


def _leading_hex(chars: str) -> int:
    """Value of the leading hexadecimal digits; zero when there are none."""
    digits = []
    for char in chars:
        if char not in "0123456789abcdefABCDEF":
            break
        digits.append(char)
    return int("".join(digits), 16) if digits else 0


def tokenize(text: str) -> list[JsonToken]:
    """Split JSON text into tokens.

    Scanning stops quietly at the first character that cannot begin a
    token. A malformed token raises TokenizeError.
    """
    scanner = _Scanner(text)
    tokens: list[JsonToken] = []
    while scanner.find_next():
        tokens.append(scanner.read_token())
    return tokens