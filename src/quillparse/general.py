from __future__ import annotations
from typing import Final

from collections.abc import Sequence

import quillparse.const as const
from quillparse.result import ParseResult, ParseSuccess, ParseFailure
from quillparse.main import Parser
from quillparse.primitives import regex, take_while1

# numbers

_PREFIXES: Final[tuple[tuple[str, int, frozenset[str], str], ...]] = (
    ("0b", 2, const.BINARY, "binary"),
    ("0o", 8, const.OCTAL, "octal"),
    ("0x", 16, const.HEXADECIMAL, "hexadecimal"),
)

_BASE_DIGITS: Final[dict[int, frozenset[str]]] = {
    2: const.BINARY,
    8: const.OCTAL,
    10: const.DECIMAL,
    16: const.HEXADECIMAL,
}

def integer_number(base: int = 0) -> Parser[int]:
    """
    An optionally negative integer.

    If `base` is 0, the base is interpreted from the string.
    - `0b`: Binary
    - `0o`: Octal
    - `0x`: Hexadecimal
    - otherwise decimal

    A prefix must be followed by at least one digit of its base.
    """
    if base != 0 and base not in _BASE_DIGITS:
        raise ValueError(f"Unsupported base: {base}")
    def parser(input: str) -> ParseResult[int]:
        rest = input
        sign = ""
        if rest.startswith("-"):
            sign = "-"
            rest = rest[1:]
        number_base = base
        if base == 0:
            for prefix, prefix_base, digits, name in _PREFIXES:
                if rest.startswith(prefix):
                    r = take_while1(lambda c: c in digits, f"{name} digit after {prefix}").run(rest[len(prefix):])
                    if not r:
                        return r
                    return ParseSuccess(int(sign + r.output, prefix_base), r.remainder)
            number_base = 10
        digits = _BASE_DIGITS[number_base]
        r = take_while1(lambda c: c in digits).run(rest)
        if not r:
            return ParseFailure("integer", input)
        return ParseSuccess(int(sign + r.output, number_base), r.remainder)
    return Parser.make(parser)

_FLOAT_PATTERN: Final[str] = (
    r"-?(?:"
    r"[0-9]+\.[0-9]+(?:[eE][-+]?[0-9]+)?"
    r"|[0-9]+\.[eE][-+]?[0-9]+"
    r"|[0-9]+[eE][-+]?[0-9]+"
    r"|\.[0-9]+(?:[eE][-+]?[0-9]+)?"
    r")"
)

def float_number() -> Parser[float]:
    """
    An optionally negative float. Needs a fractional part or an exponent: `1.5`, `.5`, `1e3`, `1.5E-2`.

    Plain integers are not floats. Neither is `1.` without an exponent.
    """
    return regex(_FLOAT_PATTERN).map(lambda m: float(m.group(0))).label("float")

# quoted string

GENERAL_ESCAPES: Final[dict[str, str]] = {
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}

def quoted_string(
    *,
    start: Sequence[str] = ('"', "'"),
    end: Sequence[str] = ('"', "'"),
    escape: str = '\\',
    custom_escapes: dict[str, str] = GENERAL_ESCAPES,
) -> Parser[str]:
    """
    A quoted string. Outputs the contents with the escape sequences decoded.

    Besides `custom_escapes`, `\\uXXXX` is decoded as a unicode character. Any other escaped character is kept as-is.
    """
    assert len(start) == len(end), "The number of starting quotes and ending quotes don't match."
    def parser(input: str) -> ParseResult[str]:
        for quote_index, s in enumerate(start):
            if input.startswith(s):
                break
        else:
            return ParseFailure("quoted string", input)
        rest = input[len(start[quote_index]):]
        closing = end[quote_index]
        data: list[str] = []
        while True:
            if rest.startswith(escape):
                rest = rest[len(escape):]
                for sequence, result in custom_escapes.items():
                    if rest.startswith(sequence):
                        data.append(result)
                        rest = rest[len(sequence):]
                        break
                else:
                    if rest.startswith("u"):
                        code = rest[1:5]
                        if len(code) < 4 or not all(c in const.HEXADECIMAL for c in code):
                            return ParseFailure("4 hexadecimal characters after unicode escape", rest[1:])
                        data.append(chr(int(code, base=16)))
                        rest = rest[5:]
                    elif rest:
                        data.append(rest[0])
                        rest = rest[1:]
                    else:
                        return ParseFailure(f"a character to escape after `{escape}`", rest)
            elif rest.startswith(closing):
                return ParseSuccess("".join(data), rest[len(closing):])
            elif rest:
                data.append(rest[0])
                rest = rest[1:]
            else:
                return ParseFailure(f"closing quote `{closing}`", rest)
    return Parser.make(parser)

def raw_quoted_string(
    *,
    start: Sequence[str] = ('r"', "r'"),
    end: Sequence[str] = ('"', "'"),
) -> Parser[str]:
    """A quoted string with no escape sequences."""
    assert len(start) == len(end), "The number of starting quotes and ending quotes don't match."
    def parser(input: str) -> ParseResult[str]:
        for quote_index, s in enumerate(start):
            if input.startswith(s):
                break
        else:
            return ParseFailure("raw quoted string", input)
        rest = input[len(start[quote_index]):]
        closing = end[quote_index]
        position = rest.find(closing)
        if position < 0:
            return ParseFailure(f"closing quote `{closing}`", "")
        return ParseSuccess(rest[:position], rest[position + len(closing):])
    return Parser.make(parser)
