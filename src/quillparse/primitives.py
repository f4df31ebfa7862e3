"""
Primitive parsers that match characters and strings.

Everything here is a leaf built with `Parser.make()`. Failures are labelled so they read well without `Parser.label()`:
```
char("a").run("xbc")        # ParseFailure('char(a)', remainder='xbc')
```
"""

from __future__ import annotations
from typing import Callable

from collections.abc import Iterable
import re

import quillparse.const as const
from quillparse.result import ParseResult, ParseSuccess, DiscardedSuccess, ParseFailure
from quillparse.main import Parser, keep_first


def satisfy(predicate: Callable[[str], bool], label: str = "satisfy") -> Parser[str]:
    """Matches a single character for which `predicate` returns True."""
    def parser(input: str) -> ParseResult[str]:
        if input and predicate(input[0]):
            return ParseSuccess(input[0], input[1:])
        return ParseFailure(label, input)
    return Parser.make(parser)

def any_single() -> Parser[str]:
    """Matches any single character."""
    return satisfy(lambda c: True, "anySingle")

def char(value: str) -> Parser[str]:
    """Matches the given character. Case sensitive."""
    if len(value) != 1:
        raise ValueError("char() takes exactly one character.")
    return satisfy(lambda c: c == value, f"char({value})")

def char_i(value: str) -> Parser[str]:
    """Matches the given character. Not case sensitive. Outputs the character as it appears in the input."""
    if len(value) != 1:
        raise ValueError("char_i() takes exactly one character.")
    lowered = value.lower()
    return satisfy(lambda c: c.lower() == lowered, f"charI({value})")

def string(value: str) -> Parser[str]:
    """Matches the given string. Case sensitive."""
    if len(value) <= 0:
        raise ValueError("string() requires a non-empty string.")
    def parser(input: str) -> ParseResult[str]:
        if input.startswith(value):
            return ParseSuccess(value, input[len(value):])
        return ParseFailure(f"string({value})", input)
    return Parser.make(parser)

def string_i(value: str) -> Parser[str]:
    """Matches the given string. Not case sensitive. Outputs the string as it appears in the input."""
    if len(value) <= 0:
        raise ValueError("string_i() requires a non-empty string.")
    lowered = value.lower()
    def parser(input: str) -> ParseResult[str]:
        if input[:len(value)].lower() == lowered:
            return ParseSuccess(input[:len(value)], input[len(value):])
        return ParseFailure(f"stringI({value})", input)
    return Parser.make(parser)

def one_of(chars: Iterable[str]) -> Parser[str]:
    """Matches any one of the given characters."""
    allowed = frozenset(chars)
    return satisfy(lambda c: c in allowed, f"oneOf({''.join(sorted(allowed))})")

def none_of(chars: Iterable[str]) -> Parser[str]:
    """Matches any single character except the given ones."""
    forbidden = frozenset(chars)
    return satisfy(lambda c: c not in forbidden, f"noneOf({''.join(sorted(forbidden))})")

def regex(pattern: str | re.Pattern, flags: int | re.RegexFlag = 0) -> Parser[re.Match[str]]:
    """Matches the regex at the start of the input. Outputs the `re.Match`."""
    compiled = re.compile(pattern, flags)
    def parser(input: str) -> ParseResult[re.Match[str]]:
        m = compiled.match(input)
        if m is None:
            return ParseFailure(f"regex({compiled.pattern})", input)
        return ParseSuccess(m, input[m.end():])
    return Parser.make(parser)

def take_while(predicate: Callable[[str], bool]) -> Parser[str]:
    """Matches characters as long as `predicate` holds. Outputs the matched string, possibly empty."""
    def parser(input: str) -> ParseResult[str]:
        end = 0
        while end < len(input) and predicate(input[end]):
            end += 1
        return ParseSuccess(input[:end], input[end:])
    return Parser.make(parser)

def take_while1(predicate: Callable[[str], bool], label: str = "takeWhile1") -> Parser[str]:
    """Like `take_while()`, but fails if not even one character matches."""
    matcher = take_while(predicate)
    def parser(input: str) -> ParseResult[str]:
        result = matcher.run(input)
        if not result.output:
            return ParseFailure(label, input)
        return result
    return Parser.make(parser)

def digit_char() -> Parser[str]:
    return satisfy(lambda c: c in const.DECIMAL, "digitChar")

def binary_digit_char() -> Parser[str]:
    return satisfy(lambda c: c in const.BINARY, "binDigitChar")

def octal_digit_char() -> Parser[str]:
    return satisfy(lambda c: c in const.OCTAL, "octDigitChar")

def hex_digit_char() -> Parser[str]:
    return satisfy(lambda c: c in const.HEXADECIMAL, "hexDigitChar")

def alpha_char() -> Parser[str]:
    return satisfy(lambda c: c in const.ALPHABETIC, "alphaChar")

def alpha_num_char() -> Parser[str]:
    return satisfy(lambda c: c in const.ALNUM, "alphaNumChar")

def whitespace() -> Parser[None]:
    """Skips zero or more whitespaces. Never fails."""
    def parser(input: str) -> ParseResult[None]:
        return DiscardedSuccess(input.lstrip("".join(const.WHITESPACES)))
    return Parser.make(parser)

def whitespace1() -> Parser[None]:
    """Skips one or more whitespaces."""
    def parser(input: str) -> ParseResult[None]:
        if input[:1] not in const.WHITESPACES:
            return ParseFailure("whitespace", input)
        return DiscardedSuccess(input.lstrip("".join(const.WHITESPACES)))
    return Parser.make(parser)

def token(parser: Parser[str]) -> Parser[str]:
    """Matches `parser`, then skips any whitespace after it."""
    return keep_first(parser, whitespace())
