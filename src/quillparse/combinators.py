"""
Combinators built on top of the `Parser` methods.

Nothing here needs access to the internals of `Parser`; everything goes through `Parser.make()`, `Parser.run()` and the result classes.
"""

from __future__ import annotations
from typing import Any, TypeVar

from functools import reduce

import quillparse.const as const
from quillparse.result import ParseResult, ParseSuccess, DiscardedSuccess, ParseFailure
from quillparse.main import (
    Parser,
    pure,
    keep_first,
    keep_second,
)

_T = TypeVar("_T")


def optional(parser: Parser[_T]) -> Parser[_T | str]:
    """Same as `Parser.optional()`."""
    return parser.optional()

def ignore(parser: Parser[Any]) -> Parser[None]:
    """Same as `Parser.ignore()`."""
    return parser.ignore()

def either(first: Parser[Any], second: Parser[Any]) -> Parser[Any]:
    """Same as `Parser.or_()`."""
    return first.or_(second)

def choice(*parsers: Parser[Any]) -> Parser[Any]:
    """
    Tries the parsers in order and returns the first success.

    If all of them fail, returns the failure of the first one.
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    return reduce(lambda first, second: first.or_(second), parsers)

def sequence(*parsers: Parser[Any]) -> Parser[Any]:
    """Runs the parsers one after another. Keeps the output of the last one. See `Parser.sequence()`."""
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    return reduce(lambda first, second: first.sequence(second), parsers)

def assemble(*parsers: Parser[Any]) -> Parser[Any]:
    """
    Runs the parsers one after another and concatenates their outputs with `+`.

    ```
    assemble(char("a"), char("b"), char("c"))     # "abc" -> "abc"
    ```
    """
    if len(parsers) <= 0:
        raise ValueError("At least one parser required.")
    return reduce(lambda first, second: first.append(second), parsers)

def collect(*parsers: Parser[Any]) -> Parser[list[Any]]:
    """
    Runs the parsers one after another. Outputs a list with the output of each of them.

    Discarded outputs show up as `None`, so the positions always match the parsers.
    """
    def collector(input: str) -> ParseResult[list[Any]]:
        outputs: list[Any] = []
        remainder = input
        for parser in parsers:
            result = parser.run(remainder)
            if not result:
                return result
            outputs.append(result.output)
            remainder = result.remainder
        return ParseSuccess(outputs, remainder)
    return Parser.make(collector)

def between(open: Parser[Any], close: Parser[Any], middle: Parser[_T]) -> Parser[_T]:
    """
    Parses `open`, `middle` and `close`. Keeps the output of `middle`.

    ```
    between(char("("), char(")"), digit_char())    # "(5)" -> "5"
    ```
    """
    return keep_first(keep_second(open, middle), close)

def many(parser: Parser[_T]) -> Parser[list[_T]]:
    """
    Matches the parser zero or more times. Outputs a list. Never fails.

    Stops at the first failure, or as soon as the parser succeeds without consuming anything.
    """
    def repeated(input: str) -> ParseResult[list[_T]]:
        outputs: list[_T] = []
        remainder = input
        while True:
            result = parser.run(remainder)
            if not result or len(result.remainder) >= len(remainder):
                break
            outputs.append(result.output)
            remainder = result.remainder
        return ParseSuccess(outputs, remainder)
    return Parser.make(repeated)

def at_least_one(parser: Parser[_T]) -> Parser[list[_T]]:
    """Matches the parser one or more times. Outputs a list."""
    return parser.bind(lambda first: many(parser).map(lambda rest: [first] + rest))

some = at_least_one

def repeat(n: int, parser: Parser[_T]) -> Parser[list[_T]]:
    """Matches the parser exactly `n` times. Outputs a list."""
    if n < 0:
        raise ValueError("Can't repeat a negative number of times.")
    return collect(*([parser] * n))

def sep_by1(separator: Parser[Any], parser: Parser[_T]) -> Parser[list[_T]]:
    """
    One or more `parser`s separated by `separator`. Outputs a list of the `parser` outputs.

    ```
    sep_by1(char(","), digit_char())    # "1,2,3" -> ["1", "2", "3"]
    ```
    """
    return parser.bind(
        lambda first: many(keep_second(separator, parser)).map(lambda rest: [first] + rest)
    )

def sep_by(separator: Parser[Any], parser: Parser[_T]) -> Parser[list[_T]]:
    """Zero or more `parser`s separated by `separator`. Outputs a list of the `parser` outputs."""
    return sep_by1(separator, parser).or_(pure([]))

def look_ahead(parser: Parser[_T]) -> Parser[_T]:
    """
    Positive lookahead. Succeeds with the output of `parser`, but never consumes any input.

    See `Parser.not_followed_by()` for the negative version.
    """
    def peek(input: str) -> ParseResult[_T]:
        result = parser.run(input)
        if not result:
            return result
        if isinstance(result, DiscardedSuccess):
            return DiscardedSuccess(input)
        return ParseSuccess(result.output, input)
    return Parser.make(peek)

def eof() -> Parser[None]:
    """Only succeeds at the end of the input."""
    return Parser.make(
        lambda input: DiscardedSuccess(input) if input == "" else ParseFailure(const.EOF_LABEL, input)
    )
