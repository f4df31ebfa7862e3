"""
The implementations of the main classes.
"""

from __future__ import annotations
from typing import Any, Callable, Generic, NoReturn, Self, TypeVar

import enum
import logging
import operator

import quillparse.config as config
import quillparse.const as const
from quillparse.result import (
    GrammarError,
    ParseResult,
    ParseSuccess,
    DiscardedSuccess,
    ParseFailure,
)

log = logging.getLogger(__name__)

_T = TypeVar("_T")
_CT = TypeVar("_CT", covariant=True)

ParserFunction = Callable[[str], ParseResult[_T]]


class RecursionStatus(enum.Enum):
    """
    The recursion marker of a `Parser`.

    Parsers created by `Parser.make()` are `NON_RECURSIVE` for their whole life.
    Parsers created by `Parser.recursive()` start as `AWAITING_RECURSE` and move to `RECURSION_SET` exactly once, when `Parser.recurse()` is called.
    """
    NON_RECURSIVE = "non-recursive"
    AWAITING_RECURSE = "awaiting-recurse"
    RECURSION_SET = "recursion-set"


class Parser(Generic[_CT]):
    """
    A parser is any function that takes a string and returns a `ParseResult`. This class wraps such functions.

    Usually you don't create parsers with `Parser.make()` directly. Build them from the parsers in
    `quillparse.primitives` and the combinators here and in `quillparse.combinators`.

    Every combinator returns a new parser. The only parsers that ever change are the ones made by `Parser.recursive()`.

    ```
    digits = at_least_one(digit_char())
    number = digits.map(lambda ds: int("".join(ds)))

    r = number.run("42abc")
    if r:
        r.output        # 42
        r.remainder     # "abc"
    ```
    """

    def __init__(
        self,
        parser_function: ParserFunction[_CT],
        recursion_status: RecursionStatus = RecursionStatus.NON_RECURSIVE,
    ) -> None:
        """
        Use `Parser.make()` or `Parser.recursive()` instead.
        """
        self._parser_function: ParserFunction[_CT] = parser_function
        self._recursion_status: RecursionStatus = recursion_status

    @staticmethod
    def make(parser_function: ParserFunction[_T]) -> Parser[_T]:
        """Makes a new (non-recursive) parser from a function."""
        assert callable(parser_function)
        return Parser(parser_function, RecursionStatus.NON_RECURSIVE)

    @staticmethod
    def recursive() -> Parser[Any]:
        """
        Makes a placeholder for a recursive parser.

        The placeholder can be used inside other parsers right away, but it must be set up with `Parser.recurse()` before it's run:
        ```
        expr = Parser.recursive()
        parens = between(char("("), char(")"), expr)
        expr.recurse(parens | digit_char())
        ```
        """
        def placeholder(input: str) -> NoReturn:
            raise GrammarError(
                "Can't run a recursive parser that hasn't been set up yet. "
                "A parser created by recursive() must be given its definition with .recurse(parser) "
                "before it can be used."
            )
        return Parser(placeholder, RecursionStatus.AWAITING_RECURSE)

    @property
    def recursion_status(self) -> RecursionStatus:
        return self._recursion_status

    def recurse(self, parser: Parser[Any]) -> Self:
        """
        Gives a parser made by `Parser.recursive()` its definition. After this, it behaves like a regular parser.

        Can only be called once, and only on parsers made by `Parser.recursive()`.
        """
        if self._recursion_status is RecursionStatus.NON_RECURSIVE:
            raise GrammarError(
                "Can't recurse on a non-recursive parser. Create a recursive parser first using recursive(), "
                "then call .recurse() on it."
            )
        elif self._recursion_status is RecursionStatus.RECURSION_SET:
            raise GrammarError("recurse() can only be called once on a recursive parser.")
        # Dispatch at run time. `parser` may itself be a recursive parser that isn't set up yet.
        self._parser_function = lambda input: parser.run(input)
        self._recursion_status = RecursionStatus.RECURSION_SET
        log.debug("Recursive parser %r set up", self)
        return self

    def run(self, input: str) -> ParseResult[_CT]:
        """Runs the parser on an input."""
        return self._parser_function(input)

    def try_(self, input: str) -> ParseResult[_CT]:
        """
        Runs the parser on an input. Raises a `ParseError` instead of returning a failure.

        ```
        try:
            r = parser.try_(src)
        except ParseError as e:
            ... # e.expected, e.pos, e.line_info()
        ```
        """
        result = self.run(input)
        if not result:
            assert isinstance(result, ParseFailure)
            raise result.error(input)
        return result

    def continue_from(self, result: ParseResult[Any]) -> ParseResult[_CT]:
        """Runs the parser on the remainder of another result."""
        return self.run(result.remainder)

    def map(self, transform: Callable[[_CT], _T]) -> Parser[_T]:
        """Maps a function over the output of the parser."""
        return Parser.make(lambda input: self.run(input).map(transform))

    def construct(self, factory: Callable[[_CT], _T]) -> Parser[_T]:
        """
        Builds a value out of the output, using `factory` (usually a class).

        ```
        string("true").construct(Keyword)   # output: Keyword("true")
        ```
        """
        return self.map(factory)

    def bind(self, f: Callable[[_CT], Parser[_T]]) -> Parser[_T]:
        """
        Runs the parser, feeds its output to `f`, then runs the parser returned by `f` on the remainder.

        If this parser fails, `f` is never called and the failure is returned as-is.
        """
        def bound(input: str) -> ParseResult[_T]:
            result = self.run(input)
            if not result:
                return result
            return result.continue_with(f(result.output))
        return Parser.make(bound)

    def sequence(self, second: Parser[_T]) -> Parser[_T]:
        """
        Parses this, then `second`. The output of this parser is thrown away and the output of `second` is kept.

        Failures are labelled `"sequence"`.

        Same as `followed_by()` and `>>`.
        """
        return self.bind(lambda _: second).label(const.SEQUENCE_LABEL)

    def followed_by(self, second: Parser[_T]) -> Parser[_T]:
        """Same as `sequence()`."""
        return self.sequence(second)

    def apply(self, parser: Parser[Any]) -> Parser[Any]:
        """
        Sequential application. This parser must output a function, which is then applied to the output of `parser`.

        ```
        pure(lambda d: int(d) * 2).apply(digit_char())     # "4" -> 8
        ```
        """
        return self.bind(lambda f: parser.map(f))

    def or_(self, other: Parser[_T]) -> Parser[_CT | _T]:
        """
        Ordered choice. Returns the first successful result or, if both fail, the failure of this parser.

        The order matters: `string("http") | string("https")` never matches `"https"`, because `"http"` already succeeds.

        Both alternatives are run on the same input. See `quillparse.config.eager_choice`.

        Same as `|`.
        """
        def choice(input: str) -> ParseResult[_CT | _T]:
            result = self.run(input)
            if result and not config.eager_choice:
                return result
            return result.alternative(other.run(input))
        return Parser.make(choice)

    def optional(self) -> Parser[_CT | str]:
        """Parses this if possible. Otherwise succeeds with `""` without consuming anything."""
        return self.or_(pure(""))

    def label(self, label: str) -> Parser[_CT]:
        """
        Replaces the failures of this parser with `label`.

        The failure is reported at the input this parser started from, not where it actually stopped.
        ```
        char(":").followed_by(char(")")).label("smiley")
        ```
        """
        def labelled(input: str) -> ParseResult[_CT]:
            if config.debug:
                log.debug("trying %s", label)
            result = self.run(input)
            if result:
                return result
            if config.debug:
                log.debug("%s failed (%s) at %r", label, result.expected, input[:20])
            return ParseFailure(label, input)
        return Parser.make(labelled)

    def ignore(self) -> Parser[None]:
        """Parses this, but discards the output. See `DiscardedSuccess`."""
        def ignored(input: str) -> ParseResult[None]:
            result = self.run(input)
            if not result:
                return result
            return DiscardedSuccess(result.remainder)
        return Parser.make(ignored)

    def then_ignore(self, other: Parser[Any]) -> Parser[_CT]:
        """
        Parses this, then `other`. Keeps the output of this parser and throws away the output of `other`.

        Same as `<<`.
        """
        return keep_first(self, other)

    def not_followed_by(self, other: Parser[Any]) -> Parser[_CT]:
        """
        Parses this, then succeeds only if `other` fails right after it. `other` never consumes any input.

        `string("print")` also matches `"printXYZ"`. `string("print").not_followed_by(alpha_num_char())` doesn't.
        """
        return keep_first(self, not_followed_by(other))

    def append(self, other: Parser[Any], concat: Callable[[Any, Any], Any] = operator.add) -> Parser[Any]:
        """
        Parses this, then `other`, and concatenates their outputs with `concat` (`+` by default).

        Same as `+`.
        """
        return append(self, other, concat)

    def __or__(self, other: Parser[_T]) -> Parser[_CT | _T]:
        return self.or_(other)

    def __rshift__(self, other: Parser[_T]) -> Parser[_T]:
        return self.sequence(other)

    def __lshift__(self, other: Parser[Any]) -> Parser[_CT]:
        return self.then_ignore(other)

    def __add__(self, other: Parser[Any]) -> Parser[Any]:
        return self.append(other)

    def __repr__(self) -> str:
        return f"<Parser {self._recursion_status.value} at {id(self):#x}>"



def recursive() -> Parser[Any]:
    """Same as `Parser.recursive()`."""
    return Parser.recursive()

def pure(value: _T) -> Parser[_T]:
    """Always succeeds with `value`, without consuming anything."""
    return Parser.make(lambda input: ParseSuccess(value, input))

def succeed() -> Parser[None]:
    """Always succeeds with a `DiscardedSuccess`, without consuming anything."""
    return Parser.make(lambda input: DiscardedSuccess(input))

def fail(label: str) -> Parser[Any]:
    """Always fails with `label`."""
    return Parser.make(lambda input: ParseFailure(label, input))

def keep_first(first: Parser[_T], second: Parser[Any]) -> Parser[_T]:
    """Parses `first`, then `second`. Keeps the output of `first`."""
    def parser(input: str) -> ParseResult[_T]:
        r1 = first.run(input)
        if not r1:
            return r1
        r2 = r1.continue_with(second)
        if not r2:
            return r2
        if isinstance(r1, DiscardedSuccess):
            return DiscardedSuccess(r2.remainder)
        return ParseSuccess(r1.output, r2.remainder)
    return Parser.make(parser)

def keep_second(first: Parser[Any], second: Parser[_T]) -> Parser[_T]:
    """Parses `first`, then `second`. Keeps the output of `second`. Unlike `Parser.sequence()`, failures are not relabelled."""
    return first.bind(lambda _: second)

def not_followed_by(parser: Parser[Any]) -> Parser[None]:
    """
    Negative lookahead. Succeeds (with a `DiscardedSuccess`) only if `parser` fails.

    Never consumes any input.
    """
    def lookahead(input: str) -> ParseResult[None]:
        if parser.run(input):
            return ParseFailure(const.NOT_FOLLOWED_BY_LABEL, input)
        return DiscardedSuccess(input)
    return Parser.make(lookahead)

def append(left: Parser[Any], right: Parser[Any], concat: Callable[[Any, Any], Any] = operator.add) -> Parser[Any]:
    """
    Parses `left`, then `right`, and concatenates their outputs with `concat`.

    Discarded outputs are skipped: `char("a") + char("-").ignore() + char("b")` outputs `"ab"`.
    """
    def parser(input: str) -> ParseResult[Any]:
        r1 = left.run(input)
        if not r1:
            return r1
        return r1.append(r1.continue_with(right), concat)
    return Parser.make(parser)
