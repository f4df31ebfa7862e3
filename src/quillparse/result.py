"""
The outcome of running a parser.

```
r = parser.run("some input")
if r:
    r.output        # `r` is a `ParseSuccess` (or a `DiscardedSuccess`)
    r.remainder
else:
    r.expected      # `r` is a `ParseFailure`
    r.remainder
```
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Callable, Final, Generic, Literal, NoReturn, TypeVar

if TYPE_CHECKING:
    from quillparse.main import Parser


_T = TypeVar("_T")
_T2 = TypeVar("_T2")
_CT = TypeVar("_CT", covariant=True)


def line_column(src: str, pos: int) -> tuple[int, int]:
    """1-based (line, column) of a position in `src`."""
    pos = min(pos, len(src))
    # should still work with CRLF
    line = src.count("\n", 0, pos) + 1
    column = pos - src.rfind("\n", 0, pos) # magically works even when it returns -1
    return (line, column)


class GrammarError(Exception):
    """
    Raised when a grammar is built or used incorrectly.

    Not a parse failure: it means the parser itself is malformed, not that the input was rejected.
    For example running a recursive parser before `Parser.recurse()` was called on it.
    """


class ParseError(Exception):
    """
    The exception that's raised when a parse failure has to unwind instead of being returned.

    Created by `ParseFailure.error()`, raised by `Parser.try_()`.
    """

    def __init__(self, src: str, pos: int, expected: str, remainder: str | None = None) -> None:
        """
        `src`: The string that was being parsed.
        `pos`: The position of the failure.
        `expected`: The label of the failure.
        `remainder`: The input that was left at the failure. Defaults to `src[pos:]`.
        """
        super().__init__(f"Expected: {expected}")
        self.src: str = src
        self.pos: int = pos
        self.expected: str = expected
        self.remainder: str = src[pos:] if remainder is None else remainder
        self.append_pos_note(pos)

    def line_info(self) -> tuple[int, int]:
        """1-based (line, column) of the failure."""
        return line_column(self.src, self.pos)

    def append_pos_note(self, pos: int, msg: str | None = None) -> ParseError:
        note: list[str] = [] if msg is None else [msg]

        pos = min(pos, len(self.src))
        line, column = line_column(self.src, pos)
        note.append(f"At position {pos} (line {line}, column {column})")

        lines = self.src.splitlines()
        if len(lines) > line-1:
            line_str = lines[line-1]
            if len(line_str) >= column:
                if column <= 20:
                    note.append(f"{line_str[:40]}\n{' '*(column-1)}^")
                else:
                    note.append(f"{line_str[(column-20):(column+20)]}\n{' '*20}^")
        self.add_note("\n".join(note))
        return self


class ParseResult(Generic[_CT]):
    """
    Base class of the three result variants: `ParseSuccess`, `DiscardedSuccess` and `ParseFailure`.

    Results are never modified after creation. The remainder of a result is always a suffix of the input it was produced from.
    """

    remainder: str
    """The unconsumed input. For failures, the input at the point of failure."""

    def is_success(self) -> bool:
        raise NotImplementedError

    def is_fail(self) -> bool:
        return not self.is_success()

    @property
    def output(self) -> _CT:
        raise NotImplementedError

    @property
    def expected(self) -> str:
        raise NotImplementedError

    def map(self, transform: Callable[[Any], _T]) -> ParseResult[_T]:
        raise NotImplementedError

    def continue_with(self, parser: Parser[_T]) -> ParseResult[_T]:
        raise NotImplementedError

    def alternative(self, other: ParseResult[Any]) -> ParseResult[Any]:
        raise NotImplementedError

    def append(self, other: ParseResult[Any], concat: Callable[[Any, Any], Any]) -> ParseResult[Any]:
        raise NotImplementedError


class ParseSuccess(ParseResult[_CT]):
    """A successful parse, holding an output value and the rest of the input."""

    def __init__(self, output: _CT, remainder: str) -> None:
        self._output: Final[_CT] = output
        self.remainder: Final[str] = remainder

    def is_success(self) -> Literal[True]:
        return True

    @property
    def output(self) -> _CT:
        return self._output

    @property
    def expected(self) -> NoReturn:
        raise GrammarError("Can't read the label of a successful parse result.")

    def map(self, transform: Callable[[_CT], _T]) -> ParseSuccess[_T]:
        return ParseSuccess(transform(self.output), self.remainder)

    def continue_with(self, parser: Parser[_T]) -> ParseResult[_T]:
        """Runs `parser` on the remainder. The output of this result is dropped."""
        return parser.run(self.remainder)

    def alternative(self, other: ParseResult[Any]) -> ParseResult[Any]:
        return self

    def append(self, other: ParseResult[_T], concat: Callable[[_CT, _T], _T2]) -> ParseResult[Any]:
        """
        Combines this result with `other`, which must have been produced from this result's remainder.

        Failures win. A `DiscardedSuccess` on either side contributes no output.
        """
        if not other.is_success():
            return other
        if isinstance(other, DiscardedSuccess):
            return ParseSuccess(self.output, other.remainder)
        return ParseSuccess(concat(self.output, other.output), other.remainder)

    def __bool__(self) -> Literal[True]:
        return True

    def __eq__(self, other: object) -> bool:
        return (
            type(other) is type(self)
            and self.output == other.output # type: ignore[attr-defined]
            and self.remainder == other.remainder # type: ignore[attr-defined]
        )

    def __repr__(self) -> str:
        return f"ParseSuccess({self.output!r}, remainder={self.remainder!r})"


class DiscardedSuccess(ParseSuccess[None]):
    """
    A successful parse whose output was deliberately thrown away.

    Behaves like `ParseSuccess` for sequencing and choice. The output is always `None`.
    """

    def __init__(self, remainder: str) -> None:
        super().__init__(None, remainder)

    def append(self, other: ParseResult[_T], concat: Callable[[Any, Any], Any]) -> ParseResult[_T]:
        return other

    def __repr__(self) -> str:
        return f"DiscardedSuccess(remainder={self.remainder!r})"


class ParseFailure(ParseResult[Any]):
    """
    A failed parse. Can be converted into a `ParseError`.

    `expected` describes what the parser was looking for, `remainder` is the input at the point of failure.
    """

    def __init__(self, expected: str, remainder: str) -> None:
        self._expected: Final[str] = expected
        self.remainder: Final[str] = remainder

    def is_success(self) -> Literal[False]:
        return False

    @property
    def output(self) -> NoReturn:
        raise GrammarError(
            f"Can't read the output of a failed parse result (expected: {self.expected})."
        )

    @property
    def expected(self) -> str:
        return self._expected

    def map(self, transform: Callable[[Any], Any]) -> ParseFailure:
        return self

    def continue_with(self, parser: Parser[Any]) -> ParseFailure:
        return self

    def alternative(self, other: ParseResult[_T]) -> ParseResult[_T]:
        # Leftmost failure wins when both sides failed.
        return other if other.is_success() else self

    def append(self, other: ParseResult[Any], concat: Callable[[Any, Any], Any]) -> ParseFailure:
        return self

    def error(self, src: str | None = None) -> ParseError:
        """
        Converts this to a `ParseError`.

        `src`: The complete input that was being parsed, used to locate the failure. Defaults to the remainder itself.
        """
        if src is None:
            src = self.remainder
        pos = len(src) - len(self.remainder) if src.endswith(self.remainder) else 0
        return ParseError(src, pos, self.expected, self.remainder)

    def __bool__(self) -> Literal[False]:
        return False

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, ParseFailure)
            and self.expected == other.expected
            and self.remainder == other.remainder
        )

    def __repr__(self) -> str:
        return f"ParseFailure({self.expected!r}, remainder={self.remainder!r})"
