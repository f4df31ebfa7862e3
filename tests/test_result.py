"""Tests for the result variants and their sequencing/choice primitives."""

import operator

import pytest

from quillparse import (
    DiscardedSuccess,
    GrammarError,
    ParseError,
    ParseFailure,
    ParseSuccess,
    char,
)


def test_success_continue_with() -> None:
    success = char("a").run("abc")
    result = success.continue_with(char("b"))
    assert result.is_success()
    assert result.remainder == "c"
    assert result.output == "b"


def test_failure_continue_with() -> None:
    failure = char("x").run("abc")
    result = failure.continue_with(char("a"))
    assert result.is_fail()
    assert result is failure


def test_discarded_continue_with() -> None:
    discarded = char("a").ignore().run("abc")
    assert isinstance(discarded, DiscardedSuccess)
    result = discarded.continue_with(char("b"))
    assert result.is_success()
    assert result.remainder == "c"


def test_variants_are_exclusive() -> None:
    for result in (ParseSuccess(1, ""), DiscardedSuccess("x"), ParseFailure("label", "x")):
        assert result.is_success() != result.is_fail()


def test_truthiness_follows_variant() -> None:
    assert ParseSuccess("", "")
    assert DiscardedSuccess("")
    assert not ParseFailure("label", "")


def test_discarded_output_is_none() -> None:
    assert DiscardedSuccess("rest").output is None


def test_failure_output_is_a_grammar_error() -> None:
    with pytest.raises(GrammarError):
        ParseFailure("digit", "abc").output


def test_success_expected_is_a_grammar_error() -> None:
    with pytest.raises(GrammarError):
        ParseSuccess("a", "bc").expected


def test_map_success() -> None:
    result = ParseSuccess("a", "bc").map(str.upper)
    assert result == ParseSuccess("A", "bc")


def test_map_failure_never_calls_transform() -> None:
    calls: list[object] = []
    failure = ParseFailure("digit", "abc")
    assert failure.map(calls.append) is failure
    assert calls == []


def test_alternative_picks_first_success() -> None:
    first = ParseSuccess("a", "bc")
    second = ParseSuccess("b", "c")
    assert first.alternative(second) is first


def test_alternative_recovers_from_failure() -> None:
    failure = ParseFailure("a", "xyz")
    success = ParseSuccess("x", "yz")
    assert failure.alternative(success) is success


def test_alternative_reports_leftmost_failure() -> None:
    left = ParseFailure("left", "xyz")
    right = ParseFailure("right", "z")
    assert left.alternative(right) is left


def test_append_concatenates() -> None:
    result = ParseSuccess("a", "bc").append(ParseSuccess("b", "c"), operator.add)
    assert result == ParseSuccess("ab", "c")


def test_append_skips_discarded_outputs() -> None:
    assert ParseSuccess("a", "bc").append(DiscardedSuccess("c"), operator.add) == ParseSuccess("a", "c")
    assert DiscardedSuccess("bc").append(ParseSuccess("b", "c"), operator.add) == ParseSuccess("b", "c")


def test_append_failure_wins() -> None:
    failure = ParseFailure("b", "xc")
    assert ParseSuccess("a", "xc").append(failure, operator.add) is failure
    assert failure.append(ParseSuccess("a", ""), operator.add) is failure


def test_equality_distinguishes_variants() -> None:
    assert ParseSuccess(None, "x") != DiscardedSuccess("x")
    assert ParseFailure("a", "x") == ParseFailure("a", "x")
    assert ParseFailure("a", "x") != ParseFailure("b", "x")


def test_failure_error_locates_position() -> None:
    src = "first line\nsecond line"
    failure = ParseFailure("digit", "line")
    error = failure.error(src)
    assert isinstance(error, ParseError)
    assert error.pos == len(src) - len("line")
    assert error.line_info() == (2, 8)
    assert error.expected == "digit"
    assert error.remainder == "line"
    assert str(error) == "Expected: digit"
    assert any("line 2, column 8" in note for note in error.__notes__)


def test_failure_error_without_source() -> None:
    error = ParseFailure("digit", "abc").error()
    assert error.pos == 0
    assert error.src == "abc"
