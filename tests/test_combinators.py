import pytest

from quillparse import (
    DiscardedSuccess,
    ParseFailure,
    ParseSuccess,
    assemble,
    at_least_one,
    between,
    char,
    choice,
    collect,
    digit_char,
    either,
    eof,
    ignore,
    look_ahead,
    many,
    optional,
    pure,
    repeat,
    sep_by,
    sep_by1,
    sequence,
    some,
    string,
    succeed,
)


def test_either() -> None:
    assert either(char("a"), char("b")).run("bcd") == ParseSuccess("b", "cd")


def test_choice() -> None:
    parser = choice(char("a"), char("b"), char("c"))
    assert parser.run("cat") == ParseSuccess("c", "at")
    assert parser.run("dog") == ParseFailure("char(a)", "dog")


def test_choice_requires_a_parser() -> None:
    with pytest.raises(ValueError):
        choice()


def test_sequence() -> None:
    assert sequence(char("a"), char("b"), char("c")).run("abcd") == ParseSuccess("c", "d")


def test_assemble() -> None:
    assert assemble(char("a"), char("b"), char("c")).run("abcd") == ParseSuccess("abc", "d")
    assert assemble(char("a"), char("b")).run("axc").is_fail()


def test_collect() -> None:
    parser = collect(digit_char(), char(",").ignore(), digit_char())
    assert parser.run("1,2!") == ParseSuccess(["1", None, "2"], "!")
    assert parser.run("1;2").is_fail()


def test_between() -> None:
    assert between(char("("), char(")"), digit_char()).run("(5)!") == ParseSuccess("5", "!")
    assert between(char("("), char(")"), digit_char()).run("(5").is_fail()


def test_many() -> None:
    assert many(digit_char()).run("123abc") == ParseSuccess(["1", "2", "3"], "abc")
    assert many(digit_char()).run("abc") == ParseSuccess([], "abc")


def test_many_stops_on_empty_match() -> None:
    assert many(pure("x")).run("abc") == ParseSuccess([], "abc")
    assert many(succeed()).run("abc") == ParseSuccess([], "abc")


def test_at_least_one() -> None:
    assert at_least_one(digit_char()).run("12a") == ParseSuccess(["1", "2"], "a")
    assert at_least_one(digit_char()).run("a") == ParseFailure("digitChar", "a")
    assert some is at_least_one


def test_repeat() -> None:
    assert repeat(2, digit_char()).run("123") == ParseSuccess(["1", "2"], "3")
    assert repeat(3, digit_char()).run("12a").is_fail()
    assert repeat(0, digit_char()).run("1") == ParseSuccess([], "1")
    with pytest.raises(ValueError):
        repeat(-1, digit_char())


def test_sep_by1() -> None:
    parser = sep_by1(char(","), digit_char())
    assert parser.run("1,2,3") == ParseSuccess(["1", "2", "3"], "")
    # a trailing separator is left in the input
    assert parser.run("1,2,") == ParseSuccess(["1", "2"], ",")
    assert parser.run(",1").is_fail()


def test_sep_by() -> None:
    parser = sep_by(char(","), digit_char())
    assert parser.run("1,2 rest") == ParseSuccess(["1", "2"], " rest")
    assert parser.run("rest") == ParseSuccess([], "rest")


def test_look_ahead() -> None:
    assert look_ahead(string("ab")).run("abc") == ParseSuccess("ab", "abc")
    assert look_ahead(char("a").ignore()).run("abc") == DiscardedSuccess("abc")
    assert look_ahead(char("x")).run("abc") == ParseFailure("char(x)", "abc")


def test_eof() -> None:
    assert eof().run("") == DiscardedSuccess("")
    assert eof().run("a") == ParseFailure("<EOF>", "a")
    assert char("a").then_ignore(eof()).run("a") == ParseSuccess("a", "")


def test_optional_and_ignore_functions() -> None:
    assert optional(char("a")).run("b") == ParseSuccess("", "b")
    assert ignore(char("a")).run("ab") == DiscardedSuccess("b")
