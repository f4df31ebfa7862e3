"""
Library to build string parsers by combining smaller parsers.

See the objects for more explanations.

See the `quillparse.general` module for general purpose parsers you can use as examples.

Defining parsers:
```
digits = at_least_one(digit_char()).map("".join)
pair = collect(digits.then_ignore(char(",")), digits)

expr = recursive()
expr.recurse(between(char("("), char(")"), expr) | digits)
```

Using parsers:
```
result = pair.run("12,34 rest")
if result:
    ... # `result` is a `ParseSuccess`: result.output, result.remainder
else:
    ... # `result` is a `ParseFailure`: result.expected, result.remainder

pair.try_("12;34")   # raises ParseError
```
"""

import quillparse.const as const
import quillparse.config as config
import quillparse.main
from quillparse.result import (
    GrammarError,
    ParseError,
    ParseResult,
    ParseSuccess,
    DiscardedSuccess,
    ParseFailure,
)
from quillparse.main import (
    RecursionStatus,
    Parser,
    recursive,
    pure,
    succeed,
    fail,
    keep_first,
    keep_second,
    not_followed_by,
    append,
)
from quillparse.combinators import (
    optional,
    ignore,
    either,
    choice,
    sequence,
    assemble,
    collect,
    between,
    many,
    at_least_one,
    some,
    repeat,
    sep_by,
    sep_by1,
    look_ahead,
    eof,
)
from quillparse.primitives import (
    satisfy,
    any_single,
    char,
    char_i,
    string,
    string_i,
    one_of,
    none_of,
    regex,
    take_while,
    take_while1,
    digit_char,
    binary_digit_char,
    octal_digit_char,
    hex_digit_char,
    alpha_char,
    alpha_num_char,
    whitespace,
    whitespace1,
    token,
)
import quillparse.general as general
