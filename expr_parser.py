"""Tokenizer and infix -> postfix conversion for integer arithmetic.

>>> format_tokens(to_postfix(parse("(5 + 5) * (10 - 5) / 10")))
'5 5 + 10 5 - * 10 /'
"""
import logging
import operator
import re
from typing import Callable, NamedTuple, Union

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    pass


class BadToken(ParseError):
    def __init__(self, char):
        super().__init__(f"bad token {char!r}")
        self.char = char


class MismatchedParens(ParseError):
    def __init__(self):
        super().__init__("mismatched parentheses")


class Num(NamedTuple):
    value: int

    def __str__(self):
        return str(self.value)


class Op(NamedTuple):
    op: str
    prec: int
    fun: Callable

    def __call__(self, left, right):
        return self.fun(left, right)

    def __repr__(self):
        return f"op({self.op!r:})"

    def __str__(self):
        return self.op


class Bracket(NamedTuple):
    which: str

    def __str__(self):
        return self.which


Token = Union[Num, Op, Bracket]

# One line per precedence tier, lowest first.
OP_GROUPS = """
add+ sub-
mul* truediv/
""".strip()
OPS = {
    o: Op(o, prec, getattr(operator, fun))
    for prec, op_group in enumerate(OP_GROUPS.split("\n"))
    for [(fun, o)] in map(re.compile(r"^(\w+)(\W)$").findall, op_group.split())
}

DIGITS = "0123456789"
BLANKS = " \n\t\r"


def format_tokens(tokens):
    return " ".join(map(str, tokens))


def parse(text):
    """Split `text` into a list of tokens.

    Digits extend a preceding number token, even across blanks:

    >>> parse("12 3")
    [Num(value=123)]
    >>> parse("2*(3+4)")
    [Num(value=2), op('*'), Bracket(which='('), Num(value=3), op('+'), Num(value=4), Bracket(which=')')]
    """
    tokens = []
    parens = []
    for c in text:
        if c in DIGITS:
            if tokens and type(tokens[-1]) is Num:
                tokens[-1] = Num(tokens[-1].value * 10 + int(c))
            else:
                tokens.append(Num(int(c)))
        elif o := OPS.get(c):
            tokens.append(o)
        elif c == "(":
            tokens.append(Bracket(c))
            parens.append(c)
        elif c == ")":
            tokens.append(Bracket(c))
            if not parens or parens.pop() != "(":
                raise MismatchedParens()
        elif c not in BLANKS:
            raise BadToken(c)
    if parens:
        raise MismatchedParens()
    logger.debug("parse %r -> %s", text, format_tokens(tokens))
    return tokens


def to_postfix(tokens):
    """Reorder infix `tokens` into postfix (reverse polish) order.

    Equal precedence is resolved left to right:

    >>> format_tokens(to_postfix(parse("10 - 3 - 2 * 4")))
    '10 3 - 2 4 * -'
    """
    out = []
    ops = []
    for tok in tokens:
        if type(tok) is Num:
            out.append(tok)
        elif type(tok) is Op:
            while ops and type(ops[-1]) is Op and ops[-1].prec >= tok.prec:
                out.append(ops.pop())
            ops.append(tok)
        elif tok.which == "(":
            ops.append(tok)
        else:
            while ops and ops[-1] != Bracket("("):
                out.append(ops.pop())
            # A stray ")" with nothing left to close is dropped.
            if ops:
                ops.pop()
    while ops:
        out.append(ops.pop())
    logger.debug("postfix: %s", format_tokens(out))
    return out
