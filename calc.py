"""Evaluate integer arithmetic expressions.

The pipeline is `parse` -> `to_postfix` -> `evaluate`; `calc` runs all three.
Run as a script to evaluate stdin line by line (set DEBUG=1 to log the
intermediate token sequences).
"""
import logging
import os
import sys

import numpy as np

from expr_parser import Num, Op, ParseError, format_tokens, parse, to_postfix

DEBUG = bool(os.getenv("DEBUG", False))

logger = logging.getLogger(__name__)


class StackUnderflow(ValueError):
    def __init__(self, op):
        super().__init__(f"missing operand for {op.op!r}")
        self.op = op


def evaluate(postfix):
    """Run the stack machine over `postfix` and return the single result.

    Returns None unless exactly one value is left at the end. Division by zero
    follows IEEE 754 rather than raising.

    >>> evaluate(to_postfix(parse("2 + 3 * 4")))
    14.0
    >>> evaluate(to_postfix(parse("1 / 0")))
    inf
    >>> evaluate([Num(5), Num(5)]) is None
    True
    """
    stack = []
    with np.errstate(all="ignore"):
        for tok in postfix:
            if type(tok) is Num:
                stack.append(np.float64(tok.value))
            elif type(tok) is Op:
                if len(stack) < 2:
                    raise StackUnderflow(tok)
                stack[-2:] = [tok(*stack[-2:])]
    if len(stack) != 1:
        logger.debug("%d values left for %s", len(stack), format_tokens(postfix))
        return None
    (ans,) = stack
    return float(ans)


def calc(text):
    """
    >>> calc("(5 + 5) * (10 - 5) / 10")
    5.0
    """
    return evaluate(to_postfix(parse(text)))


def main(lines=None, out=None):
    lines = sys.stdin if lines is None else lines
    out = sys.stdout if out is None else out
    status = 0
    for line in lines:
        if not line.strip():
            continue
        try:
            ans = calc(line)
        except (ParseError, StackUnderflow) as e:
            logger.debug("failed on %r", line, exc_info=True)
            print(f"error: {e}", file=sys.stderr)
            status = 1
            continue
        if ans is not None:
            print(ans, file=out)
    return status


def cli():
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.WARNING)
    sys.exit(main())


if __name__ == "__main__":
    cli()
