"""Integer evaluation for tempo: resolving tokens to values, single-operator arithmetic, and single relational
comparisons. Nothing here mutates the store.

Resolution and arithmetic return an explicit Ok/Err result instead of an in-band failure value, so a legitimately
computed -1 is never mistaken for a failed lookup.
"""

import re
from dataclasses import dataclass
from enum import Enum

from tempo.lang.error import GenericException


ARITHMETIC_OPS = "+-*/"
RELATIONAL_OPS = "><"  # order is lookup preference
LITERAL = re.compile(r"[+-]?[0-9]+")


class ErrorKind(Enum):
    INVALID_LITERAL = "invalid literal"
    UNBOUND_VARIABLE = "unbound variable"


@dataclass(frozen=True)
class Ok:
    """Successful resolution/evaluation."""
    value: int

    @property
    def ok(self):
        return True


@dataclass(frozen=True)
class Err:
    """Failed resolution/evaluation. expr is the offending text."""
    kind: ErrorKind
    expr: str

    @property
    def ok(self):
        return False


def truncdiv(dividend, divisor):
    """Integer division rounding toward zero, unlike Python's floor division."""
    quotient = abs(dividend) // abs(divisor)
    return quotient if (dividend < 0) == (divisor < 0) else -quotient


OPERATIONS = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": truncdiv,
}


def leading(text):
    """Number of whitespace chars text starts with."""
    return len(text) - len(text.lstrip())


def lookup(name, store):
    """Returns Ok(value) if name is bound in store, else Err(UNBOUND_VARIABLE, name). Never warns."""
    value = store.get(name)
    if value is None:
        return Err(ErrorKind.UNBOUND_VARIABLE, name)
    return Ok(value)


def resolve_value(token, store, error_handler, col=None):
    """Resolves token to Ok(value) by variable lookup, then by parsing it as a base-10 integer literal. Reports a
    warning through error_handler and returns Err if neither works. col is where token sits in the current line.
    """
    result = lookup(token, store)
    if result.ok:
        return result

    if LITERAL.fullmatch(token):
        return Ok(int(token))

    error_handler.warn("invalid argument: '{}'", token, kind=ErrorKind.INVALID_LITERAL, col=col)
    return Err(ErrorKind.INVALID_LITERAL, token)


def find_operator(expr, ops):
    """Returns index of the first char in expr that is one of ops, or -1."""
    for idx, char in enumerate(expr):
        if char in ops:
            return idx
    return -1


def evaluate_expression(expr, store, error_handler, col=None):
    """Evaluates expr, which is either a single token or two tokens around the first arithmetic operator in expr.
    Both operands are always resolved, so each bad operand gets its own warning. col is where expr sits in the
    current line, used to point warnings at the right operand.
    """
    if col is not None:
        col += leading(expr)
    expr = expr.strip()

    pos = find_operator(expr, ARITHMETIC_OPS)
    if pos == -1:
        return resolve_value(expr, store, error_handler, col)

    op = expr[pos]
    left_text, right_text = expr[:pos], expr[pos + 1:]
    left_col = col + leading(left_text) if col is not None else None
    right_col = col + pos + 1 + leading(right_text) if col is not None else None

    left = resolve_value(left_text.strip(), store, error_handler, left_col)
    right = resolve_value(right_text.strip(), store, error_handler, right_col)

    if not left.ok:
        return left
    if not right.ok:
        return right

    if op == "/" and right.value == 0:
        raise GenericException("division by zero in '{}'", expr, start=pos, end=len(expr))

    return Ok(OPERATIONS[op](left.value, right.value))


def evaluate_condition(left, right, op, store):
    """Compares the stored values of two variable names. Literals are not accepted here: if either name is unbound,
    or op is not a relational operator, the condition is simply false.
    """
    if left not in store or right not in store:
        return False

    if op == ">":
        return store.get(left) > store.get(right)
    elif op == "<":
        return store.get(left) < store.get(right)
    return False
