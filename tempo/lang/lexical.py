"""Lexical analysis and statement classification for tempo language. A line is tokenized and classified by its
leading token only, so a variable such as `ifValue` or `letter` never changes how a line is read.

All grammar can be loosely defined as follows:

```
<let_stmt>   ::= "let" <name> "=" <expr> ";"        ; <expr> is <token> or <token> ("+"|"-"|"*"|"/") <token>
<if_stmt>    ::= "if" "(" <name> (">"|"<") <name> ")" <char>*
                                                    ; everything after ")" is decorative: the statement always
                                                    ; assigns c, the left value if true and the right one if not
<print_stmt> ::= "print" <name> ";"
<exit_stmt>  ::= "exit" <char>*                     ; always exits with status 0
```

Lines that are empty, a lone ";", or that start with anything else (`c = a;`, `}`, `} else {`) are ignored.
"""

import re
from abc import abstractmethod, ABC
from dataclasses import dataclass

from tempo.lang.numerical import (RELATIONAL_OPS, evaluate_condition, evaluate_expression, find_operator, leading,
                                  lookup)


TERMINATOR = ";"
WHITESPACE = " \t"

TOKEN_SPEC = [
    ("NAME", r"[A-Za-z_][A-Za-z_0-9]*"),
    ("NUMBER", r"[0-9]+"),
    ("OP", r"[-+*/<>=]"),
    ("PUNCT", r"[;(){}]"),
    ("SKIP", r"[ \t]+"),
    ("UNKNOWN", r"."),
]
TOKEN_RE = re.compile("|".join(f"(?P<{kind}>{pattern})" for kind, pattern in TOKEN_SPEC))


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    start: int


def tokenize(line):
    """Returns list of Tokens in line, whitespace excluded."""
    return [Token(match.lastgroup, match.group(), match.start())
            for match in TOKEN_RE.finditer(line) if match.lastgroup != "SKIP"]


def strip_terminator(text):
    """Cuts text at its first terminator, if any."""
    pos = text.find(TERMINATOR)
    return text[:pos] if pos != -1 else text


class Grammar(ABC):
    """Superclass representing any statement in tempo language."""
    keyword: str

    def __init__(self, expr, tokens=None):
        """Assumes check_grammar has been run. expr may be the raw line: columns are kept relative to it."""
        self.indent = len(expr) - len(expr.lstrip(WHITESPACE))  # offset of self.expr within the raw line
        self.expr = Grammar.preprocess(expr)
        self.tokens = tokens if tokens is not None else tokenize(self.expr)
        self._cls = type(self).__name__

    @classmethod
    def check_grammar(cls, tokens):
        """Whether or not the leading token is this statement's keyword."""
        return bool(tokens) and tokens[0].kind == "NAME" and tokens[0].text == cls.keyword

    @staticmethod
    def preprocess(expr):
        """Strips surrounding spaces and tabs."""
        return expr.strip(WHITESPACE)

    @staticmethod
    def is_blank(expr):
        return expr in ("", TERMINATOR)

    @classmethod
    def infer(cls, expr):
        """Returns an object of the first statement class (in definition order) that accepts expr, or None if expr is
        blank or no statement class accepts it.
        """
        trimmed = cls.preprocess(expr)
        if cls.is_blank(trimmed):
            return None

        tokens = tokenize(trimmed)
        for subclass in cls.__subclasses__():
            if subclass.check_grammar(tokens):
                return subclass(expr, tokens)
        return None

    @property
    def body_start(self):
        """Position in self.expr right after the leading keyword."""
        return self.tokens[0].start + len(self.keyword)

    @property
    def body(self):
        """Text after the leading keyword."""
        return self.expr[self.body_start:]

    def column(self, pos):
        """Column in the raw line of position pos in self.expr."""
        return self.indent + pos

    @abstractmethod
    def execute(self, session):
        """Runs this statement against session's store, writing any output to session's streams."""

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.expr == self.expr

    def __hash__(self):
        return hash(self.expr)


class LetStmt(Grammar):
    """Declaration/assignment: let <name> = <expr>;"""
    keyword = "let"

    def __init__(self, expr, tokens=None):
        super().__init__(expr, tokens)

        body = self.body
        eq = body.find("=")
        self.value_pos = None
        if eq == -1:
            self.name, self.value_expr = None, None
        else:
            self.name = body[:eq].strip(WHITESPACE)
            value = body[eq + 1:]
            self.value_expr = strip_terminator(value.strip(WHITESPACE)).strip(WHITESPACE)
            self.value_pos = self.body_start + eq + 1 + leading(value)

    @property
    def malformed(self):
        return not self.name

    def execute(self, session):
        if self.malformed:
            return

        result = evaluate_expression(self.value_expr, session.store, session.error_handler,
                                     self.column(self.value_pos))
        if result.ok:
            session.store.set(self.name, result.value)
            session.write(f"Variable {self.name} set to {result.value}")


class IfStmt(Grammar):
    """Conditional: if (<left> <op> <right>) ... where only the condition is ever looked at."""
    keyword = "if"

    def __init__(self, expr, tokens=None):
        super().__init__(expr, tokens)
        self.left, self.op, self.right = None, None, None
        self.left_pos, self.right_pos = None, None

        open_paren = self.expr.find("(")
        close_paren = self.expr.find(")", open_paren + 1)
        if open_paren == -1 or close_paren == -1:
            return

        condition = self.expr[open_paren + 1:close_paren]
        for op in RELATIONAL_OPS:
            pos = find_operator(condition, op)
            if pos != -1:
                self.op = op
                self.left = condition[:pos].strip(WHITESPACE)
                self.right = condition[pos + 1:].strip(WHITESPACE)
                self.left_pos = open_paren + 1 + leading(condition[:pos])
                self.right_pos = open_paren + 1 + pos + 1 + leading(condition[pos + 1:])
                break

    @property
    def malformed(self):
        return self.op is None

    def execute(self, session):
        if self.malformed:
            return

        condition_met = evaluate_condition(self.left, self.right, self.op, session.store)
        chosen, chosen_pos = (self.left, self.left_pos) if condition_met else (self.right, self.right_pos)

        prefix = "Condition met" if condition_met else "Condition not met"
        session.write(f"{prefix}: {self.left} {self.op} {self.right}")

        result = lookup(chosen, session.store)
        if not result.ok:
            session.error_handler.warn("variable '{}' not found, {} set to 0", (chosen, session.RESULT_VAR),
                                       kind=result.kind, col=self.column(chosen_pos))
        session.store.set(session.RESULT_VAR, result.value if result.ok else 0)


class PrintStmt(Grammar):
    """Print: print <name>;"""
    keyword = "print"

    def __init__(self, expr, tokens=None):
        super().__init__(expr, tokens)
        self.name = strip_terminator(self.body.strip(WHITESPACE)).strip(WHITESPACE)
        self.name_pos = self.body_start + leading(self.body)

    def execute(self, session):
        result = lookup(self.name, session.store)
        if result.ok:
            session.write(str(result.value))
        else:
            session.error_handler.warn("variable '{}' not found", self.name, kind=result.kind,
                                       col=self.column(self.name_pos))


class ExitStmt(Grammar):
    """Exit: terminates the whole program with status 0, whatever follows the keyword."""
    keyword = "exit"

    def execute(self, session):
        session.write("Exiting the program.")
        raise SystemExit(0)
