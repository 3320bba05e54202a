"""Keywords, operators, errors and diagnostics supported in lox.
"""

import math
import sys
from typing import Callable as function, List, Optional

# Errors

class LoxError(Exception):
    """Base exception class for all Lox errors."""

    def __init__(self, msg, token, line=None) -> None:
        super().__init__(msg)
        self.token = token
        self.line = line
        if token:
            self.line = token.line

    def msg(self) -> str:
        return self.args[0]

    def where(self) -> str:
        """Returns the location fragment for a static error report."""
        if not self.token:
            return ''
        if self.token.type == 'EOF':
            return ' at end'
        return f' at "{self.token.lexeme}"'

    def report(self) -> str:
        """Returns the error location and message as a formatted string"""
        return f"[line {self.line}] Error{self.where()}: {self.msg()}"

class ParseError(LoxError):
    """Custom error raised by scanner and parser."""

class LogicError(LoxError):
    """Custom error raised by resolver."""

class RuntimeError(LoxError):
    """Custom error raised by interpreter."""

    def report(self) -> str:
        return f"{self.msg()}\n[line {self.line}]"



def printError(*objects, **kwargs) -> None:
    """Default error handler, writes to stderr."""
    print(*objects, file=sys.stderr, **kwargs)


class Diagnostics:
    """Collects errors reported by each stage of a single run.

    Attributes
    ----------
    - hadError
        True if a lexical, syntax or resolution error was reported
    - hadRuntimeError
        True if a runtime error was reported
    - errors
        Every reported error, in order of reporting
    """

    def __init__(self, handler: function = printError) -> None:
        self.handler = handler
        self.hadError = False
        self.hadRuntimeError = False
        self.errors: List[LoxError] = []

    def error(self, err: LoxError) -> None:
        """Records a static error and passes it to the handler."""
        self.errors += [err]
        self.hadError = True
        self.handler(err.report())

    def runtimeError(self, err: "RuntimeError") -> None:
        self.errors += [err]
        self.hadRuntimeError = True
        self.handler(err.report())

    @property
    def last(self) -> Optional[LoxError]:
        return self.errors[-1] if self.errors else None



# Token types

KEYWORDS = {
    'and': 'AND',
    'class': 'CLASS',
    'else': 'ELSE',
    'false': 'FALSE',
    'for': 'FOR',
    'fun': 'FUN',
    'if': 'IF',
    'nil': 'NIL',
    'or': 'OR',
    'print': 'PRINT',
    'return': 'RETURN',
    'super': 'SUPER',
    'this': 'THIS',
    'true': 'TRUE',
    'var': 'VAR',
    'while': 'WHILE',
}

SYM_SINGLE = {
    '(': 'LEFT_PAREN',
    ')': 'RIGHT_PAREN',
    '{': 'LEFT_BRACE',
    '}': 'RIGHT_BRACE',
    ',': 'COMMA',
    '.': 'DOT',
    '-': 'MINUS',
    '+': 'PLUS',
    ';': 'SEMICOLON',
    '*': 'STAR',
    '/': 'SLASH',
}

# Symbols which may be followed by '='
SYM_MULTI = {
    '!': ('BANG', 'BANG_EQUAL'),
    '=': ('EQUAL', 'EQUAL_EQUAL'),
    '<': ('LESS', 'LESS_EQUAL'),
    '>': ('GREATER', 'GREATER_EQUAL'),
}

# Tokens that begin a new declaration or statement, used by the parser
# to resynchronise after an error
STMT_START = (
    'CLASS', 'FUN', 'VAR', 'FOR', 'IF', 'WHILE', 'PRINT', 'RETURN',
)

MAX_ARGS = 255



# Operators
# These operators are used internally by the interpreter.
# Operands are floats, checked by the interpreter before the call.
def add(x, y):
    return x + y

def sub(x, y):
    return x - y

def mul(x, y):
    return x * y

def div(x, y):
    """Division by zero gives an infinity or NaN, as for IEEE doubles."""
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y

def lt(x, y):
    return x < y

def lte(x, y):
    return x <= y

def gt(x, y):
    return x > y

def gte(x, y):
    return x >= y

def eq(x, y):
    """Values of different types are never equal."""
    if type(x) is not type(y):
        return False
    return x == y

def ne(x, y):
    return not eq(x, y)

# Binary operators on two numbers
NUMERIC = {
    'MINUS': sub,
    'STAR': mul,
    'SLASH': div,
    'LESS': lt,
    'LESS_EQUAL': lte,
    'GREATER': gt,
    'GREATER_EQUAL': gte,
}

EQUALITY = {
    'EQUAL_EQUAL': eq,
    'BANG_EQUAL': ne,
}
