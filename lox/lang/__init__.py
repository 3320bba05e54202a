"""lang
This package defines the entities and types used by lox.

types.py contains definitions for attribute types used in object.py
object.py contains definitions for runtime objects in Lox.

Token
    A token in the source code

Expr
    Expressions, evaluated to a value

Stmt
    Statements, executed for their effect
"""
from dataclasses import dataclass
from typing import (
    Iterable,
    List,
    Optional,
    Sequence,
)

# Merge namespace
from .object import *
from .types import *

from . import types as t

# Plurals
Exprs = Sequence["Expr"]
Stmts = List["Stmt"]
Params = Sequence["Token"]


@dataclass(eq=False, frozen=True)
class Token:
    """Tokens encapsulate data needed by the parser to construct Exprs
    and Stmts.
    It also encapsulates code information for error reporting.
    """
    __slots__ = ("type", "lexeme", "literal", "line")
    type: t.TokenType
    lexeme: str
    literal: t.PyLiteral
    line: int

    def __str__(self) -> str:
        return f"[line {self.line}] {self.type} {self.lexeme!r}"


class Expr:
    """Represents an expression in Lox.
    An expression can be evaluated to a value.

    Exprs are compared and hashed by identity, so that the resolver can
    use them as keys for name resolution. The keys are weak references,
    so an Expr is dropped from the table once its tree is discarded.
    """
    __slots__: Iterable[str] = ("__weakref__", )


@dataclass(eq=False)
class Literal(Expr):
    """A Literal represents any value coming directly from the source
    code.
    """
    __slots__ = ("value", )
    value: t.PyLiteral


@dataclass(eq=False)
class Grouping(Expr):
    """A parenthesised expression."""
    __slots__ = ("expr", )
    expr: Expr


@dataclass(eq=False)
class Unary(Expr):
    """A Unary Expr represents an operator with a single operand."""
    __slots__ = ("oper", "right")
    oper: Token
    right: Expr


@dataclass(eq=False)
class Binary(Expr):
    """A Binary Expr represents an operator with two operands, both of
    which are always evaluated.
    """
    __slots__ = ("left", "oper", "right")
    left: Expr
    oper: Token
    right: Expr


@dataclass(eq=False)
class Logical(Expr):
    """A Logical Expr represents 'and'/'or', which evaluate the right
    operand only when the left does not decide the result.
    """
    __slots__ = ("left", "oper", "right")
    left: Expr
    oper: Token
    right: Expr


@dataclass(eq=False)
class Variable(Expr):
    """A Variable Expr reads the value bound to a name."""
    __slots__ = ("name", )
    name: Token


@dataclass(eq=False)
class Assign(Expr):
    """An Assign Expr represents an assignment operation.
    The Expr's evaluated value is bound to the name.
    """
    __slots__ = ("name", "value")
    name: Token
    value: Expr


@dataclass(eq=False)
class Call(Expr):
    """A Call Expr represents the invocation of a Callable with
    arguments.
    paren is the closing parenthesis, used for error reporting.
    """
    __slots__ = ("callee", "paren", "args")
    callee: Expr
    paren: Token
    args: Exprs


@dataclass(eq=False)
class Get(Expr):
    """A Get Expr reads a property of an Instance."""
    __slots__ = ("object", "name")
    object: Expr
    name: Token


@dataclass(eq=False)
class Set(Expr):
    """A Set Expr assigns a value to a field of an Instance."""
    __slots__ = ("object", "name", "value")
    object: Expr
    name: Token
    value: Expr


@dataclass(eq=False)
class This(Expr):
    __slots__ = ("keyword", )
    keyword: Token


class Stmt:
    """Represents a statement in Lox.
    A statement has an effect: console output, or environment mutation.
    """
    __slots__: Iterable[str] = tuple()


@dataclass(eq=False)
class Expression(Stmt):
    """Expression encapsulates an Expr evaluated for its side effect."""
    __slots__ = ("expr", )
    expr: Expr


@dataclass(eq=False)
class Print(Stmt):
    """Print encapsulates a value to be displayed in a terminal/console.
    """
    __slots__ = ("expr", )
    expr: Expr


@dataclass(eq=False)
class Var(Stmt):
    """Var declares a name in the current scope, with an optional
    initializer.
    """
    __slots__ = ("name", "initializer")
    name: Token
    initializer: Optional[Expr]


@dataclass(eq=False)
class Block(Stmt):
    """Block encapsulates statements executed in a new scope."""
    __slots__ = ("stmts", )
    stmts: Stmts


@dataclass(eq=False)
class If(Stmt):
    __slots__ = ("cond", "thenBranch", "elseBranch")
    cond: Expr
    thenBranch: Stmt
    elseBranch: Optional[Stmt]


@dataclass(eq=False)
class While(Stmt):
    """While represents a pre-condition loop, whose body is executed
    repeatedly while the cond evaluates to a truthy value.
    For loops are also parsed into While statements.
    """
    __slots__ = ("cond", "body")
    cond: Expr
    body: Stmt


@dataclass(eq=False)
class FunctionStmt(Stmt):
    """FunctionStmt encapsulates a declared function or method."""
    __slots__ = ("name", "params", "body")
    name: Token
    params: Params
    body: Stmts


@dataclass(eq=False)
class Return(Stmt):
    """Return encapsulates the value to be returned from a Function.
    keyword is kept for error reporting.
    """
    __slots__ = ("keyword", "value")
    keyword: Token
    value: Optional[Expr]


@dataclass(eq=False)
class ClassStmt(Stmt):
    """ClassStmt encapsulates a declared class and its methods."""
    __slots__ = ("name", "methods")
    name: Token
    methods: Sequence[FunctionStmt]
