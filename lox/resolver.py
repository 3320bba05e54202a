"""resolver

Resolver(locals, statements, diagnostics).inspect() -> None
    Resolves every local name reference in the list of statements to
    the number of scopes between the reference and its declaration.
    References left unresolved are global.
"""

from dataclasses import dataclass
from functools import singledispatch
from typing import (
    Dict,
    Iterable,
    List,
    Literal as LiteralType,
    MutableMapping,
)

from . import builtin, lang

FunctionType = LiteralType['NONE', 'FUNCTION', 'METHOD', 'INITIALIZER']
ClassType = LiteralType['NONE', 'CLASS']

# Maps each resolved Expr to its distance from the declaring scope
Locals = MutableMapping[lang.Expr, int]

# Maps each name in a scope to whether its initializer has resolved
Scope = Dict[lang.NameKey, bool]



class Scopes:
    """
    Encapsulates the state of the resolver as it walks the statements.

    Attributes
    ----------
    - stack
        The local scopes enclosing the current statement, innermost
        last. The global scope is not tracked.
    - locals
        The table of resolved distances, shared with the interpreter
    - function
        The kind of function body being resolved
    - klass
        The kind of class body being resolved
    """
    def __init__(
        self,
        locals: Locals,
        diagnostics: builtin.Diagnostics,
    ):
        self.stack: List[Scope] = []
        self.locals = locals
        self.diagnostics = diagnostics
        self.function: FunctionType = 'NONE'
        self.klass: ClassType = 'NONE'



@dataclass
class Resolver:
    """Resolves a list of statements into the given locals table."""
    __slots__ = ('locals', 'statements', 'diagnostics')
    locals: Locals
    statements: lang.Stmts
    diagnostics: builtin.Diagnostics

    def inspect(self) -> None:
        verifyStmts(self.statements, Scopes(self.locals, self.diagnostics))



# Resolver helper functions

def error(scopes: Scopes, token: lang.Token, msg: str) -> None:
    """Reports a resolution error. Resolution carries on."""
    scopes.diagnostics.error(builtin.LogicError(msg, token))

def beginScope(scopes: Scopes) -> None:
    scopes.stack += [{}]

def endScope(scopes: Scopes) -> None:
    scopes.stack.pop()

def declare(scopes: Scopes, name: lang.Token) -> None:
    """Adds name to the innermost scope, marked as not yet ready for
    use.
    """
    if not scopes.stack:
        return
    scope = scopes.stack[-1]
    if name.lexeme in scope:
        error(scopes, name,
              "Variable with this name already declared in this scope.")
    scope[name.lexeme] = False

def define(scopes: Scopes, name: lang.Token) -> None:
    """Marks name in the innermost scope as ready for use."""
    if not scopes.stack:
        return
    scopes.stack[-1][name.lexeme] = True

def resolveLocal(scopes: Scopes, expr: lang.Expr, name: lang.Token) -> None:
    """Records the distance to the innermost scope declaring name.
    Records nothing if no scope declares it.
    """
    for depth, scope in enumerate(reversed(scopes.stack)):
        if name.lexeme in scope:
            scopes.locals[expr] = depth
            return

def resolveFunction(
    stmt: lang.FunctionStmt,
    scopes: Scopes,
    type: FunctionType,
) -> None:
    """Resolves a function body in a new scope holding its parameters."""
    enclosingFunction = scopes.function
    scopes.function = type
    beginScope(scopes)
    for param in stmt.params:
        declare(scopes, param)
        define(scopes, param)
    verifyStmts(stmt.body, scopes)
    endScope(scopes)
    scopes.function = enclosingFunction

def resolveExprs(exprs: Iterable[lang.Expr], scopes: Scopes) -> None:
    for expr in exprs:
        resolve(expr, scopes)



@singledispatch
def resolve(expr, scopes):
    """Dispatcher for Expr resolvers."""
    raise TypeError(f"No resolver found for {expr}")


@resolve.register
def _(expr: lang.Literal, scopes: Scopes) -> None:
    pass


@resolve.register
def _(expr: lang.Grouping, scopes: Scopes) -> None:
    resolve(expr.expr, scopes)


@resolve.register
def _(expr: lang.Unary, scopes: Scopes) -> None:
    resolve(expr.right, scopes)


@resolve.register(lang.Binary)
@resolve.register(lang.Logical)
def _(expr, scopes: Scopes) -> None:
    resolve(expr.left, scopes)
    resolve(expr.right, scopes)


@resolve.register
def _(expr: lang.Variable, scopes: Scopes) -> None:
    if scopes.stack and scopes.stack[-1].get(expr.name.lexeme) is False:
        error(scopes, expr.name,
              "Cannot read local variable in its own initializer.")
    resolveLocal(scopes, expr, expr.name)


@resolve.register
def _(expr: lang.Assign, scopes: Scopes) -> None:
    resolve(expr.value, scopes)
    resolveLocal(scopes, expr, expr.name)


@resolve.register
def _(expr: lang.Call, scopes: Scopes) -> None:
    resolve(expr.callee, scopes)
    resolveExprs(expr.args, scopes)


@resolve.register
def _(expr: lang.Get, scopes: Scopes) -> None:
    # Properties are looked up dynamically; only the object is resolved
    resolve(expr.object, scopes)


@resolve.register
def _(expr: lang.Set, scopes: Scopes) -> None:
    resolve(expr.value, scopes)
    resolve(expr.object, scopes)


@resolve.register
def _(expr: lang.This, scopes: Scopes) -> None:
    if scopes.klass == 'NONE':
        error(scopes, expr.keyword, "Cannot use 'this' outside of a class.")
        return
    resolveLocal(scopes, expr, expr.keyword)



# Verifiers

def verifyStmts(stmts: Iterable[lang.Stmt], scopes: Scopes) -> None:
    """Verify a list of statements."""
    for stmt in stmts:
        verify(stmt, scopes)


@singledispatch
def verify(stmt, scopes):
    """Dispatcher for Stmt verifiers."""
    raise TypeError(f"Unexpected statement {stmt}")


@verify.register
def _(stmt: lang.Expression, scopes: Scopes) -> None:
    resolve(stmt.expr, scopes)


@verify.register
def _(stmt: lang.Print, scopes: Scopes) -> None:
    resolve(stmt.expr, scopes)


@verify.register
def _(stmt: lang.Var, scopes: Scopes) -> None:
    # Declared before the initializer is resolved, so that the
    # initializer cannot refer to the name being declared
    declare(scopes, stmt.name)
    if stmt.initializer is not None:
        resolve(stmt.initializer, scopes)
    define(scopes, stmt.name)


@verify.register
def _(stmt: lang.Block, scopes: Scopes) -> None:
    beginScope(scopes)
    verifyStmts(stmt.stmts, scopes)
    endScope(scopes)


@verify.register
def _(stmt: lang.If, scopes: Scopes) -> None:
    resolve(stmt.cond, scopes)
    verify(stmt.thenBranch, scopes)
    if stmt.elseBranch is not None:
        verify(stmt.elseBranch, scopes)


@verify.register
def _(stmt: lang.While, scopes: Scopes) -> None:
    resolve(stmt.cond, scopes)
    verify(stmt.body, scopes)


@verify.register
def _(stmt: lang.FunctionStmt, scopes: Scopes) -> None:
    # Defined before the body is resolved, to make recursive calls work
    declare(scopes, stmt.name)
    define(scopes, stmt.name)
    resolveFunction(stmt, scopes, 'FUNCTION')


@verify.register
def _(stmt: lang.Return, scopes: Scopes) -> None:
    if scopes.function == 'NONE':
        error(scopes, stmt.keyword, "Cannot return from top-level code.")
    if stmt.value is None:
        return
    if scopes.function == 'INITIALIZER':
        error(scopes, stmt.keyword,
              "Cannot return a value from an initializer.")
    resolve(stmt.value, scopes)


@verify.register
def _(stmt: lang.ClassStmt, scopes: Scopes) -> None:
    enclosingClass = scopes.klass
    scopes.klass = 'CLASS'
    declare(scopes, stmt.name)
    define(scopes, stmt.name)

    # Methods close over a scope binding this
    beginScope(scopes)
    scopes.stack[-1]['this'] = True
    for method in stmt.methods:
        type: FunctionType = 'METHOD'
        if method.name.lexeme == 'init':
            type = 'INITIALIZER'
        resolveFunction(method, scopes, type)
    endScope(scopes)

    scopes.klass = enclosingClass
