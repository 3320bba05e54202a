"""printer

show(node) -> str
    Returns an Expr or Stmt as a parenthesised string, with the operator
    or keyword first, e.g. (* (- 123) (group 45.67)).
    Used for debugging the parser.
"""

from functools import singledispatch

from . import lang


def parenthesize(name: str, *parts) -> str:
    """Wraps name and the parts in parentheses. Parts that are not str
    are nodes, and are passed to show().
    """
    text = [name]
    for part in parts:
        text += [part if isinstance(part, str) else show(part)]
    return f"({' '.join(text)})"


def showLiteral(value: lang.PyLiteral) -> str:
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return f'"{value}"'
    if value.is_integer():
        return str(int(value))
    return repr(value)


@singledispatch
def show(node) -> str:
    """Dispatcher for Expr and Stmt printers."""
    raise TypeError(f"No printer found for {node}")


@show.register
def _(expr: lang.Literal) -> str:
    return showLiteral(expr.value)


@show.register
def _(expr: lang.Grouping) -> str:
    return parenthesize('group', expr.expr)


@show.register
def _(expr: lang.Unary) -> str:
    return parenthesize(expr.oper.lexeme, expr.right)


@show.register(lang.Binary)
@show.register(lang.Logical)
def _(expr) -> str:
    return parenthesize(expr.oper.lexeme, expr.left, expr.right)


@show.register
def _(expr: lang.Variable) -> str:
    return expr.name.lexeme


@show.register
def _(expr: lang.Assign) -> str:
    return parenthesize('=', expr.name.lexeme, expr.value)


@show.register
def _(expr: lang.Call) -> str:
    return parenthesize('call', expr.callee, *expr.args)


@show.register
def _(expr: lang.Get) -> str:
    return parenthesize('.', expr.object, expr.name.lexeme)


@show.register
def _(expr: lang.Set) -> str:
    target = parenthesize('.', expr.object, expr.name.lexeme)
    return parenthesize('=', target, expr.value)


@show.register
def _(expr: lang.This) -> str:
    return 'this'


@show.register
def _(stmt: lang.Expression) -> str:
    return parenthesize(';', stmt.expr)


@show.register
def _(stmt: lang.Print) -> str:
    return parenthesize('print', stmt.expr)


@show.register
def _(stmt: lang.Var) -> str:
    if stmt.initializer is None:
        return parenthesize('var', stmt.name.lexeme)
    return parenthesize('var', stmt.name.lexeme, stmt.initializer)


@show.register
def _(stmt: lang.Block) -> str:
    return parenthesize('block', *stmt.stmts)


@show.register
def _(stmt: lang.If) -> str:
    if stmt.elseBranch is None:
        return parenthesize('if', stmt.cond, stmt.thenBranch)
    return parenthesize('if-else', stmt.cond, stmt.thenBranch,
                        stmt.elseBranch)


@show.register
def _(stmt: lang.While) -> str:
    return parenthesize('while', stmt.cond, stmt.body)


@show.register
def _(stmt: lang.FunctionStmt) -> str:
    params = f"({' '.join(param.lexeme for param in stmt.params)})"
    return parenthesize('fun', stmt.name.lexeme, params, *stmt.body)


@show.register
def _(stmt: lang.Return) -> str:
    if stmt.value is None:
        return '(return)'
    return parenthesize('return', stmt.value)


@show.register
def _(stmt: lang.ClassStmt) -> str:
    return parenthesize('class', stmt.name.lexeme, *stmt.methods)
