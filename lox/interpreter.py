"""interpreter

Interpreter(globals).interpret(statements, diagnostics) -> None
    Interprets and executes a list of statements. A runtime error stops
    execution and is reported to diagnostics.
"""

import math
import weakref
from dataclasses import dataclass, field
from decimal import Decimal
from functools import singledispatch
from typing import (
    Callable as function,
    Iterable,
    List,
    Optional,
)

from . import builtin, lang
from .resolver import Locals

# ----------------------------------------------------------------------

# Helper functions


def isTruthy(value: lang.LoxValue) -> bool:
    """nil and false are falsy, every other value is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def isNumber(value: lang.LoxValue) -> bool:
    return isinstance(value, float)


def checkNumberOperand(oper: lang.Token, operand: lang.LoxValue) -> None:
    if not isNumber(operand):
        raise builtin.RuntimeError("Operand must be a number.", oper)


def checkNumberOperands(oper: lang.Token, left: lang.LoxValue,
                        right: lang.LoxValue) -> None:
    if not (isNumber(left) and isNumber(right)):
        raise builtin.RuntimeError("Operands must be numbers.", oper)


def formatNumber(value: float) -> str:
    """Returns the shortest repr of value, written in exponent form only
    when the exponent is below -6 or above 20, e.g. 0.00001, 1e-7.
    """
    text = repr(value)
    if 'e' not in text:
        return text
    mantissa, exponent = text.split('e')
    if -7 < int(exponent) < 21:
        return format(Decimal(text), 'f')
    return f"{mantissa}e{int(exponent):+d}"


def stringify(value: lang.LoxValue) -> str:
    """Returns the text that print displays for a value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isNumber(value):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        # Whole numbers are displayed without a decimal point
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return formatNumber(value)
    return str(value)


@dataclass
class Interpreter:
    """Interprets lists of statements in a given global environment.
    The locals table is filled in by the Resolver before each
    interpret() call; env is the environment of the innermost scope
    being executed.
    """
    globals: lang.Environment
    locals: Locals = field(default_factory=weakref.WeakKeyDictionary)
    outputHandler: function = field(default=print, init=False)
    env: lang.Environment = field(init=False)

    def __post_init__(self) -> None:
        self.env = self.globals

    def registerOutputHandler(self, handler: function) -> None:
        """Register handler as the function to use to handle any output
        from the executed statements.
        The default handler is Python's print().
        """
        self.outputHandler = handler  # type: ignore

    def interpret(
        self,
        statements: Iterable[lang.Stmt],
        diagnostics: builtin.Diagnostics,
    ) -> None:
        try:
            for stmt in statements:
                execute(stmt, self)
        except builtin.RuntimeError as err:
            diagnostics.runtimeError(err)
        finally:
            self.env = self.globals


# Evaluators
# Evaluation functions return the evaluated value of Exprs.


def lookUpVariable(name: lang.Token, expr: lang.Expr,
                   interp: Interpreter) -> lang.LoxValue:
    """Names the resolver did not resolve are global."""
    distance = interp.locals.get(expr)
    if distance is None:
        return interp.globals.get(name)
    return interp.env.getAt(distance, name.lexeme)


@singledispatch
def call(callable, args, interp):
    """Dispatcher for invoking a Callable with evaluated args."""
    raise TypeError(f"{type(callable)} passed in call")


@call.register
def _(callable: lang.Builtin, args: List[lang.LoxValue],
      interp: Interpreter) -> lang.LoxValue:
    return callable.func(*args)


@call.register
def _(callable: lang.Function, args: List[lang.LoxValue],
      interp: Interpreter) -> lang.LoxValue:
    # Parameters are bound in the same environment as the body
    env = lang.Environment(callable.closure)
    for param, arg in zip(callable.declaration.params, args):
        env.define(param.lexeme, arg)
    returned = executeBlock(callable.declaration.body, env, interp)
    if callable.isInitializer:
        return callable.closure.getAt(0, 'this')
    if returned is None:
        return None
    return returned.value


@call.register
def _(callable: lang.Class, args: List[lang.LoxValue],
      interp: Interpreter) -> lang.Instance:
    instance = lang.Instance(callable)
    initializer = callable.findMethod('init')
    if initializer is not None:
        call(initializer.bind(instance), args, interp)
    return instance


@singledispatch
def evaluate(expr, interp):
    """Dispatcher for Expr evaluators."""
    raise TypeError(f"Unexpected expr {expr}")


@evaluate.register
def _(expr: lang.Literal, interp: Interpreter) -> lang.LoxValue:
    return expr.value


@evaluate.register
def _(expr: lang.Grouping, interp: Interpreter) -> lang.LoxValue:
    return evaluate(expr.expr, interp)


@evaluate.register
def _(expr: lang.Unary, interp: Interpreter) -> lang.LoxValue:
    right = evaluate(expr.right, interp)
    if expr.oper.type == 'MINUS':
        checkNumberOperand(expr.oper, right)
        return -right
    if expr.oper.type == 'BANG':
        return not isTruthy(right)
    raise ValueError(f"Unexpected oper {expr.oper}")


@evaluate.register
def _(expr: lang.Binary, interp: Interpreter) -> lang.LoxValue:
    left = evaluate(expr.left, interp)
    right = evaluate(expr.right, interp)
    opertype = expr.oper.type
    if opertype in builtin.EQUALITY:
        return builtin.EQUALITY[opertype](left, right)
    if opertype in builtin.NUMERIC:
        checkNumberOperands(expr.oper, left, right)
        return builtin.NUMERIC[opertype](left, right)
    if opertype == 'PLUS':
        if isNumber(left) and isNumber(right):
            return builtin.add(left, right)
        if isinstance(left, str) and isinstance(right, str):
            return builtin.add(left, right)
        raise builtin.RuntimeError(
            "Operands must be two numbers or two strings.", expr.oper
        )
    raise ValueError(f"Unexpected oper {expr.oper}")


@evaluate.register
def _(expr: lang.Logical, interp: Interpreter) -> lang.LoxValue:
    # Returns whichever operand decided the result
    left = evaluate(expr.left, interp)
    if expr.oper.type == 'OR':
        if isTruthy(left):
            return left
    elif not isTruthy(left):
        return left
    return evaluate(expr.right, interp)


@evaluate.register
def _(expr: lang.Variable, interp: Interpreter) -> lang.LoxValue:
    return lookUpVariable(expr.name, expr, interp)


@evaluate.register
def _(expr: lang.Assign, interp: Interpreter) -> lang.LoxValue:
    value = evaluate(expr.value, interp)
    distance = interp.locals.get(expr)
    if distance is None:
        interp.globals.assign(expr.name, value)
    else:
        interp.env.assignAt(distance, expr.name, value)
    return value


@evaluate.register
def _(expr: lang.Call, interp: Interpreter) -> lang.LoxValue:
    callee = evaluate(expr.callee, interp)
    args = [evaluate(arg, interp) for arg in expr.args]
    if not isinstance(callee, lang.Callable):
        raise builtin.RuntimeError(
            "Can only call functions and classes.", expr.paren
        )
    if len(args) != callee.arity():
        raise builtin.RuntimeError(
            f"Expected {callee.arity()} arguments but got {len(args)}.",
            expr.paren,
        )
    try:
        return call(callee, args, interp)
    except RecursionError:
        raise builtin.RuntimeError("Stack overflow.", expr.paren) from None


@evaluate.register
def _(expr: lang.Get, interp: Interpreter) -> lang.LoxValue:
    obj = evaluate(expr.object, interp)
    if isinstance(obj, lang.Instance):
        return obj.get(expr.name)
    raise builtin.RuntimeError("Only instances have properties.", expr.name)


@evaluate.register
def _(expr: lang.Set, interp: Interpreter) -> lang.LoxValue:
    obj = evaluate(expr.object, interp)
    if not isinstance(obj, lang.Instance):
        raise builtin.RuntimeError("Only instances have fields.", expr.name)
    value = evaluate(expr.value, interp)
    obj.set(expr.name, value)
    return value


@evaluate.register
def _(expr: lang.This, interp: Interpreter) -> lang.LoxValue:
    return lookUpVariable(expr.keyword, expr, interp)


# Executors
# Execution functions return a ReturnValue if a return statement was
# executed, otherwise None.


def executeBlock(
        stmts: Iterable[lang.Stmt], env: lang.Environment,
        interp: Interpreter) -> Optional[lang.ReturnValue]:
    """Execute a list of statements in the given environment.
    The interpreter's previous environment is always restored.
    """
    previous = interp.env
    try:
        interp.env = env
        for stmt in stmts:
            returned = execute(stmt, interp)
            if returned is not None:
                return returned
    finally:
        interp.env = previous
    return None


@singledispatch
def execute(stmt, interp):
    """Dispatcher for statement executors."""
    raise TypeError(f"Invalid Stmt {stmt}")


@execute.register
def _(stmt: lang.Expression, interp: Interpreter) -> None:
    evaluate(stmt.expr, interp)


@execute.register
def _(stmt: lang.Print, interp: Interpreter) -> None:
    value = evaluate(stmt.expr, interp)
    interp.outputHandler(stringify(value))


@execute.register
def _(stmt: lang.Var, interp: Interpreter) -> None:
    value = None
    if stmt.initializer is not None:
        value = evaluate(stmt.initializer, interp)
    interp.env.define(stmt.name.lexeme, value)


@execute.register
def _(stmt: lang.Block, interp: Interpreter) -> Optional[lang.ReturnValue]:
    return executeBlock(stmt.stmts, lang.Environment(interp.env), interp)


@execute.register
def _(stmt: lang.If, interp: Interpreter) -> Optional[lang.ReturnValue]:
    if isTruthy(evaluate(stmt.cond, interp)):
        return execute(stmt.thenBranch, interp)
    if stmt.elseBranch is not None:
        return execute(stmt.elseBranch, interp)
    return None


@execute.register
def _(stmt: lang.While, interp: Interpreter) -> Optional[lang.ReturnValue]:
    while isTruthy(evaluate(stmt.cond, interp)):
        returned = execute(stmt.body, interp)
        if returned is not None:
            return returned
    return None


@execute.register
def _(stmt: lang.FunctionStmt, interp: Interpreter) -> None:
    function = lang.Function(stmt, interp.env)
    interp.env.define(stmt.name.lexeme, function)


@execute.register
def _(stmt: lang.Return, interp: Interpreter) -> lang.ReturnValue:
    value = None
    if stmt.value is not None:
        value = evaluate(stmt.value, interp)
    return lang.ReturnValue(value)


@execute.register
def _(stmt: lang.ClassStmt, interp: Interpreter) -> None:
    # Declared first, so that methods can refer to the class
    interp.env.define(stmt.name.lexeme, None)
    methods = {
        method.name.lexeme: lang.Function(
            method, interp.env, method.name.lexeme == 'init'
        )
        for method in stmt.methods
    }
    klass = lang.Class(stmt.name.lexeme, methods)
    interp.env.assign(stmt.name, klass)
