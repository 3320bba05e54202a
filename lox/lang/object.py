"""object.py

Defines the runtime objects that Lox programs operate on.

Environment
    Maps names to values, chained to an enclosing Environment

Builtin, Function, Class
    Callables invoked with arguments

Instance
    An object created by calling a Class

ReturnValue
    Signals that a return statement was executed
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable as function,
    MutableMapping,
    Optional,
    Union,
)

from .. import builtin
from . import types as t

__all__ = [
    'Builtin',
    'Callable',
    'Class',
    'Environment',
    'Function',
    'Instance',
    'LoxValue',
    'NameMap',
    'ReturnValue',
]

NameMap = MutableMapping[t.NameKey, Any]


class Environment:
    """Environments hold the values bound to names in one lexical scope.
    Each Environment except the global one has an enclosing Environment;
    closures may share the same enclosing Environment.

    Methods
    -------
    has(name)
        returns True if the name is bound in this Environment,
        otherwise returns False
    define(name, value)
        binds name to value in this Environment, replacing any
        existing binding
    get(token)
        retrieves the value of the name in the nearest Environment
        binding it
    assign(token, value)
        rebinds the name in the nearest Environment binding it
    ancestor(distance)
        returns the Environment distance hops outward
    getAt(distance, name)
        retrieves the value of the name from the ancestor Environment
    assignAt(distance, token, value)
        rebinds the name in the ancestor Environment
    """
    __slots__ = ("values", "enclosing")

    def __init__(self, enclosing: "Environment" = None) -> None:
        self.values: NameMap = {}
        self.enclosing = enclosing

    def __repr__(self) -> str:
        return f"{{{', '.join(self.values)}}}"

    def has(self, name: t.NameKey) -> bool:
        return name in self.values

    def define(self, name: t.NameKey, value: "LoxValue") -> None:
        self.values[name] = value

    def get(self, token) -> "LoxValue":
        if self.has(token.lexeme):
            return self.values[token.lexeme]
        if self.enclosing:
            return self.enclosing.get(token)
        raise builtin.RuntimeError(
            f"Undefined variable '{token.lexeme}'.", token
        )

    def assign(self, token, value: "LoxValue") -> None:
        if self.has(token.lexeme):
            self.values[token.lexeme] = value
            return
        if self.enclosing:
            self.enclosing.assign(token, value)
            return
        raise builtin.RuntimeError(
            f"Undefined variable '{token.lexeme}'.", token
        )

    def ancestor(self, distance: int) -> "Environment":
        env = self
        for _ in range(distance):
            assert env.enclosing, f"No Environment at distance {distance}"
            env = env.enclosing
        return env

    def getAt(self, distance: int, name: t.NameKey) -> "LoxValue":
        env = self.ancestor(distance)
        assert env.has(name), f"{name!r} not bound at distance {distance}"
        return env.values[name]

    def assignAt(self, distance: int, token, value: "LoxValue") -> None:
        env = self.ancestor(distance)
        assert env.has(token.lexeme), \
            f"{token.lexeme!r} not bound at distance {distance}"
        env.values[token.lexeme] = value


class Callable:
    """Base class for Builtin, Function and Class.
    Represents a value that can be invoked with arguments.
    """

    def arity(self) -> int:
        raise NotImplementedError


@dataclass(eq=False)
class Builtin(Callable):
    """Represents a native function in lox.

    Attributes
    ----------
    - name
        the name the function is bound to in the global Environment
    - params
        the number of arguments the function takes
    - func
        the Python function to call when invoked
    """
    __slots__ = ("name", "params", "func")
    name: t.NameKey
    params: int
    func: function

    def arity(self) -> int:
        return self.params

    def __str__(self) -> str:
        return "<native fn>"


@dataclass(eq=False)
class Function(Callable):
    """A user-defined function or method, paired with the Environment
    active where it was declared.
    - declaration
      The FunctionStmt the Function executes when called
    - closure
      The Environment the Function body's free names resolve in
    - isInitializer
      True for a class's init() method, which always returns this
    """
    declaration: "FunctionStmt"
    closure: Environment
    isInitializer: bool = False

    def arity(self) -> int:
        return len(self.declaration.params)

    def bind(self, instance: "Instance") -> "Function":
        """Returns a new Function whose closure defines this as the
        given instance.
        """
        env = Environment(self.closure)
        env.define('this', instance)
        return Function(self.declaration, env, self.isInitializer)

    def __str__(self) -> str:
        return f"<fn {self.declaration.name.lexeme}>"


@dataclass(eq=False)
class Class(Callable):
    """A Class maps method names to unbound Functions. Calling a Class
    creates an Instance of it.
    """
    __slots__ = ("name", "methods")
    name: t.NameKey
    methods: MutableMapping[t.NameKey, Function]

    def findMethod(self, name: t.NameKey) -> Optional[Function]:
        return self.methods.get(name, None)

    def arity(self) -> int:
        initializer = self.findMethod('init')
        if initializer is None:
            return 0
        return initializer.arity()

    def __str__(self) -> str:
        return f"<class {self.name}>"


@dataclass(eq=False)
class Instance:
    """An Instance holds its own fields, and looks up methods in its
    Class.
    """
    klass: Class
    fields: NameMap = field(default_factory=dict)

    def get(self, token) -> "LoxValue":
        """Returns the field named by token, or else the named method
        bound to this Instance.
        """
        name = token.lexeme
        if name in self.fields:
            return self.fields[name]
        method = self.klass.findMethod(name)
        if method is not None:
            return method.bind(self)
        raise builtin.RuntimeError(f"Undefined property '{name}'.", token)

    def set(self, token, value: "LoxValue") -> None:
        self.fields[token.lexeme] = value

    def __str__(self) -> str:
        return f"<instance {self.klass.name}>"



LoxValue = Union[t.PyLiteral, Callable, Instance]


@dataclass
class ReturnValue:
    """Returned by statement executors when a return statement has
    been executed, carrying the returned value up to the call.
    """
    __slots__ = ("value", )
    value: LoxValue
