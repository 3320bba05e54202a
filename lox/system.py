"""system
Sets up built-in functions for lox.

initGlobals
    Returns a global Environment containing built-in functions.
"""

import time
from typing import (
    Callable as function,
    List,
    Tuple,
)

from . import lang



def clock() -> float:
    """Returns the number of seconds since the epoch, as a number."""
    return float(time.time())



funcParams: List[Tuple[function, int]] = [
    (clock, 0),
]

def initGlobals() -> lang.Environment:
    """
    Return a global environment with built-in function definitions.
    """
    env = lang.Environment()
    for func, params in funcParams:
        env.define(func.__name__, lang.Builtin(func.__name__, params, func))
    return env
