"""The main entry point to the lox package.

Lox
    Interprets code from a file or string
"""
import logging
import os
import sys
import threading
from typing import Any, Callable as function, List, MutableMapping, TypedDict

from lox import builtin, lang, printer, system

from lox import scanner, parser
from lox.resolver import Resolver
from lox.interpreter import Interpreter



class Result(TypedDict):
    """The metadata dict returned from a run"""
    statements: lang.Stmts  # The parsed statements
    env: lang.Environment  # The global environment used by the interpreter
    errors: List[builtin.LoxError]  # Errors reported during the run
    hadError: bool  # True if a static error was reported
    hadRuntimeError: bool  # True if a runtime error was reported
    hadInternalError: bool  # True if Lox itself failed during the run


__version__ = '0.1.0'
VERSION = f"Lox {__version__}"
HELP = """usage: lox [option] ... [file]
Options and arguments:
-h     : print this help message and exit (also --help)
--ast  : print the parsed statements instead of running them
file   : program read from script file
""".strip()

# Each level of Lox nesting costs several Python frames, so runs get
# a deeper recursion limit and a thread stack large enough to hold it
RECURSION_LIMIT = 30_000
STACK_SIZE = 256 * 1024 * 1024


def logException(msg="Unexpected error has occurred") -> None:
    """Helper function that logs unexpected (Python) exceptions.
    If logException is invoked, it means Lox has encountered an error
    it should not have. If Lox is bug-free, logException should never
    be invoked at all.
    """
    logging.exception(msg)
    print("Lox ERROR: " + msg, file=sys.stderr)
    print("The details of this error have been logged in lox.log.",
          file=sys.stderr)


def runDeep(func: function[[], Any]) -> Any:
    """Calls func in a thread with a raised recursion limit and a large
    stack, and returns its result.
    An exception raised by func is re-raised in the calling thread.
    """
    outcome: MutableMapping[str, Any] = {}

    def target() -> None:
        try:
            outcome['value'] = func()
        except BaseException as err:
            outcome['error'] = err

    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(max(limit, RECURSION_LIMIT))
    try:
        size = threading.stack_size(STACK_SIZE)
        try:
            thread = threading.Thread(target=target, daemon=True)
            thread.start()
        finally:
            threading.stack_size(size)
        thread.join()
    finally:
        sys.setrecursionlimit(limit)
    if 'error' in outcome:
        raise outcome['error']
    return outcome.get('value')


class Lox:
    """A Lox interpreter.

    Lox encapsulates the pipelines of the code interpreting process:
    1. Scanning
       The code string is tokenised into a sequence of tokens.
    2. Parsing
       Tokens are parsed into a sequence of Statements, which can in turn
       contain Expressions.
    3. Resolving
       Local name references are resolved to the number of scopes
       between each reference and its declaration.
    4. Interpreting
       Expressions are evaluated to retrieve values, and statements are
       executed to invoke their effects.

    Static errors from stages 1-3 stop the run before interpreting.
    The global environment persists between runs.
    """

    def __init__(self) -> None:
        self.interpreter = Interpreter(system.initGlobals())
        self.handlers: MutableMapping[str, function] = {
            'output': print,
            'error': builtin.printError,
        }

    @property
    def env(self) -> lang.Environment:
        return self.interpreter.globals

    def registerHandlers(self, **kwargs: function) -> None:
        """Lox may register custom handlers e.g. for testing purposes.
        Handlers are registered using a str key.

        The following handlers are currently supported:
        - output()
        - error()
        """
        for key, handler in kwargs.items():
            if key not in self.handlers:
                raise KeyError(f"Invalid handler key {repr(key)}")
            self.handlers[key] = handler

    def runFile(self, srcfile: str) -> Result:
        """Executes code from the file with the provided srcfile path.
        """
        with open(srcfile, 'r', encoding='utf-8') as f:
            src = f.read()
        return self.run(src)

    def parse(self, src: str, diagnostics: builtin.Diagnostics) -> lang.Stmts:
        """Scans and parses the src string, without resolving."""
        tokens = scanner.scan(src, diagnostics)
        return parser.parse(tokens, diagnostics)

    def run(self, src: str) -> Result:
        """Executes code represented by the src string."""
        diagnostics = builtin.Diagnostics(self.handlers['error'])
        result: Result = {
            'statements': [],
            'env': self.env,
            'errors': diagnostics.errors,
            'hadError': False,
            'hadRuntimeError': False,
            'hadInternalError': False,
        }

        def pipeline() -> None:
            # Parsing
            result['statements'] = self.parse(src, diagnostics)
            if diagnostics.hadError:
                return

            # Resolving
            resolver = Resolver(self.interpreter.locals,
                                result['statements'],
                                diagnostics)
            resolver.inspect()
            if diagnostics.hadError:
                return

            # Interpreting
            self.interpreter.registerOutputHandler(self.handlers['output'])
            self.interpreter.interpret(result['statements'], diagnostics)

        try:
            runDeep(pipeline)
        except Exception:
            logException()
            result['hadInternalError'] = True
        result['errors'] = diagnostics.errors
        result['hadError'] = diagnostics.hadError
        result['hadRuntimeError'] = diagnostics.hadRuntimeError
        return result



# Error codes
# https://gist.github.com/bojanrajkovic/831993

def repl(lox: Lox) -> None:
    """Runs each line of input, until end of input."""
    print(VERSION)
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            return
        if line:
            lox.run(line)


def showFile(lox: Lox, srcfile: str) -> int:
    """Prints the parsed statements of a file. Returns the exit code."""
    with open(srcfile, 'r', encoding='utf-8') as f:
        src = f.read()
    diagnostics = builtin.Diagnostics(lox.handlers['error'])

    def show() -> None:
        for stmt in lox.parse(src, diagnostics):
            lox.handlers['output'](printer.show(stmt))

    try:
        runDeep(show)
    except Exception:
        logException()
        return 70
    return 65 if diagnostics.hadError else 0


def main(argv: List[str] = None) -> None:
    """This is the entry point which shell scripts should invoke.

    It encapsulates the following invocation modes:
    1. REPL mode
    2. Script mode
    3. AST mode
    """
    logging.basicConfig(
        filename='lox.log',
        filemode='w',
        format='%(name)s - %(levelname)s - %(message)s',
    )
    args = sys.argv[1:] if argv is None else argv
    lox = Lox()

    # REPL mode
    if not args:
        repl(lox)
        sys.exit(0)

    # Argument handling
    if args[0] in ('-h', '--help'):
        print(HELP)
        sys.exit(0)
    showAst = (args[0] == '--ast')
    if showAst:
        args = args[1:]
    if len(args) != 1 or args[0].startswith('-'):
        print("Usage: lox [--ast] [script]", file=sys.stderr)
        print("Try `lox -h' for more information.", file=sys.stderr)
        sys.exit(64)  # command line usage error

    # File checks
    srcfile = args[0]
    if not os.path.isfile(srcfile):
        print(f"lox: can't open file {srcfile!r}", file=sys.stderr)
        sys.exit(66)  # cannot open input

    # AST mode
    if showAst:
        sys.exit(showFile(lox, srcfile))

    # Script mode
    result = lox.runFile(srcfile)
    if result['hadError']:
        sys.exit(65)  # data format error
    if result['hadRuntimeError'] or result['hadInternalError']:
        sys.exit(70)  # internal software error
    sys.exit(0)
