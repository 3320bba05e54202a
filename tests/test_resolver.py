import unittest

from lox import builtin, lang, parser, scanner
from lox.resolver import Resolver
from tests import capture, run


def resolve(code):
    """Returns the statements, locals table, diagnostics and error text."""
    captureError, returnError = capture('error')
    diagnostics = builtin.Diagnostics(captureError)
    statements = parser.parse(scanner.scan(code, diagnostics), diagnostics)
    assert not diagnostics.hadError, diagnostics.errors
    locals = {}
    Resolver(locals, statements, diagnostics).inspect()
    return statements, locals, diagnostics, returnError()


TESTCODE = """
var g = 0;
{
    var a = 1;
    {
        var b = a;
        fun f(c) {
            return a + b + c + g;
        }
    }
}
"""


class DistanceTestCase(unittest.TestCase):
    def setUp(self):
        statements, self.locals, self.diagnostics, _ = resolve(TESTCODE)
        outer = statements[1]
        inner = outer.stmts[1]
        self.initB = inner.stmts[0].initializer
        func = inner.stmts[1]
        # a + b + c + g parses as ((a + b) + c) + g
        total = func.body[0].value
        self.g = total.right
        self.c = total.left.right
        self.b = total.left.left.right
        self.a = total.left.left.left

    def test_no_errors(self):
        self.assertFalse(self.diagnostics.hadError)

    def test_distances(self):
        self.assertEqual(self.locals[self.initB], 1)
        self.assertEqual(self.locals[self.c], 0)
        self.assertEqual(self.locals[self.b], 1)
        self.assertEqual(self.locals[self.a], 2)

    def test_globals_unresolved(self):
        self.assertNotIn(self.g, self.locals)

    def test_keyed_by_node(self):
        # Nodes with equal fields are distinct keys
        self.assertIsNot(self.a, lang.Variable(self.a.name))
        self.assertNotIn(lang.Variable(self.a.name), self.locals)


class ThisTestCase(unittest.TestCase):
    def test_this_distance(self):
        statements, locals, diagnostics, _ = resolve(
            "class A { m() { return this; } }"
        )
        self.assertFalse(diagnostics.hadError)
        method = statements[0].methods[0]
        this = method.body[0].value
        # One hop from the method body to the scope binding this
        self.assertEqual(locals[this], 1)


class ResolveErrorTestCase(unittest.TestCase):
    def assertLogicError(self, code, errortext):
        _, _, diagnostics, text = resolve(code)
        self.assertTrue(diagnostics.hadError)
        self.assertIs(type(diagnostics.last), builtin.LogicError)
        self.assertEqual(text, errortext)

    def test_own_initializer(self):
        self.assertLogicError(
            "{ var a = 1; { var a = a; } }",
            '[line 1] Error at "a": '
            'Cannot read local variable in its own initializer.\n',
        )

    def test_global_own_initializer_allowed(self):
        _, _, diagnostics, _ = resolve("var a = 1; var a = a;")
        self.assertFalse(diagnostics.hadError)

    def test_top_level_return(self):
        self.assertLogicError(
            "return 1;",
            '[line 1] Error at "return": Cannot return from top-level code.\n',
        )

    def test_redeclared_local(self):
        self.assertLogicError(
            "fun f() { var a = 1; var a = 2; }",
            '[line 1] Error at "a": '
            'Variable with this name already declared in this scope.\n',
        )

    def test_this_outside_class(self):
        self.assertLogicError(
            "fun f() { return this; }",
            '[line 1] Error at "this": Cannot use \'this\' outside of a class.\n',
        )

    def test_return_value_from_initializer(self):
        self.assertLogicError(
            "class A { init() { return 1; } }",
            '[line 1] Error at "return": '
            'Cannot return a value from an initializer.\n',
        )

    def test_bare_return_from_initializer(self):
        _, _, diagnostics, _ = resolve("class A { init() { return; } }")
        self.assertFalse(diagnostics.hadError)

    def test_continues_after_error(self):
        _, _, diagnostics, _ = resolve(
            "return 1;\n{ var a = a; }\nreturn 2;"
        )
        self.assertEqual(len(diagnostics.errors), 3)


class StaticErrorStopsRunTestCase(unittest.TestCase):
    def setUp(self):
        self.result = run('print "before";\n{ var a = a; }')

    def test_not_executed(self):
        self.assertTrue(self.result['hadError'])
        self.assertFalse(self.result['hadRuntimeError'])
        self.assertEqual(self.result['output'], '')
