import unittest

from lox import builtin, lang, parser, printer, scanner
from tests import capture


def parse(code):
    """Returns the parsed statements, diagnostics and error text."""
    captureError, returnError = capture('error')
    diagnostics = builtin.Diagnostics(captureError)
    tokens = scanner.scan(code, diagnostics)
    statements = parser.parse(tokens, diagnostics)
    return statements, diagnostics, returnError()


def show(code):
    statements, diagnostics, _ = parse(code)
    assert not diagnostics.hadError, diagnostics.errors
    return [printer.show(stmt) for stmt in statements]


class PrecedenceTestCase(unittest.TestCase):
    def test_arithmetic(self):
        self.assertEqual(
            show("print -123 * (45.67);"),
            ["(print (* (- 123) (group 45.67)))"],
        )
        self.assertEqual(
            show("1 + 2 * 3 - 4 / 5;"),
            ["(; (- (+ 1 (* 2 3)) (/ 4 5)))"],
        )

    def test_left_associative(self):
        self.assertEqual(show("1 - 2 - 3;"), ["(; (- (- 1 2) 3))"])

    def test_comparison_and_equality(self):
        self.assertEqual(
            show("1 < 2 == !false;"),
            ["(; (== (< 1 2) (! false)))"],
        )

    def test_logical(self):
        # and binds tighter than or
        self.assertEqual(
            show("a or b and c;"),
            ["(; (or a (and b c)))"],
        )

    def test_assignment_is_right_associative(self):
        self.assertEqual(show("a = b = 1;"), ["(; (= a (= b 1)))"])

    def test_calls_and_properties(self):
        self.assertEqual(
            show("a.b(1, 2).c = nil;"),
            ["(; (= (. (call (. a b) 1 2) c) nil))"],
        )
        self.assertEqual(show("f()();"), ["(; (call (call f)))"])


class StatementTestCase(unittest.TestCase):
    def test_var(self):
        self.assertEqual(
            show('var a; var b = "x";'),
            ["(var a)", '(var b "x")'],
        )

    def test_if_else(self):
        self.assertEqual(
            show("if (a) print 1; else { print 2; }"),
            ["(if-else a (print 1) (block (print 2)))"],
        )

    def test_for_desugars_to_while(self):
        self.assertEqual(
            show("for (var i = 0; i < 3; i = i + 1) print i;"),
            ["(block (var i 0) (while (< i 3) "
             "(block (print i) (; (= i (+ i 1))))))"],
        )

    def test_for_without_clauses(self):
        statements, _, _ = parse("for (;;) print 1;")
        self.assertEqual(len(statements), 1)
        loop = statements[0]
        self.assertIsInstance(loop, lang.While)
        self.assertIsInstance(loop.cond, lang.Literal)
        self.assertIs(loop.cond.value, True)
        self.assertIsInstance(loop.body, lang.Print)

    def test_function(self):
        self.assertEqual(
            show("fun add(a, b) { return a + b; } fun f() { return; }"),
            ["(fun add (a b) (return (+ a b)))", "(fun f () (return))"],
        )

    def test_class(self):
        statements, _, _ = parse(
            "class Point { init(x) { this.x = x; } norm() { return this.x; } }"
        )
        klass = statements[0]
        self.assertIsInstance(klass, lang.ClassStmt)
        self.assertEqual(
            [method.name.lexeme for method in klass.methods],
            ['init', 'norm'],
        )
        self.assertEqual(
            printer.show(klass),
            "(class Point (fun init (x) (; (= (. this x) x))) "
            "(fun norm () (return (. this x))))",
        )

    def test_equivalent_sources(self):
        # Layout and grouping-free formatting do not change the tree
        compact = "var a=1;while(a<3){print a;a=a+1;}"
        spaced = """
        var a = 1;
        while (a < 3) {
            print a;
            a = a + 1;
        }
        """
        self.assertEqual(show(compact), show(spaced))


class ParseErrorTestCase(unittest.TestCase):
    def test_missing_semicolon(self):
        statements, diagnostics, errortext = parse("print 1")
        self.assertTrue(diagnostics.hadError)
        self.assertEqual(statements, [])
        self.assertEqual(
            errortext, "[line 1] Error at end: Expect ';' after value.\n"
        )

    def test_error_at_token(self):
        _, diagnostics, errortext = parse("var 1 = 2;")
        self.assertIs(type(diagnostics.last), builtin.ParseError)
        self.assertEqual(
            errortext,
            '[line 1] Error at "1": Expect variable name.\n',
        )

    def test_panic_mode_recovery(self):
        # Two malformed statements report two errors in one pass
        statements, diagnostics, errortext = parse(
            "print ;\nvar = 1;\nprint 3;"
        )
        self.assertEqual(len(diagnostics.errors), 2)
        self.assertEqual(
            errortext,
            '[line 1] Error at ";": Expect expression.\n'
            '[line 2] Error at "=": Expect variable name.\n',
        )
        # The well-formed statement after the errors is still parsed
        self.assertEqual(len(statements), 1)
        self.assertIsInstance(statements[0], lang.Print)

    def test_recovery_at_statement_keyword(self):
        _, diagnostics, _ = parse("1 + ; fun f() {} var x = ;")
        self.assertEqual(len(diagnostics.errors), 2)

    def test_invalid_assignment_target(self):
        statements, diagnostics, errortext = parse("a + b = c;")
        self.assertEqual(
            errortext,
            '[line 1] Error at "=": Invalid assignment target.\n',
        )
        # Reported without resynchronising
        self.assertEqual(len(statements), 1)

    def test_too_many_parameters(self):
        params = ', '.join(f"p{i}" for i in range(256))
        _, diagnostics, errortext = parse(f"fun f({params}) {{}}")
        self.assertEqual(len(diagnostics.errors), 1)
        self.assertEqual(
            errortext,
            '[line 1] Error at "p255": '
            'Cannot have more than 255 parameters.\n',
        )

    def test_max_parameters(self):
        params = ', '.join(f"p{i}" for i in range(255))
        _, diagnostics, _ = parse(f"fun f({params}) {{}}")
        self.assertFalse(diagnostics.hadError)

    def test_too_many_arguments(self):
        args = ', '.join('1' for _ in range(256))
        _, diagnostics, errortext = parse(f"f({args});")
        self.assertEqual(len(diagnostics.errors), 1)
        self.assertIn("Cannot have more than 255 arguments.", errortext)

    def test_super_is_not_an_expression(self):
        _, diagnostics, errortext = parse("super.foo();")
        self.assertTrue(diagnostics.hadError)
        self.assertEqual(
            errortext, '[line 1] Error at "super": Expect expression.\n'
        )

    def test_unclosed_block(self):
        _, diagnostics, errortext = parse("{ print 1;")
        self.assertEqual(
            errortext, "[line 1] Error at end: Expect '}' after block.\n"
        )
