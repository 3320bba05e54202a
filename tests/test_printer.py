import unittest

from lox import lang, printer


def token(type, lexeme):
    return lang.Token(type, lexeme, None, 1)


class ExprPrinterTestCase(unittest.TestCase):
    def test_nested_expression(self):
        expr = lang.Binary(
            lang.Unary(token('MINUS', '-'), lang.Literal(123.0)),
            token('STAR', '*'),
            lang.Grouping(lang.Literal(45.67)),
        )
        self.assertEqual(printer.show(expr), "(* (- 123) (group 45.67))")

    def test_literals(self):
        self.assertEqual(printer.show(lang.Literal(None)), 'nil')
        self.assertEqual(printer.show(lang.Literal(True)), 'true')
        self.assertEqual(printer.show(lang.Literal(False)), 'false')
        self.assertEqual(printer.show(lang.Literal("hi")), '"hi"')
        self.assertEqual(printer.show(lang.Literal(2.5)), '2.5')

    def test_names(self):
        a = lang.Variable(token('IDENTIFIER', 'a'))
        assign = lang.Assign(token('IDENTIFIER', 'b'), a)
        self.assertEqual(printer.show(assign), "(= b a)")
        self.assertEqual(printer.show(lang.This(token('THIS', 'this'))),
                         'this')

    def test_properties(self):
        obj = lang.Variable(token('IDENTIFIER', 'obj'))
        get = lang.Get(obj, token('IDENTIFIER', 'field'))
        self.assertEqual(printer.show(get), "(. obj field)")
        setter = lang.Set(obj, token('IDENTIFIER', 'field'),
                          lang.Literal(1.0))
        self.assertEqual(printer.show(setter), "(= (. obj field) 1)")

    def test_call(self):
        call = lang.Call(
            lang.Variable(token('IDENTIFIER', 'f')),
            token('RIGHT_PAREN', ')'),
            [lang.Literal(1.0), lang.Literal("s")],
        )
        self.assertEqual(printer.show(call), '(call f 1 "s")')


class StmtPrinterTestCase(unittest.TestCase):
    def test_statements(self):
        x = lang.Variable(token('IDENTIFIER', 'x'))
        body = lang.Block([lang.Print(x), lang.Expression(x)])
        loop = lang.While(lang.Literal(True), body)
        self.assertEqual(printer.show(loop),
                         "(while true (block (print x) (; x)))")

    def test_function_and_class(self):
        method = lang.FunctionStmt(
            token('IDENTIFIER', 'm'),
            [token('IDENTIFIER', 'a'), token('IDENTIFIER', 'b')],
            [lang.Return(token('RETURN', 'return'), None)],
        )
        klass = lang.ClassStmt(token('IDENTIFIER', 'K'), [method])
        self.assertEqual(printer.show(klass),
                         "(class K (fun m (a b) (return)))")

    def test_unknown_node(self):
        with self.assertRaises(TypeError):
            printer.show(object())
