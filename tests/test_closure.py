import unittest

from tests import run

COUNTER = """
fun makeCounter() {
    var i = 0;
    fun count() {
        i = i + 1;
        print i;
    }
    return count;
}

var first = makeCounter();
var second = makeCounter();
first();
first();
second();
first();
"""


class CounterTestCase(unittest.TestCase):
    def setUp(self):
        self.result = run(COUNTER)

    def test_no_error(self):
        self.assertFalse(self.result['hadError'])
        self.assertFalse(self.result['hadRuntimeError'])

    def test_independent_counters(self):
        # Each call to makeCounter creates a fresh environment
        self.assertEqual(self.result['output'], "1\n2\n1\n3\n")


class SharedClosureTestCase(unittest.TestCase):
    def test_closures_share_environment(self):
        result = run("""
        var get;
        var set;
        fun make() {
            var value = "initial";
            fun getter() { return value; }
            fun setter(v) { value = v; }
            get = getter;
            set = setter;
        }
        make();
        print get();
        set("changed");
        print get();
        """)
        self.assertEqual(result['output'], "initial\nchanged\n")


class StaticScopeTestCase(unittest.TestCase):
    def test_binding_fixed_at_declaration(self):
        # A later declaration in the same block does not change
        # which variable the closure refers to
        result = run("""
        var a = "global";
        {
            fun showA() {
                print a;
            }
            showA();
            var a = "block";
            showA();
            print a;
        }
        """)
        self.assertFalse(result['hadError'])
        self.assertEqual(result['output'], "global\nglobal\nblock\n")

    def test_closure_outlives_block(self):
        result = run("""
        var f;
        {
            var captured = "kept";
            fun inner() { return captured; }
            f = inner;
        }
        print f();
        """)
        self.assertEqual(result['output'], "kept\n")

    def test_loop_closures(self):
        result = run("""
        var fns;
        var last;
        for (var i = 0; i < 3; i = i + 1) {
            var j = i;
            fun show() { print j; }
            if (i == 0) fns = show;
            last = show;
        }
        fns();
        last();
        """)
        self.assertEqual(result['output'], "0\n2\n")
