import unittest

from lameval.lang.error import GenericException
from lameval.lang.lexical import Assignment, ExecStmt, inline
from lameval.pure.lexical import Abstraction, Application, NormalOrderReducer, Variable


x, y, z, w = Variable("x"), Variable("y"), Variable("z"), Variable("w")
IDENTITY = Abstraction("x", x)


class InlineTestCase(unittest.TestCase):

    def test_inline(self):
        namespace = {"id": IDENTITY, "k": Abstraction("a", Abstraction("b", Variable("a")))}
        cases = [
            (Application(Variable("id"), w), Application(IDENTITY, w)),
            (Abstraction("id", Variable("id")), Abstraction("id", Variable("id"))),  # bound, not inlined
            (Variable("other"), Variable("other")),
            (Application(Variable("k"), Variable("id")), Application(namespace["k"], IDENTITY)),
        ]
        for case, expected in cases:
            self.assertEqual(expected, inline(case, namespace), case)
        self.assertEqual(2, len(namespace))

    def test_inline_avoids_capture(self):
        namespace = {"k": Abstraction("a", y)}
        result = inline(Abstraction("y", Application(Variable("k"), y)), namespace)

        expected = Abstraction("b", Application(Abstraction("a", y), Variable("b")))
        self.assertTrue(result.alpha_equals(expected), result)
        self.assertEqual({"y"}, result.free_vars())

    def test_inline_is_simultaneous(self):
        namespace = {"a": Variable("b"), "b": Variable("c")}
        self.assertEqual(Application(Variable("b"), Variable("c")),
                         inline(Application(Variable("a"), Variable("b")), namespace))

    def test_statement_inline(self):
        namespace = {"id": IDENTITY}
        self.assertEqual(ExecStmt(Application(IDENTITY, y)), ExecStmt(Application(Variable("id"), y)).inline(namespace))
        self.assertEqual(Assignment("f", IDENTITY), Assignment("f", Variable("id")).inline(namespace))


class ExecuteTestCase(unittest.TestCase):

    def setUp(self):
        self.namespace = {}
        self.reducer = NormalOrderReducer()

    def test_exec_stmt(self):
        cases = [
            (Application(IDENTITY, y), y),
            (Abstraction("x", Application(x, x)), Abstraction("x", Application(x, x))),  # applications under λ
            (w, w),
        ]
        for case, expected in cases:
            self.assertEqual(expected, ExecStmt(case).execute(self.namespace, self.reducer), case)
        self.assertEqual({}, self.namespace)

    def test_assignment_persists(self):
        result = Assignment("id", IDENTITY).execute(self.namespace, self.reducer)
        self.assertEqual(IDENTITY, result)
        self.assertEqual(IDENTITY, self.namespace["id"])

        self.assertEqual(w, ExecStmt(Application(Variable("id"), w)).execute(self.namespace, self.reducer))

    def test_assignment_stores_normal_form(self):
        Assignment("t", Application(IDENTITY, Abstraction("y", y))).execute(self.namespace, self.reducer)
        self.assertEqual(Abstraction("y", y), self.namespace["t"])

    def test_assignment_overwrites(self):
        Assignment("v", IDENTITY).execute(self.namespace, self.reducer)
        Assignment("u", Variable("v")).execute(self.namespace, self.reducer)
        Assignment("v", Abstraction("y", z)).execute(self.namespace, self.reducer)

        self.assertEqual(Abstraction("y", z), self.namespace["v"])
        self.assertEqual(IDENTITY, self.namespace["u"])  # u was resolved when it was assigned

    def test_expected_function(self):
        should_raise = [Application(x, y), Application(Application(IDENTITY, x), y)]
        for case in should_raise:
            self.assertRaises(GenericException, ExecStmt(case).execute, self.namespace, self.reducer)
            self.assertRaises(GenericException, Assignment("p", case).execute, self.namespace, self.reducer)
        self.assertNotIn("p", self.namespace)


class RenderTestCase(unittest.TestCase):

    def test_render(self):
        cases = [
            (Assignment("id", IDENTITY), "id = λx.x;"),
            (Assignment("p", Application(x, y)), "p = x y;"),
            (ExecStmt(Application(x, y)), "(x y)"),
            (ExecStmt(IDENTITY), "λx.x"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, str(case), case)


if __name__ == '__main__':
    unittest.main()
