import unittest

from lameval.lang.error import GenericException
from lameval.lang.numerical import cnumber, number, numberify
from lameval.lang.parser import parse
from lameval.pure.lexical import Abstraction, Application, Variable


class NumericalTestCase(unittest.TestCase):

    def test_cnumber(self):
        should_fail = [-2, 0.3, 4.0, 14.2, "x", True]
        for case in should_fail:
            self.assertRaises(GenericException, cnumber, case)

        should_pass = {0: "λf.λx.x", 1: "λf.λx.(f x)", 3: "λf.λx.(f (f (f x)))"}
        for case, result in should_pass.items():
            self.assertEqual(result, str(cnumber(case)))
            self.assertEqual(cnumber(case), cnumber(str(case)))

    def test_number(self):
        should_fail = [
            parse("λf.λx.f f")[0].term,
            parse("λf.λx.x f x")[0].term,
            parse("λx.λx.x")[0].term,
            parse("λf.f")[0].term,
            Variable("x"),
        ]
        for case in should_fail:
            self.assertIsNone(number(case), case)

        should_pass = {3: parse("λf.λx.f (f (f x))")[0].term, 0: parse("λf.λx.x")[0].term,
                       2: parse("λs.λz.s (s z)")[0].term}
        for result, case in should_pass.items():
            self.assertEqual(result, number(case), case)

    def test_numberify(self):
        pair = Abstraction("p", Application(Application(Variable("p"), cnumber(1)), cnumber(2)))
        self.assertEqual("λp.((p 1) 2)", str(numberify(pair)))
        self.assertEqual(Variable("7"), numberify(cnumber(7)))
        self.assertEqual(Variable("y"), numberify(Variable("y")))


if __name__ == '__main__':
    unittest.main()
