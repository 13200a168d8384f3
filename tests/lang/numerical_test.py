import io
import unittest

from tempo.lang.error import ErrorHandler, GenericException
from tempo.lang.numerical import (ErrorKind, Err, Ok, evaluate_condition, evaluate_expression, lookup,
                                  resolve_value, truncdiv)
from tempo.lang.store import VariableStore


def make_handler():
    return ErrorHandler(fatal=False, stream=io.StringIO())


class ResolveValueTestCase(unittest.TestCase):

    def setUp(self):
        self.store = VariableStore({"a": 5, "neg": -1, "x1": 12})
        self.handler = make_handler()

    def test_resolve_value(self):
        should_pass = {"a": 5, "neg": -1, "x1": 12, "42": 42, "-3": -3, "+7": 7, "0": 0}
        for case, result in should_pass.items():
            self.assertEqual(Ok(result), resolve_value(case, self.store, self.handler), case)
        self.assertEqual([], self.handler.warnings)

    def test_resolve_value_fails(self):
        should_fail = ["b", "", "5abc", "1.5", "a b"]
        for case in should_fail:
            self.assertEqual(Err(ErrorKind.INVALID_LITERAL, case), resolve_value(case, self.store, self.handler), case)
        self.assertEqual(len(should_fail), len(self.handler.warnings))
        self.assertEqual("invalid argument: 'b'", self.handler.warnings[0].plain)

    def test_variable_shadows_literal(self):
        self.store.set("7", 100)
        self.assertEqual(Ok(100), resolve_value("7", self.store, self.handler))

    def test_lookup(self):
        should_pass = {"a": 5, "neg": -1}
        for case, result in should_pass.items():
            self.assertEqual(Ok(result), lookup(case, self.store), case)

        should_fail = ["b", "5", ""]
        for case in should_fail:
            self.assertEqual(Err(ErrorKind.UNBOUND_VARIABLE, case), lookup(case, self.store), case)
        self.assertEqual([], self.handler.warnings)

    def test_warning_kind(self):
        resolve_value("b", self.store, self.handler)
        self.assertEqual(ErrorKind.INVALID_LITERAL, self.handler.warnings[0].kind)


class EvaluateExpressionTestCase(unittest.TestCase):

    def setUp(self):
        self.store = VariableStore({"a": 5, "b": 3, "n": -7})
        self.handler = make_handler()

    def test_arithmetic(self):
        should_pass = {
            "5": 5,
            "a": 5,
            "a + b": 8,
            "a - b": 2,
            "b - a": -2,
            "a * b": 15,
            "a / b": 1,
            "7/2": 3,
            "n / 2": -3,
            "n * 2": -14,
            "2 - 3": -1,
            "a+10": 15,
        }
        for case, result in should_pass.items():
            self.assertEqual(Ok(result), evaluate_expression(case, self.store, self.handler), case)
        self.assertEqual([], self.handler.warnings)

    def test_minus_one_is_a_value(self):
        result = evaluate_expression("b - 4", self.store, self.handler)
        self.assertTrue(result.ok)
        self.assertEqual(-1, result.value)

    def test_first_operator_splits(self):
        # a leading minus is the operator, leaving an empty left operand
        self.assertFalse(evaluate_expression("-3", self.store, self.handler).ok)
        self.assertFalse(evaluate_expression("a + b + 1", self.store, self.handler).ok)

    def test_unresolvable_operands(self):
        should_fail = {"x + 1": "x", "1 + y": "y", "q": "q", "": ""}
        for case, expr in should_fail.items():
            self.assertEqual(Err(ErrorKind.INVALID_LITERAL, expr), evaluate_expression(case, self.store, self.handler))

    def test_both_operands_reported(self):
        evaluate_expression("x * y", self.store, self.handler)
        self.assertEqual(["invalid argument: 'x'", "invalid argument: 'y'"],
                         [warning.plain for warning in self.handler.warnings])

    def test_division_by_zero(self):
        self.assertRaises(GenericException, evaluate_expression, "a / 0", self.store, self.handler)

    def test_truncdiv(self):
        cases = [(7, 2), (-7, 2), (7, -2), (-7, -2), (0, 5), (6, 3), (-1, 3), (1, -3)]
        for dividend, divisor in cases:
            self.assertEqual(int(dividend / divisor), truncdiv(dividend, divisor), (dividend, divisor))


class EvaluateConditionTestCase(unittest.TestCase):

    def setUp(self):
        self.store = VariableStore({"a": 5, "b": 3, "c": 5})

    def test_evaluate_condition(self):
        should_pass = [("a", "b", ">"), ("b", "a", "<")]
        for case in should_pass:
            self.assertTrue(evaluate_condition(*case, self.store), case)

        should_fail = [("b", "a", ">"), ("a", "b", "<"), ("a", "c", ">"), ("a", "c", "<"), ("a", "b", "="),
                       ("a", "z", ">"), ("z", "a", "<"), ("a", "1", ">"), ("9", "b", ">")]
        for case in should_fail:
            self.assertFalse(evaluate_condition(*case, self.store), case)


if __name__ == '__main__':
    unittest.main()
