from itertools import product

import pytest

from errors import LogicError
from interpreter import (
    EvaluationError,
    MalformedTreeError,
    MissingOperandError,
    UndefinedVariableError,
    UnknownOperatorError,
    evaluate,
    interpret,
    truth_tables,
)
from lexer import LexError, Operator
from parser import ParseError
from tree import LiteralExpression, OperatorExpression, VariableExpression, conjunction, negation

T = LiteralExpression(True)
F = LiteralExpression(False)


class TestTruthTables:
    """Every operator against every combination of operands."""

    @pytest.mark.parametrize("a,b", list(product([False, True], repeat=2)))
    def test_binary_operators(self, a, b):
        assert truth_tables[Operator.EQUIVALENCE](a, b) == (a == b)
        assert truth_tables[Operator.IMPLICATION](a, b) == (not (a and not b))
        assert truth_tables[Operator.OR](a, b) == (a or b)
        assert truth_tables[Operator.AND](a, b) == (a and b)

    @pytest.mark.parametrize("s,expected", [("1", True), ("0", False)])
    def test_literal(self, s, expected):
        assert interpret(s) is expected

    @pytest.mark.parametrize("s,expected", [("~1", False), ("~0", True), ("~~1", True)])
    def test_negation(self, s, expected):
        assert interpret(s) is expected

    @pytest.mark.parametrize(
        "s,expected",
        [("1 ^ 1", True), ("1 ^ 0", False), ("0 ^ 1", False), ("0 ^ 0", False)],
    )
    def test_conjunction(self, s, expected):
        assert interpret(s) is expected

    @pytest.mark.parametrize(
        "s,expected",
        [("1 v 1", True), ("1 v 0", True), ("0 v 1", True), ("0 v 0", False)],
    )
    def test_disjunction(self, s, expected):
        assert interpret(s) is expected

    @pytest.mark.parametrize(
        "s,expected",
        [("1 => 1", True), ("1 => 0", False), ("0 => 1", True), ("0 => 0", True)],
    )
    def test_implication(self, s, expected):
        assert interpret(s) is expected

    @pytest.mark.parametrize(
        "s,expected",
        [("1 <=> 1", True), ("1 <=> 0", False), ("0 <=> 1", False), ("0 <=> 0", True)],
    )
    def test_equivalence(self, s, expected):
        assert interpret(s) is expected


class TestStatements:
    @pytest.mark.parametrize(
        "s,expected",
        [
            ("1 ^ 0 v 1", True),
            ("1 ^ (0 v 1)", True),
            ("(1 ^ 0) v 1", True),
            ("((1 ^ 0) v 1)", True),
            ("~1 v 0", False),
            ("((1 => 0) ^ 1)", False),
            ("~(1 ^ 1)", False),
            ("~1 v ~1 <=> 0", True),
            ("~1 v ~0 <=> ~(1 ^ 0)", True),
            ("((1 v 0) => 0) ^ 1", False),
            ("1 => 0 => 0", True),
            ("p := 1 q := 0 r := 1 p ^ q ^ r", False),
            ("p := 1 q := p p ^ q", True),
            ("p := 1 p := 0 ~p", True),
        ],
    )
    def test_interpret(self, s, expected):
        assert interpret(s) is expected

    def test_evaluate_with_bindings(self):
        tree = conjunction(VariableExpression("p"), negation(VariableExpression("q")))
        assert evaluate(tree, {"p": True, "q": False}) is True
        assert evaluate(tree, {"p": True, "q": True}) is False

    def test_undefined_variable(self):
        with pytest.raises(UndefinedVariableError) as excinfo:
            interpret("p := 1 p ^ q")
        assert excinfo.value.name == "q"
        assert str(excinfo.value) == "undefined variable `q'"

    def test_repeated_interpretation(self):
        s = "p := 0 q := 1 (p => q) <=> (~q => ~p)"
        assert interpret(s) is interpret(s) is True

    def test_failures_propagate(self):
        with pytest.raises(LexError):
            interpret("<1")
        with pytest.raises(ParseError):
            interpret("1 1")
        with pytest.raises(ParseError):
            interpret("")


class TestMalformedTrees:
    """Trees the parser never builds still fail with a defined error."""

    def test_negation_without_operand(self):
        with pytest.raises(MissingOperandError) as excinfo:
            evaluate(OperatorExpression(Operator.NOT), {})
        assert excinfo.value.side == "left"

    @pytest.mark.parametrize(
        "left,right,side",
        [(T, None, "right"), (None, T, "left"), (None, None, "both")],
    )
    def test_binary_operator_missing_operands(self, left, right, side):
        with pytest.raises(MissingOperandError) as excinfo:
            evaluate(OperatorExpression(Operator.AND, left, right), {})
        assert excinfo.value.side == side
        assert excinfo.value.operator is Operator.AND

    @pytest.mark.parametrize("operator", [Operator.PARENTHESIS_OPEN, Operator.PARENTHESIS_CLOSE, Operator.ASSIGN])
    def test_unknown_operator(self, operator):
        with pytest.raises(UnknownOperatorError):
            evaluate(OperatorExpression(operator, T, F), {})

    def test_not_a_node(self):
        with pytest.raises(MalformedTreeError):
            evaluate(True, {})

    def test_errors_are_evaluation_errors(self):
        for error in (UndefinedVariableError, MissingOperandError, UnknownOperatorError, MalformedTreeError):
            assert issubclass(error, EvaluationError)
            assert issubclass(error, LogicError)


class TestDeepStatements:
    """Long chains and deep nesting evaluate without exhausting the stack."""

    def test_long_conjunction(self):
        assert interpret(" ^ ".join(["1"] * 2000)) is True
        assert interpret(" ^ ".join(["1"] * 1999 + ["0"])) is False

    def test_long_implication_chain(self):
        assert interpret(" => ".join(["0"] * 2000)) is True

    def test_stacked_negations(self):
        assert interpret("~" * 2000 + "1") is True
        assert interpret("~" * 2001 + "1") is False

    def test_deep_parentheses(self):
        assert interpret("(" * 2000 + "0 v 1" + ")" * 2000) is True

    def test_deep_nesting_with_variables(self):
        s = "p := 1 q := 0 " + "(p ^ " * 1500 + "~q" + ")" * 1500
        assert interpret(s) is True

    def test_undefined_variable_deep_in_tree(self):
        with pytest.raises(UndefinedVariableError) as excinfo:
            interpret("~" * 2000 + "p")
        assert excinfo.value.name == "p"

    def test_left_operand_first(self):
        with pytest.raises(UndefinedVariableError) as excinfo:
            interpret("p ^ q")
        assert excinfo.value.name == "p"
