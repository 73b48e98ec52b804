# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

from errors import LogicError
from lexer import Operator
from parser import parse
from tree import LiteralExpression, OperatorExpression, VariableExpression, children

__all__ = [
    "EvaluationError",
    "UndefinedVariableError",
    "MissingOperandError",
    "UnknownOperatorError",
    "MalformedTreeError",
    "truth_tables",
    "evaluate",
    "interpret",
]


class EvaluationError(LogicError):
    pass


class UndefinedVariableError(EvaluationError):
    def __init__(self, *, name, **kwargs):
        super().__init__(f"undefined variable `{name}'", **kwargs)
        self.name = name


class MissingOperandError(EvaluationError):
    def __init__(self, *, operator, side, **kwargs):
        if side == "both":
            message = f"{operator!s} has no operands"
        else:
            message = f"{operator!s} is missing its {side} operand"
        super().__init__(message, **kwargs)
        self.operator = operator
        self.side = side


class UnknownOperatorError(EvaluationError):
    def __init__(self, *, operator, **kwargs):
        super().__init__(f"cannot evaluate {operator!s}", **kwargs)
        self.operator = operator


class MalformedTreeError(EvaluationError):
    def __init__(self, *, node, **kwargs):
        super().__init__(f"not an expression: {node!r}", **kwargs)
        self.node = node


def implies(a, b):
    return not (a and not b)


truth_tables = {
    Operator.EQUIVALENCE: lambda a, b: a == b,
    Operator.IMPLICATION: implies,
    Operator.OR: lambda a, b: a or b,
    Operator.AND: lambda a, b: a and b,
}


def check_operands(node):
    if node.operator is Operator.NOT:
        if node.left is None:
            raise MissingOperandError(operator=node.operator, side="left")
        return
    if node.operator not in truth_tables:
        raise UnknownOperatorError(operator=node.operator)
    if node.left is None and node.right is None:
        raise MissingOperandError(operator=node.operator, side="both")
    if node.left is None:
        raise MissingOperandError(operator=node.operator, side="left")
    if node.right is None:
        raise MissingOperandError(operator=node.operator, side="right")


def apply(node, values):
    if node.operator is Operator.NOT:
        return not values.pop()
    b = values.pop()
    a = values.pop()
    return truth_tables[node.operator](a, b)


def evaluate(node, bindings):
    """Compute the truth value of a tree.

    The tree is walked in post-order over an explicit stack, left operand
    before right, so deep trees need no recursion. Variables are looked up
    in ``bindings``; the tree and the bindings are left untouched.
    """
    values = []
    stack = [(node, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, LiteralExpression):
            values.append(node.value)
        elif isinstance(node, VariableExpression):
            try:
                values.append(bindings[node.name])
            except KeyError:
                raise UndefinedVariableError(name=node.name) from None
        elif not isinstance(node, OperatorExpression):
            raise MalformedTreeError(node=node)
        elif expanded:
            values.append(apply(node, values))
        else:
            check_operands(node)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children(node)))
    return values.pop()


def interpret(s):
    tree, bindings = parse(s)
    return evaluate(tree, bindings)
