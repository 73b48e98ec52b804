# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

from collections import deque
from types import MappingProxyType
import logging

from errors import LogicError
from lexer import Lexer, Literal, Operator, Variable
from tree import OperatorExpression, leaf

__all__ = [
    "ParseError",
    "ExpectedOperatorError",
    "ExpectedValueError",
    "UnmatchedParenthesisError",
    "EmptyExpressionError",
    "UndefinedAssignmentError",
    "MalformedAssignmentError",
    "MisplacedAssignmentError",
    "DanglingOperatorError",
    "precedence",
    "Parser",
    "parse",
]

logger = logging.getLogger(__name__)

END_OF_INPUT = "end of input"


class ParseError(LogicError):
    pass


class ExpectedOperatorError(ParseError):
    def __init__(self, *, got, **kwargs):
        super().__init__(f"expected an operator, got {got!s}", **kwargs)
        self.got = got


class ExpectedValueError(ParseError):
    def __init__(self, *, got, **kwargs):
        super().__init__(f"expected a value, got {got!s}", **kwargs)
        self.got = got


class UnmatchedParenthesisError(ParseError):
    def __init__(self, *, parenthesis, **kwargs):
        super().__init__(f"unmatched {parenthesis!s}", **kwargs)
        self.parenthesis = parenthesis


class EmptyExpressionError(ParseError):
    def __init__(self, **kwargs):
        super().__init__("expected an expression", **kwargs)


class UndefinedAssignmentError(ParseError):
    def __init__(self, *, variable, **kwargs):
        super().__init__(f"cannot assign undefined variable `{variable}'", **kwargs)
        self.variable = variable


class MalformedAssignmentError(ParseError):
    def __init__(self, *, variable, got, **kwargs):
        super().__init__(f"expected a literal or a variable to assign to `{variable}', got {got!s}", **kwargs)
        self.variable = variable
        self.got = got


class MisplacedAssignmentError(ParseError):
    def __init__(self, **kwargs):
        super().__init__(f"{Operator.ASSIGN!s} after the start of the expression", **kwargs)


class DanglingOperatorError(ParseError):
    def __init__(self, *, operator, **kwargs):
        super().__init__(f"missing operand for {operator!s}", **kwargs)
        self.operator = operator


# higher binds tighter
precedence = {
    Operator.EQUIVALENCE: 1,
    Operator.IMPLICATION: 2,
    Operator.OR: 3,
    Operator.AND: 4,
    Operator.NOT: 5,
}


class Parser:
    """Builds an expression tree with a shunting-yard pass over the tokens.

    Completed subtrees wait on ``nodes`` and pending operators on
    ``operators``; an open parenthesis on ``operators`` stops reductions
    until the matching close parenthesis discards it. Assignments are only
    recognized before the first token of the expression.
    """

    def __init__(self, s):
        self.lexer = Lexer(s)
        self.tokens = iter(self.lexer)
        self.lookahead = deque()
        self.line_number = 0
        self.column = 0
        self.operators = []
        self.nodes = []
        self.bindings = {}
        self.expect_value = True

    def error(self, type_, *args, **kwargs):
        return type_(*args, line_number=self.line_number, column=self.column, **kwargs)

    def fill(self, count):
        while len(self.lookahead) < count:
            token = next(self.tokens, None)
            if token is None:
                position = self.lexer.end()
            else:
                position = (self.lexer.token_line_number, self.lexer.token_column)
            self.lookahead.append((token, position))

    def peek(self, offset=0):
        self.fill(offset + 1)
        return self.lookahead[offset][0]

    def next(self):
        self.fill(1)
        token, (self.line_number, self.column) = self.lookahead.popleft()
        return token

    def parse_assignments(self):
        while isinstance(self.peek(), Variable) and self.peek(1) is Operator.ASSIGN:
            variable = self.next()
            self.next()
            value = self.next()
            if isinstance(value, Literal):
                self.bindings[variable.name] = value.value
            elif isinstance(value, Variable):
                try:
                    self.bindings[variable.name] = self.bindings[value.name]
                except KeyError:
                    raise self.error(UndefinedAssignmentError, variable=value.name) from None
            else:
                raise self.error(
                    MalformedAssignmentError,
                    variable=variable.name,
                    got=END_OF_INPUT if value is None else value,
                )
            logger.debug("%s := %s", variable, int(self.bindings[variable.name]))

    def reduce(self, operator):
        if not self.nodes:
            raise self.error(DanglingOperatorError, operator=operator)
        right = self.nodes.pop()
        if operator is Operator.NOT:
            self.nodes.append(OperatorExpression(operator, right))
            return
        if not self.nodes:
            raise self.error(DanglingOperatorError, operator=operator)
        left = self.nodes.pop()
        self.nodes.append(OperatorExpression(operator, left, right))

    def push_value(self, token):
        if not self.expect_value:
            raise self.error(ExpectedOperatorError, got=token)
        self.nodes.append(leaf(token))
        self.expect_value = False

    def push_parenthesis_open(self):
        if not self.expect_value:
            raise self.error(ExpectedOperatorError, got=Operator.PARENTHESIS_OPEN)
        self.operators.append(Operator.PARENTHESIS_OPEN)

    def push_parenthesis_close(self):
        if Operator.PARENTHESIS_OPEN not in self.operators:
            raise self.error(UnmatchedParenthesisError, parenthesis=Operator.PARENTHESIS_CLOSE)
        if self.expect_value:
            raise self.error(ExpectedValueError, got=Operator.PARENTHESIS_CLOSE)
        while True:
            operator = self.operators.pop()
            if operator is Operator.PARENTHESIS_OPEN:
                return
            self.reduce(operator)

    def push_not(self):
        if not self.expect_value:
            raise self.error(ExpectedOperatorError, got=Operator.NOT)
        # prefix operator, nothing to its left can be reduced yet
        self.operators.append(Operator.NOT)

    def push_binary(self, operator):
        if self.expect_value:
            raise self.error(ExpectedValueError, got=operator)
        while self.operators:
            top = self.operators[-1]
            if top is Operator.PARENTHESIS_OPEN or precedence[top] < precedence[operator]:
                break
            self.reduce(self.operators.pop())
        self.operators.append(operator)
        self.expect_value = True

    def push(self, token):
        if isinstance(token, (Literal, Variable)):
            self.push_value(token)
        elif token is Operator.PARENTHESIS_OPEN:
            self.push_parenthesis_open()
        elif token is Operator.PARENTHESIS_CLOSE:
            self.push_parenthesis_close()
        elif token is Operator.NOT:
            self.push_not()
        elif token is Operator.ASSIGN:
            raise self.error(MisplacedAssignmentError)
        else:
            self.push_binary(token)

    def finish(self):
        if not self.nodes and not self.operators:
            raise self.error(EmptyExpressionError)
        if self.expect_value:
            raise self.error(ExpectedValueError, got=END_OF_INPUT)
        while self.operators:
            operator = self.operators.pop()
            if operator is Operator.PARENTHESIS_OPEN:
                raise self.error(UnmatchedParenthesisError, parenthesis=operator)
            self.reduce(operator)
        if len(self.nodes) != 1:
            raise self.error(ParseError, f"expected a single expression, got {len(self.nodes)}")
        return self.nodes.pop()

    def parse(self):
        self.parse_assignments()
        while True:
            token = self.next()
            if token is None:
                break
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("token %s, operators %s", token, [str(operator) for operator in self.operators])
            self.push(token)
        return self.finish(), MappingProxyType(self.bindings)


def parse(s):
    """Parse a statement into ``(tree, bindings)``.

    ``bindings`` maps every variable assigned before the expression to its
    last assigned value and is read-only.
    """
    return Parser(s).parse()
