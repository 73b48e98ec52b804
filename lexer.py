# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

from collections import namedtuple
from enum import Enum
import regex as re

from errors import LogicError

__all__ = [
    "LexError",
    "UnexpectedCharacterError",
    "IncompleteOperatorError",
    "Operator",
    "Literal",
    "Variable",
    "Lexer",
    "lex",
]


class LexError(LogicError):
    pass


class UnexpectedCharacterError(LexError):
    def __init__(self, *, character, **kwargs):
        super().__init__(f"unexpected character `{character}'", **kwargs)
        self.character = character


class IncompleteOperatorError(LexError):
    def __init__(self, *, expected, **kwargs):
        super().__init__(f"expected {expected!s}", **kwargs)
        self.expected = expected


class Operator(Enum):
    def __str__(self):
        return f"`{self.symbol}'"

    @property
    def symbol(self):
        return self.value

    EQUIVALENCE = "<=>"
    IMPLICATION = "=>"
    OR = "v"
    AND = "^"
    NOT = "~"
    PARENTHESIS_OPEN = "("
    PARENTHESIS_CLOSE = ")"
    ASSIGN = ":="


class Literal(namedtuple("_Literal", ("value",))):
    def __str__(self):
        return "1" if self.value else "0"


class Variable(namedtuple("_Variable", ("name",))):
    def __str__(self):
        return self.name


NEWLINE = re.compile("\\n|\\r\\n|\\r")
WHITE_SPACE = re.compile("[ \t\v\f]+")
LITERAL = re.compile("[01]")
# any letter but `v', which is left for the disjunction operator
VARIABLE = re.compile("(?!v)\\p{L}")

operators = {operator: re.compile(re.escape(operator.symbol)) for operator in Operator}

# first characters of multi-character operators
incomplete_operators = {
    "<": Operator.EQUIVALENCE,
    "=": Operator.IMPLICATION,
}

skipped_characters = frozenset(":")


class Lexer:
    """Splits source text into tokens.

    Iterating a lexer restarts it from the beginning of the text. The
    position of the token most recently produced is kept in
    ``token_line_number`` and ``token_column`` so that later stages can
    report where they failed.
    """

    def __init__(self, s):
        self.lines = NEWLINE.split(s)
        self.rewind()

    def rewind(self):
        self.line_number = 0
        self.column = 0
        self.token_line_number = 0
        self.token_column = 0

    def end(self):
        return len(self.lines) - 1, len(self.lines[-1])

    def eof(self):
        return self.line_number >= len(self.lines)

    def error(self, type_, *args, **kwargs):
        return type_(*args, line_number=self.line_number, column=self.column, **kwargs)

    def match(self, pattern):
        match = pattern.match(self.lines[self.line_number], self.column)
        if match:
            self.column = match.end()
        return match

    def next_token(self):
        while True:
            if self.eof():
                return None
            line = self.lines[self.line_number]
            if self.column >= len(line):
                self.line_number += 1
                self.column = 0
                continue
            if self.match(WHITE_SPACE):
                continue
            self.token_line_number = self.line_number
            self.token_column = self.column
            match = self.match(LITERAL)
            if match:
                return Literal(match.group() == "1")
            match = self.match(VARIABLE)
            if match:
                return Variable(match.group())
            for operator, pattern in operators.items():
                if self.match(pattern):
                    return operator
            character = line[self.column]
            if character in incomplete_operators:
                raise self.error(IncompleteOperatorError, expected=incomplete_operators[character])
            if character in skipped_characters:
                self.column += 1
                continue
            raise self.error(UnexpectedCharacterError, character=character)

    def __iter__(self):
        self.rewind()
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token


def lex(s):
    return iter(Lexer(s))
