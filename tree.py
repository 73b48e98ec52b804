# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

from collections import deque, namedtuple

from graphviz import Source

from lexer import Literal, Operator, Variable

__all__ = [
    "LiteralExpression",
    "VariableExpression",
    "OperatorExpression",
    "leaf",
    "negation",
    "conjunction",
    "disjunction",
    "implication",
    "equivalence",
    "children",
    "render",
    "to_dot",
    "write_graph",
]


class LiteralExpression(namedtuple("_LiteralExpression", ("value",))):
    def __str__(self):
        return "1" if self.value else "0"


class VariableExpression(namedtuple("_VariableExpression", ("name",))):
    def __str__(self):
        return self.name


class OperatorExpression(namedtuple("_OperatorExpression", ("operator", "left", "right"), defaults=(None, None))):
    def __str__(self):
        return render(self)


def leaf(token):
    if isinstance(token, Literal):
        return LiteralExpression(token.value)
    if isinstance(token, Variable):
        return VariableExpression(token.name)
    raise TypeError(f"cannot make a leaf from {token!s}")


def negation(a):
    return OperatorExpression(Operator.NOT, a)


def conjunction(a, b):
    return OperatorExpression(Operator.AND, a, b)


def disjunction(a, b):
    return OperatorExpression(Operator.OR, a, b)


def implication(a, b):
    return OperatorExpression(Operator.IMPLICATION, a, b)


def equivalence(a, b):
    return OperatorExpression(Operator.EQUIVALENCE, a, b)


def children(node):
    if not isinstance(node, OperatorExpression):
        return ()
    return tuple(child for child in (node.left, node.right) if child is not None)


def render(node):
    """Prefix form of a tree, e.g. ``and(1, not(p))``, built without recursion."""
    parts = []
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, OperatorExpression):
            stack.append(")")
            operands = children(item)
            for i in reversed(range(len(operands))):
                stack.append(operands[i])
                if i:
                    stack.append(", ")
            stack.append(f"{item.operator.name.lower()}(")
        else:
            parts.append(str(item))
    return "".join(parts)


def to_dot(root):
    """Render a tree as a Graphviz digraph.

    Vertices are numbered breadth first from the root, operators are drawn
    as boxes labelled with their symbol, and every parent gets one edge per
    child, left child first.
    """
    definitions = []
    edges = []
    queue = deque([(0, root)])
    counter = 1
    while queue:
        number, node = queue.popleft()
        if isinstance(node, OperatorExpression):
            definitions.append(f'    {number} [label="{node.operator.symbol}" shape="box"]\n')
        else:
            definitions.append(f'    {number} [label="{node!s}"]\n')
        for child in children(node):
            edges.append(f"    {number} -> {counter}\n")
            queue.append((counter, child))
            counter += 1
    return "digraph G {\n" + "".join(definitions) + "".join(edges) + "}\n"


def write_graph(root, path, render_format=None):
    """Save the DOT source of a tree to ``path``.

    With ``render_format`` (e.g. ``"png"``) the graph is also rendered next
    to it, which needs the Graphviz executables. Returns the path written
    last.
    """
    source = Source(to_dot(root), filename=str(path))
    if render_format is not None:
        return source.render(format=render_format)
    return source.save()
