"""
Defines the abstract syntax tree (AST) produced by the ccfront parser.

The tree is a closed set of frozen dataclasses, listed in `NODE_TYPES`.
Consumers dispatch on the concrete type and reject anything outside the set;
new node kinds are added by extending `NODE_TYPES`, never by subclassing an
existing variant.

Classes:
    ASTNode: Common base providing `kind`, `children()` and `to_dict()`.
    Identifier, NumberLiteral: Leaves.
    Declaration, HandleDeclaration, MemberCall: Simple statements.
    Assignment, UnaryOperation, BinaryOperation: Expressions.
    IfStatement, WhileLoop, ForLoop: Compound statements with a body.
    Program: The root returned by `Parser.parse()`.

Functions:
    walk(node): Pre-order iteration over a subtree.
    format_tree(node): Indented outline of a subtree, one node per line.

Each node records the `line` it starts on. The line takes no part in
equality, so trees built by hand in tests compare equal to parsed ones.

Expression slots are `None` when the parser consumed an operand without
building a node for it.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict


class ASTDict(TypedDict, total=False):
    """
    Serialized form of an ASTNode, as returned by `ASTNode.to_dict()`.

    Every dict has `kind` and `line`; the remaining keys are the node's own
    fields, with child nodes serialized recursively and tuples as lists.
    """

    kind: str
    line: int


class ASTNode:
    """Base of every AST variant."""

    kind: ClassVar[str] = "node"

    def children(self) -> Iterator["ASTNode"]:
        """Yields the direct child nodes in field order."""
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if isinstance(value, ASTNode):
                yield value
            elif isinstance(value, tuple):
                yield from (v for v in value if isinstance(v, ASTNode))

    def to_dict(self) -> ASTDict:
        result: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):  # type: ignore[arg-type]
            result[f.name] = _serialize(getattr(self, f.name))
        return result  # type: ignore[return-value]


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class Identifier(ASTNode):
    kind: ClassVar[str] = "identifier"

    name: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    kind: ClassVar[str] = "number"

    text: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Declaration(ASTNode):
    """`int a, b;`"""

    kind: ClassVar[str] = "declaration"

    type_name: str
    identifiers: tuple[Identifier, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class HandleDeclaration(ASTNode):
    """`ifstream in("input.txt");` The path keeps its quotes."""

    kind: ClassVar[str] = "handle_declaration"

    type_name: str
    name: Identifier
    path: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class MemberCall(ASTNode):
    """`in.close();`"""

    kind: ClassVar[str] = "member_call"

    target: Identifier
    method: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Assignment(ASTNode):
    kind: ClassVar[str] = "assign"

    target: Identifier
    value: ASTNode
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class UnaryOperation(ASTNode):
    kind: ClassVar[str] = "unary"

    operator: str
    operand: ASTNode | None
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BinaryOperation(ASTNode):
    kind: ClassVar[str] = "binary"

    operator: str
    left: ASTNode
    right: ASTNode
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class IfStatement(ASTNode):
    kind: ClassVar[str] = "if"

    condition: ASTNode | None
    body: tuple[ASTNode, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class WhileLoop(ASTNode):
    kind: ClassVar[str] = "while"

    condition: ASTNode | None
    body: tuple[ASTNode, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class ForLoop(ASTNode):
    kind: ClassVar[str] = "for"

    init: ASTNode | None
    condition: ASTNode | None
    increment: ASTNode | None
    body: tuple[ASTNode, ...]
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Program(ASTNode):
    kind: ClassVar[str] = "program"

    body: tuple[ASTNode, ...]
    line: int = field(default=1, compare=False)


NODE_TYPES: tuple[type[ASTNode], ...] = (
    Identifier,
    NumberLiteral,
    Declaration,
    HandleDeclaration,
    MemberCall,
    Assignment,
    UnaryOperation,
    BinaryOperation,
    IfStatement,
    WhileLoop,
    ForLoop,
    Program,
)


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yields `node` and every node below it, parents before children."""
    yield node
    for child in node.children():
        yield from walk(child)


def _header(node: ASTNode) -> str:
    if isinstance(node, Program):
        return "Program"
    if isinstance(node, Identifier):
        return f"Identifier {node.name}"
    if isinstance(node, NumberLiteral):
        return f"NumberLiteral {node.text}"
    if isinstance(node, Declaration):
        names = ", ".join(i.name for i in node.identifiers)
        return f"Declaration {node.type_name} {names}"
    if isinstance(node, HandleDeclaration):
        return f"HandleDeclaration {node.type_name} {node.name.name}({node.path})"
    if isinstance(node, MemberCall):
        return f"MemberCall {node.target.name}.{node.method}()"
    if isinstance(node, Assignment):
        return f"Assignment {node.target.name}"
    if isinstance(node, (UnaryOperation, BinaryOperation)):
        return f"{type(node).__name__} {node.operator}"
    if isinstance(node, (IfStatement, WhileLoop, ForLoop)):
        return type(node).__name__
    raise TypeError(f"Not an AST node: {node!r}")


def _slots(node: ASTNode) -> list[tuple[str, Any]]:
    if isinstance(node, (Program, IfStatement, WhileLoop, ForLoop)):
        return [
            (f.name, getattr(node, f.name)) for f in fields(node) if f.name != "line"
        ]
    if isinstance(node, Assignment):
        return [("value", node.value)]
    if isinstance(node, UnaryOperation):
        return [("operand", node.operand)]
    if isinstance(node, BinaryOperation):
        return [("left", node.left), ("right", node.right)]
    return []


def format_tree(node: ASTNode, indent: int = 0) -> str:
    """Renders `node` as an indented outline; `None` slots print as `-`."""
    pad = "  " * indent
    lines = [pad + _header(node)]
    for label, value in _slots(node):
        if label == "body" and isinstance(node, Program):
            lines.extend(format_tree(stmt, indent + 1) for stmt in value)
        elif value is None:
            lines.append(f"{pad}  {label}: -")
        elif isinstance(value, tuple):
            lines.append(f"{pad}  {label}:")
            lines.extend(format_tree(stmt, indent + 2) for stmt in value)
        else:
            lines.append(f"{pad}  {label}:")
            lines.append(format_tree(value, indent + 2))
    return "\n".join(lines)


__all__ = [
    "ASTDict",
    "ASTNode",
    "Assignment",
    "BinaryOperation",
    "Declaration",
    "ForLoop",
    "HandleDeclaration",
    "Identifier",
    "IfStatement",
    "MemberCall",
    "NODE_TYPES",
    "NumberLiteral",
    "Program",
    "UnaryOperation",
    "WhileLoop",
    "format_tree",
    "walk",
]
