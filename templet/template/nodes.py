"""
AST-узлы шаблона.

Замкнутый набор неизменяемых узлов. Листья — TextNode и ValueNode;
блочные узлы (If/Elif/Else/For) владеют списком дочерних узлов.

Ветви elif/else хранятся как соседние узлы внутри children узла IfNode:
то, что стоит до первого ElifNode/ElseNode, — тело самого if.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from ..errors import InvalidTagError


@dataclass(frozen=True)
class TextNode:
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class ValueNode:
    """
    Подстановка значения {$ path }.

    Путь хранится дословно, разрешается при вычислении.
    """
    path: str


@dataclass(frozen=True)
class IfNode:
    """
    Условный блок {% if path %}…{% endif %}.

    Условие истинно, если путь разрешается в окружении (значение не важно).
    """
    condition: str
    children: List["TemplateNode"] = field(default_factory=list)


@dataclass(frozen=True)
class ElifNode:
    """Ветвь {% elif path %}; вычисляется только через родительский IfNode."""
    condition: str
    children: List["TemplateNode"] = field(default_factory=list)


@dataclass(frozen=True)
class ElseNode:
    """Ветвь {% else %}; вычисляется только через родительский IfNode."""
    children: List["TemplateNode"] = field(default_factory=list)


@dataclass(frozen=True)
class ForNode:
    """
    Цикл {% for source as alias %}…{% endfor %}.

    Тело вычисляется для каждого элемента списка source
    с дополнительной привязкой alias → элемент.
    """
    source: str
    alias: str
    children: List["TemplateNode"] = field(default_factory=list)


TemplateNode = Union[TextNode, ValueNode, IfNode, ElifNode, ElseNode, ForNode]

# Алиас для списка узлов (AST)
TemplateAST = List[TemplateNode]

BLOCK_NODES = (IfNode, ElifNode, ElseNode, ForNode)

# Ветвь условной конструкции: (условие или None для else, тело)
Branch = Tuple[Optional[str], List[TemplateNode]]


def if_branches(node: IfNode) -> List[Branch]:
    """
    Раскладывает дочерние узлы IfNode на ветви в порядке проверки.

    Returns:
        [(condition, body), (elif_condition, elif_body)…, (None, else_body)]

    Raises:
        InvalidTagError: Несколько else, elif после else или
                         посторонние узлы между ветвями
    """
    body: List[TemplateNode] = []
    branches: List[Branch] = [(node.condition, body)]
    seen_else = False

    for child in node.children:
        if isinstance(child, ElifNode):
            if seen_else:
                raise InvalidTagError(f"Elif after else in 'if {node.condition}'")
            branches.append((child.condition, child.children))
        elif isinstance(child, ElseNode):
            if seen_else:
                raise InvalidTagError(f"Multiple else blocks in 'if {node.condition}'")
            seen_else = True
            branches.append((None, child.children))
        elif len(branches) == 1:
            body.append(child)
        else:
            raise InvalidTagError(
                f"Unexpected {type(child).__name__} between branches of 'if {node.condition}'"
            )

    return branches


def count_nodes(ast: TemplateAST) -> int:
    """Считает все узлы дерева, включая вложенные."""
    total = 0
    for node in ast:
        total += 1
        if isinstance(node, BLOCK_NODES):
            total += count_nodes(node.children)
    return total


def format_ast_tree(ast: TemplateAST, indent: int = 0) -> str:
    """
    Форматирует AST в виде дерева для отладки.

    Args:
        ast: AST для форматирования
        indent: Уровень отступа

    Returns:
        Строковое представление дерева
    """
    lines = []
    prefix = "  " * indent

    for node in ast:
        if isinstance(node, TextNode):
            text_preview = node.text[:50] + "..." if len(node.text) > 50 else node.text
            lines.append(f"{prefix}Text: {text_preview!r}")
        elif isinstance(node, ValueNode):
            lines.append(f"{prefix}Value: {node.path}")
        elif isinstance(node, IfNode):
            lines.append(f"{prefix}If: {node.condition}")
        elif isinstance(node, ElifNode):
            lines.append(f"{prefix}Elif: {node.condition}")
        elif isinstance(node, ElseNode):
            lines.append(f"{prefix}Else")
        elif isinstance(node, ForNode):
            lines.append(f"{prefix}For: {node.source} as {node.alias}")

        if isinstance(node, BLOCK_NODES):
            lines.append(format_ast_tree(node.children, indent + 1))

    return "\n".join(line for line in lines if line)


__all__ = [
    "TextNode",
    "ValueNode",
    "IfNode",
    "ElifNode",
    "ElseNode",
    "ForNode",
    "TemplateNode",
    "TemplateAST",
    "BLOCK_NODES",
    "Branch",
    "if_branches",
    "count_nodes",
    "format_ast_tree",
]
