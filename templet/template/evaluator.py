"""
Вычислитель AST шаблона.

Обходит дерево узлов и дописывает результат в один буфер,
принадлежащий конкретному вызову evaluate. AST при этом не меняется,
поэтому одно дерево можно вычислять многократно с разными окружениями.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .nodes import (
    ElifNode,
    ElseNode,
    ForNode,
    IfNode,
    TemplateAST,
    TemplateNode,
    TextNode,
    ValueNode,
    if_branches,
)
from .resolver import PathResolver
from .scope import Scope
from ..errors import InvalidTagError, MissingTagError
from ..types import MapValue, RenderOptions

logger = logging.getLogger(__name__)


class TemplateEvaluator:
    """
    Вычислитель узлов шаблона.

    Принимает AST и окружение, возвращает отрендеренный текст.
    """

    def __init__(self, resolver: Optional[PathResolver] = None, options: Optional[RenderOptions] = None):
        """
        Инициализирует вычислитель.

        Args:
            resolver: Резолвер путей (по умолчанию PathResolver)
            options: Настройки рендеринга (по умолчанию RenderOptions())
        """
        self.resolver = resolver or PathResolver()
        self.options = options or RenderOptions()

    def evaluate(self, ast: TemplateAST, environment: MapValue) -> str:
        """
        Вычисляет AST в окружении.

        Буфер локален для вызова: при ошибке частичный вывод
        отбрасывается вместе с ним.

        Raises:
            InvalidTagError, MissingTagError: При ошибке вычисления
        """
        buffer: List[str] = []
        self.evaluate_nodes(ast, buffer, Scope.root(environment))
        return "".join(buffer)

    def evaluate_nodes(self, nodes: TemplateAST, buffer: List[str], scope: Scope) -> None:
        for node in nodes:
            self.evaluate_node(node, buffer, scope)

    def evaluate_node(self, node: TemplateNode, buffer: List[str], scope: Scope) -> None:
        """Вычисляет один узел, дописывая результат в buffer."""
        if isinstance(node, TextNode):
            buffer.append(node.text)
        elif isinstance(node, ValueNode):
            self._evaluate_value(node, buffer, scope)
        elif isinstance(node, IfNode):
            self._evaluate_if(node, buffer, scope)
        elif isinstance(node, ForNode):
            self._evaluate_for(node, buffer, scope)
        elif isinstance(node, ElifNode):
            raise InvalidTagError(f"Elif without if: 'elif {node.condition}'")
        elif isinstance(node, ElseNode):
            raise InvalidTagError("Else without if or elif")
        else:
            raise TypeError(f"Unknown node type: {type(node).__name__}")

    def _evaluate_value(self, node: ValueNode, buffer: List[str], scope: Scope) -> None:
        text = self.resolver.resolve_scalar(node.path, scope)
        if text is None:
            # Незаданное значение просто убирается из вывода
            if self.options.strict:
                raise MissingTagError(f"Tag name '{node.path}' not found")
            return
        buffer.append(text)

    def _evaluate_if(self, node: IfNode, buffer: List[str], scope: Scope) -> None:
        for condition, body in if_branches(node):
            if condition is None or self.resolver.is_bound(condition, scope):
                self.evaluate_nodes(body, buffer, scope)
                return

    def _evaluate_for(self, node: ForNode, buffer: List[str], scope: Scope) -> None:
        items = self.resolver.resolve_list(node.source, scope)

        if node.alias in scope:
            raise InvalidTagError(
                f"Invalid alias name '{node.alias}' in 'for {node.source} as {node.alias}': "
                f"alias collides with existing name"
            )

        logger.debug(f"Evaluating for '{node.source}' as '{node.alias}': {len(items)} items")
        for item in items:
            self.evaluate_nodes(node.children, buffer, scope.bind(node.alias, item))


__all__ = ["TemplateEvaluator"]
