"""
Движок шаблонов.

Теги:
- {$path}                       — подстановка скалярного значения
- {% if path %} … {% endif %}   — условие «значение задано» (с elif/else)
- {% for list as alias %} … {% endfor %} — цикл по списку
- {\ …}                         — экранирование: выводится «{ …}»
"""

from __future__ import annotations

from .evaluator import TemplateEvaluator
from .lexer import TemplateLexer, tokenize_template
from .nodes import (
    ElifNode,
    ElseNode,
    ForNode,
    IfNode,
    TemplateAST,
    TemplateNode,
    TextNode,
    ValueNode,
    count_nodes,
    format_ast_tree,
)
from .parser import TemplateParser, parse_template
from .processor import Template, render, render_file
from .resolver import PathResolver
from .scope import Scope

__all__ = [
    "Template",
    "render",
    "render_file",
    "TemplateLexer",
    "tokenize_template",
    "TemplateParser",
    "parse_template",
    "TemplateEvaluator",
    "PathResolver",
    "Scope",
    "TextNode",
    "ValueNode",
    "IfNode",
    "ElifNode",
    "ElseNode",
    "ForNode",
    "TemplateNode",
    "TemplateAST",
    "count_nodes",
    "format_ast_tree",
]
