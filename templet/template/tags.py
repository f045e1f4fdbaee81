"""
Парсеры отдельных тегов.

Каждый парсер получает полный текст тега вместе с ограничителями
({$ … } или {% … %}), проверяет синтаксис и возвращает типизированный узел.
Блочные узлы создаются с пустым списком детей — тело подставляет
TemplateParser после рекурсивного разбора.
"""

from __future__ import annotations

from .nodes import ElifNode, ElseNode, ForNode, IfNode, ValueNode
from .paths import validate_alias, validate_path
from ..errors import ExpressionSyntaxError, InvalidTagError

VALUE_OPEN, VALUE_CLOSE = "{$", "}"
BLOCK_OPEN, BLOCK_CLOSE = "{%", "%}"

# Ключевые слова директив
KW_IF = "if"
KW_ELIF = "elif"
KW_ELSE = "else"
KW_ENDIF = "endif"
KW_FOR = "for"
KW_ENDFOR = "endfor"
KW_AS = "as"

KEYWORDS = frozenset({KW_IF, KW_ELIF, KW_ELSE, KW_ENDIF, KW_FOR, KW_ENDFOR})


def parse_value_tag(tag: str) -> ValueNode:
    """
    Парсит тег значения.

    Ex: {$first_name}, {$ config.servers[0].hostname }

    Raises:
        InvalidTagError: Если тег не обрамлён {$ и } или имя некорректно
    """
    if not tag.startswith(VALUE_OPEN) or not tag.endswith(VALUE_CLOSE):
        raise InvalidTagError(f"Tag '{tag}' must be enclosed with {{$ and }}")

    name = tag[len(VALUE_OPEN):-len(VALUE_CLOSE)].strip()
    if not name:
        raise InvalidTagError(f"Tag '{tag}' has an empty name")
    return ValueNode(validate_path(name))


def block_content(tag: str) -> str:
    """
    Возвращает содержимое директивы без {% %} и крайних пробелов.

    Raises:
        InvalidTagError: Если тег не обрамлён {% и %}
    """
    if (
        len(tag) < len(BLOCK_OPEN) + len(BLOCK_CLOSE)
        or not tag.startswith(BLOCK_OPEN)
        or not tag.endswith(BLOCK_CLOSE)
    ):
        raise InvalidTagError(f"Tag '{tag}' must be enclosed with {{% and %}}")
    return tag[len(BLOCK_OPEN):-len(BLOCK_CLOSE)].strip()


def block_keyword(tag: str) -> str:
    """
    Возвращает ключевое слово директивы (первое слово содержимого).

    Raises:
        InvalidTagError: Пустая директива или неизвестное ключевое слово
    """
    content = block_content(tag)
    if not content:
        raise InvalidTagError(f"Tag '{tag}' has no keyword")

    keyword = content.split(maxsplit=1)[0]
    if keyword not in KEYWORDS:
        raise InvalidTagError(f"Unrecognized tag keyword '{keyword}' in '{tag}'")
    return keyword


def _parse_condition(tag: str, keyword: str) -> str:
    content = block_content(tag)
    if not content.startswith(keyword):
        raise InvalidTagError(f"Tag '{tag}' must be prefixed with '{keyword} '")

    rest = content[len(keyword):]
    if not rest:
        raise InvalidTagError(f"Tag '{tag}' is missing a condition")
    if not rest[0].isspace():
        raise InvalidTagError(f"Tag '{tag}' must be prefixed with '{keyword} '")

    return validate_path(rest.strip())


def parse_if_tag(tag: str) -> IfNode:
    """
    Парсит условную директиву.

    Ex: {% if is_admin %}

    Raises:
        InvalidTagError: Нет префикса 'if ' или некорректное имя условия
    """
    return IfNode(_parse_condition(tag, KW_IF))


def parse_elif_tag(tag: str) -> ElifNode:
    """Ex: {% elif is_moderator %}"""
    return ElifNode(_parse_condition(tag, KW_ELIF))


def parse_else_tag(tag: str) -> ElseNode:
    """Ex: {% else %} — выражение не допускается."""
    if block_content(tag) != KW_ELSE:
        raise InvalidTagError(f"Tag '{tag}' must not contain an expression")
    return ElseNode()


def parse_end_tag(tag: str, keyword: str) -> None:
    """Проверяет закрывающую директиву {% endif %} / {% endfor %}."""
    if block_content(tag) != keyword:
        raise InvalidTagError(f"Tag '{tag}' must not contain an expression")


def parse_for_tag(tag: str) -> ForNode:
    """
    Парсит директиву цикла.

    Ex: {% for users as user %}{$ user }{% endfor %}

    Raises:
        ExpressionSyntaxError: Не четыре токена или не 'for … as …'
        InvalidTagError: Некорректное имя источника или алиаса
    """
    tokens = block_content(tag).split(" ")
    if len(tokens) != 4:
        raise ExpressionSyntaxError(
            f"For expression '{tag}' must have the form 'for <list> as <alias>'"
        )

    if tokens[0] != KW_FOR or tokens[2] != KW_AS:
        raise ExpressionSyntaxError(f"Unrecognized for expression syntax in '{tag}'")

    return ForNode(validate_path(tokens[1]), validate_alias(tokens[3]))


__all__ = [
    "KW_IF",
    "KW_ELIF",
    "KW_ELSE",
    "KW_ENDIF",
    "KW_FOR",
    "KW_ENDFOR",
    "KEYWORDS",
    "parse_value_tag",
    "block_content",
    "block_keyword",
    "parse_if_tag",
    "parse_elif_tag",
    "parse_else_tag",
    "parse_end_tag",
    "parse_for_tag",
]
