"""
Парсер шаблонов с рекурсивным спуском.

Вытягивает токены из TemplateLexer и строит AST. Блочная директива
(if/for) рекурсивно разбирает своё тело до парной закрывающей директивы;
вложенные блоки поглощают свои endif/endfor сами, поэтому вложенность
обрабатывается естественным образом.

Блок, не закрытый до конца ввода, закрывается неявно.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Tuple, TypeVar

from .lexer import TemplateLexer
from .nodes import ForNode, IfNode, TemplateAST, TemplateNode, TextNode, count_nodes
from .tags import (
    KW_ELIF,
    KW_ELSE,
    KW_ENDFOR,
    KW_ENDIF,
    KW_FOR,
    KW_IF,
    block_keyword,
    parse_elif_tag,
    parse_else_tag,
    parse_end_tag,
    parse_for_tag,
    parse_if_tag,
    parse_value_tag,
)
from .tokens import Token, TokenType
from ..errors import ExpressionSyntaxError, InvalidTagError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Директивы, которые завершают тело блока соответствующего вида
_TERMINATORS = {
    KW_IF: (KW_ELIF, KW_ELSE, KW_ENDIF),
    KW_FOR: (KW_ENDFOR,),
}


class TemplateParser:
    """
    Парсер шаблонов.

    Один экземпляр разбирает один текст; для нового текста создаётся новый парсер.
    """

    def __init__(self, text: str):
        self.lexer = TemplateLexer(text)

    def parse(self) -> TemplateAST:
        """
        Разбирает весь шаблон в AST.

        Raises:
            InvalidTagError: Некорректный тег или непарная директива
            ExpressionSyntaxError: Нарушена грамматика for … as …
        """
        nodes, _ = self._parse_body(None)
        logger.debug(f"Parsed template into {count_nodes(nodes)} nodes")
        return nodes

    def _parse_body(self, block: Optional[str]) -> Tuple[List[TemplateNode], Optional[Token]]:
        """
        Разбирает последовательность узлов до завершающей директивы.

        Args:
            block: Вид охватывающего блока (KW_IF, KW_FOR) или None для верхнего уровня

        Returns:
            (узлы, завершающий токен или None при конце ввода)
        """
        nodes: List[TemplateNode] = []

        while True:
            token = self.lexer.next_token()

            if token.type is TokenType.EOF:
                if block is not None:
                    logger.debug(f"Unclosed '{block}' block closed at end of input")
                return nodes, None

            if token.type is TokenType.TEXT:
                nodes.append(TextNode(token.value))
                continue

            if token.type is TokenType.VALUE_TAG:
                nodes.append(self._at(token, parse_value_tag))
                continue

            keyword = self._at(token, block_keyword)

            if keyword == KW_IF:
                nodes.append(self._parse_if(token))
            elif keyword == KW_FOR:
                nodes.append(self._parse_for(token))
            elif block is not None and keyword in _TERMINATORS[block]:
                return nodes, token
            else:
                raise InvalidTagError(f"{self._unexpected(keyword)} at {token.line}:{token.column}")

    def _parse_if(self, token: Token) -> IfNode:
        node = self._at(token, parse_if_tag)
        children, terminator = self._parse_body(KW_IF)
        seen_else = False

        while terminator is not None:
            keyword = block_keyword(terminator.value)
            if keyword == KW_ENDIF:
                self._at(terminator, parse_end_tag, KW_ENDIF)
                break

            if seen_else:
                problem = "Multiple else blocks" if keyword == KW_ELSE else "Elif after else"
                raise InvalidTagError(
                    f"{problem} in 'if {node.condition}' at {terminator.line}:{terminator.column}"
                )

            if keyword == KW_ELIF:
                branch = self._at(terminator, parse_elif_tag)
            else:
                branch = self._at(terminator, parse_else_tag)
                seen_else = True

            body, terminator = self._parse_body(KW_IF)
            children.append(replace(branch, children=body))

        return replace(node, children=children)

    def _parse_for(self, token: Token) -> ForNode:
        node = self._at(token, parse_for_tag)
        children, terminator = self._parse_body(KW_FOR)
        if terminator is not None:
            self._at(terminator, parse_end_tag, KW_ENDFOR)
        return replace(node, children=children)

    @staticmethod
    def _unexpected(keyword: str) -> str:
        if keyword == KW_ELIF:
            return "Elif without if"
        if keyword == KW_ELSE:
            return "Else without if or elif"
        if keyword == KW_ENDIF:
            return "Endif without if"
        return "Endfor without for"

    @staticmethod
    def _at(token: Token, func: Callable[..., T], *args) -> T:
        """Вызывает парсер тега, дополняя ошибку позицией токена."""
        try:
            return func(token.value, *args)
        except (InvalidTagError, ExpressionSyntaxError) as e:
            raise type(e)(f"{e} at {token.line}:{token.column}") from e


def parse_template(text: str) -> TemplateAST:
    """Удобная функция для разбора шаблона в AST."""
    return TemplateParser(text).parse()


__all__ = ["TemplateParser", "parse_template"]
