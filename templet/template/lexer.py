"""
Лексический анализатор шаблонов.

Двигает курсор по исходному тексту монотонно вперёд и на каждом шаге
выдаёт либо участок текста до ближайшей '{', либо весь тег от '{'
до ближайшей '}' включительно. Тип тега определяется по первому символу
после '{':

- '$'  — тег значения {$ name }
- '%'  — тег-директива {% keyword … %}
- '\\' — экранированный тег: выводится как текст без обратного слеша
- иное — InvalidTagError

Открывающая '{' без закрывающей '}' до конца ввода — это обычный текст.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from .tokens import Token, TokenType
from ..errors import InvalidTagError, describe_tag

logger = logging.getLogger(__name__)

TAG_OPEN = "{"
TAG_CLOSE = "}"
ESCAPE = "\\"


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Хранит только курсор (position) поверх неизменяемой строки,
    поэтому тексты и теги вырезаются срезами без переаллокаций
    оставшейся части ввода.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Последним всегда идёт EOF.
        """
        tokens = list(self)
        tokens.append(self.next_token())
        return tokens

    def __iter__(self) -> Iterator[Token]:
        """Итерирует токены до EOF (не включая его)."""
        while True:
            token = self.next_token()
            if token.type is TokenType.EOF:
                return
            yield token

    @property
    def exhausted(self) -> bool:
        return self.position >= self.length

    def next_token(self) -> Token:
        """
        Извлекает следующий токен из входного потока.

        Raises:
            InvalidTagError: Тег с неизвестным открывающим символом
        """
        if self.exhausted:
            return self._make(TokenType.EOF, "")

        start = self.position
        open_pos = self.text.find(TAG_OPEN, start)

        # Тегов больше нет, весь остаток это текст
        if open_pos == -1:
            return self._take(TokenType.TEXT, self.length)

        # Сначала отдаём текст перед тегом
        if open_pos > start:
            return self._take(TokenType.TEXT, open_pos)

        close_pos = self.text.find(TAG_CLOSE, start + 1)
        if close_pos == -1:
            # Незакрытый тег: остаток выводится как есть
            logger.debug(f"Unterminated tag at {self.line}:{self.column}, emitting rest as text")
            return self._take(TokenType.TEXT, self.length)

        tag = self.text[start:close_pos + 1]
        marker = tag[1]

        if marker == "$":
            return self._take(TokenType.VALUE_TAG, close_pos + 1)

        if marker == "%":
            return self._take(TokenType.BLOCK_TAG, close_pos + 1)

        if marker == ESCAPE:
            # {\x} -> {x}: убираем ровно один обратный слеш
            token = self._take(TokenType.TEXT, close_pos + 1)
            return Token(token.type, TAG_OPEN + tag[2:], token.position, token.line, token.column)

        raise InvalidTagError(
            f"Unrecognized tag {describe_tag(tag, self.line, self.column)}: "
            f"tags must start with {{$ or {{%"
        )

    def _make(self, token_type: TokenType, value: str) -> Token:
        return Token(token_type, value, self.position, self.line, self.column)

    def _take(self, token_type: TokenType, end: int) -> Token:
        """Вырезает text[position:end] в токен и сдвигает курсор."""
        token = self._make(token_type, self.text[self.position:end])
        self._advance(end)
        return token

    def _advance(self, end: int) -> None:
        """
        Перемещает курсор в позицию end.

        Обновляет номера строк и колонок для корректного отслеживания позиции.
        """
        newlines = self.text.count("\n", self.position, end)
        if newlines:
            self.line += newlines
            self.column = end - self.text.rfind("\n", self.position, end)
        else:
            self.column += end - self.position
        self.position = end


def tokenize_template(text: str) -> List[Token]:
    """Удобная функция для токенизации шаблона."""
    return TemplateLexer(text).tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
