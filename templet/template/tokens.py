"""
Лексические типы.

Лексер выдаёт поток крупных токенов: участок обычного текста
или целиком вырезанный тег от '{' до ближайшей '}'.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""
    TEXT = "TEXT"              # обычный текст, экранированные и незакрытые теги
    VALUE_TAG = "VALUE_TAG"    # {$ name }
    BLOCK_TAG = "BLOCK_TAG"    # {% keyword … %}
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "Token"]
