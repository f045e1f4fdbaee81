"""
Базовые исключения шаблонизатора.

Все ожидаемые ошибки, которые нужно показывать пользователю в виде
чистого сообщения (без трейсбека), наследуются от TempletError.

Ошибки программирования и баги НЕ должны наследоваться от TempletError —
они пробрасываются с полным трейсбеком.
"""

from __future__ import annotations


class TempletError(Exception):
    """
    Базовый класс для всех пользовательских ошибок шаблонизатора.

    Сигнализирует о проблемах, которые пользователь может исправить:
    некорректный тег, отсутствующее значение, битый файл данных и т.п.
    """
    pass


class InvalidTagError(TempletError):
    """
    Некорректный тег: синтаксис, недопустимые символы имени,
    неподходящий тип значения, коллизия алиаса, elif/else вне if.
    """
    pass


class MissingTagError(TempletError):
    """Имя, на которое ссылается тег, отсутствует там, где это фатально."""
    pass


class ExpressionSyntaxError(TempletError):
    """Структурная ошибка выражения в теге-директиве (грамматика for … as …)."""
    pass


class DataLoadError(TempletError, ValueError):
    """Ошибка построения или загрузки данных для рендеринга."""
    pass


class ConfigLoadError(TempletError, ValueError):
    """Ошибка загрузки конфигурации с указанием проблемного ключа."""
    pass


def describe_tag(tag: str, line: int = 0, column: int = 0) -> str:
    """Формирует человекочитаемую ссылку на тег для сообщений об ошибках."""
    if line:
        return f"'{tag}' at {line}:{column}"
    return f"'{tag}'"


__all__ = [
    "TempletError",
    "InvalidTagError",
    "MissingTagError",
    "ExpressionSyntaxError",
    "DataLoadError",
    "ConfigLoadError",
    "describe_tag",
]
