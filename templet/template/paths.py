"""
Грамматика имён и путей.

path     → segment ("." segment)*
segment  → IDENT ("[" DIGITS "]")*
IDENT    → [A-Za-z0-9_-]+
DIGITS   → [0-9]+            (без знака, ведущие нули допустимы)
alias    → IDENT             (без точек и индексов)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from ..errors import InvalidTagError

_IDENT = r"[A-Za-z0-9_-]+"
_SEGMENT_RE = re.compile(rf"({_IDENT})((?:\[[0-9]+\])*)")
_INDEX_RE = re.compile(r"\[([0-9]+)\]")
_ALIAS_RE = re.compile(_IDENT)


@dataclass(frozen=True)
class PathSegment:
    """Сегмент пути: имя и (возможно пустая) цепочка индексов."""
    name: str
    indices: Tuple[int, ...] = ()

    def __str__(self) -> str:
        return self.name + "".join(f"[{i}]" for i in self.indices)


PathExpr = Tuple[PathSegment, ...]


@lru_cache(maxsize=1024)
def parse_path(expr: str) -> PathExpr:
    """
    Разбирает выражение пути на сегменты.

    Args:
        expr: Строка вида config.servers[0].hostname

    Returns:
        Кортеж сегментов

    Raises:
        InvalidTagError: При пустом имени, лишних точках или неверных индексах
    """
    if not expr:
        raise InvalidTagError("Tag name must not be empty")

    segments = []
    for raw in expr.split("."):
        if not raw:
            raise InvalidTagError(
                f"Invalid dot notation in '{expr}': "
                f"names must not start or end with '.' or contain '..'"
            )
        segments.append(_parse_segment(raw, expr))
    return tuple(segments)


def _parse_segment(raw: str, expr: str) -> PathSegment:
    match = _SEGMENT_RE.fullmatch(raw)
    if match is None:
        if "[" in raw or "]" in raw:
            raise InvalidTagError(
                f"Invalid array index in '{expr}': "
                f"index must be a non-negative integer enclosed with []"
            )
        raise InvalidTagError(f"Invalid tag name '{expr}': name must only contain a-zA-Z0-9_-.")

    name, suffix = match.groups()
    indices = tuple(int(i) for i in _INDEX_RE.findall(suffix))
    return PathSegment(name, indices)


def validate_path(expr: str) -> str:
    """Проверяет выражение пути и возвращает его без изменений."""
    parse_path(expr)
    return expr


def validate_alias(name: str) -> str:
    """
    Проверяет имя алиаса цикла: только символы идентификатора.

    Raises:
        InvalidTagError: Если имя пустое, содержит точки, индексы или иные символы
    """
    if not _ALIAS_RE.fullmatch(name):
        raise InvalidTagError(f"Invalid alias name '{name}': alias must only contain a-zA-Z0-9_-")
    return name


__all__ = [
    "PathSegment",
    "PathExpr",
    "parse_path",
    "validate_path",
    "validate_alias",
]
