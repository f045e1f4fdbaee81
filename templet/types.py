from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple, Union


# ---------------------------- Модель данных ---------------------------- #

@dataclass(frozen=True)
class ScalarValue:
    """Листовое значение — строка."""
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListValue:
    """Упорядоченная последовательность значений, индексация с нуля."""
    items: Tuple["Value", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def get(self, index: int) -> "Value | None":
        """Элемент по индексу или None, если индекс вне диапазона."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


@dataclass(frozen=True)
class MapValue:
    """
    Отображение имя → значение.

    Содержимое оборачивается в read-only прокси: после конструирования
    значение не меняется, новые данные — только через новый MapValue.
    """
    items: Mapping[str, "Value"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def get(self, name: str) -> "Value | None":
        return self.items.get(name)


# Замкнутый вариант значения
Value = Union[ScalarValue, ListValue, MapValue]


def value_kind(value: Value) -> str:
    """Короткое имя варианта значения для сообщений об ошибках."""
    if isinstance(value, ScalarValue):
        return "scalar"
    if isinstance(value, ListValue):
        return "list"
    return "map"


# ---------------------------- Опции запуска ---------------------------- #

@dataclass(frozen=True)
class RenderOptions:
    """
    Настройки рендеринга.

    strict:   отсутствующее значение в {$ … } — ошибка, а не пустая строка
    encoding: кодировка файлов шаблонов, данных и результата
    """
    strict: bool = False
    encoding: str = "utf-8"


__all__ = [
    "ScalarValue",
    "ListValue",
    "MapValue",
    "Value",
    "value_kind",
    "RenderOptions",
]
