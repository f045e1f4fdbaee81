"""
Окружение вычисления.

Scope — неизменяемая цепочка привязок: корень оборачивает отображение,
переданное пользователем, а каждая итерация цикла добавляет поверх
одну привязку alias → элемент. Родительские привязки не копируются
и никогда не меняются.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterator, Optional

from ..types import MapValue, Value


class Scope(Mapping):
    """Слой привязок с откатом к родительскому слою."""

    __slots__ = ("_bindings", "_parent")

    def __init__(self, bindings: Mapping, parent: Optional["Scope"] = None):
        self._bindings = bindings
        self._parent = parent

    @classmethod
    def root(cls, environment: MapValue) -> "Scope":
        """Корневой слой поверх пользовательского окружения."""
        return cls(environment.items)

    def bind(self, name: str, value: Value) -> "Scope":
        """Возвращает новый слой с одной дополнительной привязкой."""
        return Scope({name: value}, self)

    @property
    def parent(self) -> Optional["Scope"]:
        return self._parent

    def __getitem__(self, name: str) -> Value:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._bindings:
                return scope._bindings[name]
            scope = scope._parent
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope._bindings:
                return True
            scope = scope._parent
        return False

    def __iter__(self) -> Iterator[str]:
        seen = set()
        scope: Optional[Scope] = self
        while scope is not None:
            for name in scope._bindings:
                if name not in seen:
                    seen.add(name)
                    yield name
            scope = scope._parent

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Scope({list(self)!r})"


__all__ = ["Scope"]
