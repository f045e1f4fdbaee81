"""
Резолвер путей.

Проходит путь вида config.servers[1].hostname по вложенным
отображениям и спискам окружения.

Политика для путей чтения:
- отсутствующее имя на любом сегменте — «не найдено» (None);
- индекс за пределами списка или индекс по не-списку — «не найдено»;
- точечная нотация по найденному значению, которое не является
  отображением, — InvalidTagError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from .paths import parse_path
from ..errors import InvalidTagError, MissingTagError
from ..types import ListValue, MapValue, ScalarValue, Value, value_kind


class PathResolver:
    """
    Резолвер путей в окружении.

    Не хранит состояния между вызовами: один экземпляр можно
    использовать для любого числа окружений.
    """

    def resolve(self, path: str, environment: Mapping) -> Optional[Value]:
        """
        Разрешает путь в окружении.

        Args:
            path: Выражение пути
            environment: Корневое отображение имя → значение

        Returns:
            Найденное значение или None, если путь не найден

        Raises:
            InvalidTagError: Некорректный путь или точка после не-отображения
        """
        segments = parse_path(path)
        current: Mapping = environment
        last = len(segments) - 1

        for i, segment in enumerate(segments):
            value = current.get(segment.name)
            if value is None:
                return None

            for index in segment.indices:
                if not isinstance(value, ListValue):
                    return None
                value = value.get(index)
                if value is None:
                    return None

            if i == last:
                return value

            if not isinstance(value, MapValue):
                raise InvalidTagError(
                    f"Invalid tag name '{path}': dot notation only valid on maps, "
                    f"'{segment}' is a {value_kind(value)}"
                )
            current = value.items

        return None

    def is_bound(self, path: str, environment: Mapping) -> bool:
        """Истинность условия: путь разрешается (значение не важно)."""
        return self.resolve(path, environment) is not None

    def resolve_scalar(self, path: str, environment: Mapping) -> Optional[str]:
        """
        Разрешает путь в строку для вывода.

        Returns:
            Текст скаляра или None, если путь не найден

        Raises:
            InvalidTagError: Путь указывает на список или отображение
        """
        value = self.resolve(path, environment)
        if value is None:
            return None
        if not isinstance(value, ScalarValue):
            raise InvalidTagError(
                f"Invalid tag name '{path}': cannot print a {value_kind(value)}, "
                f"name must reference a scalar"
            )
        return value.text

    def resolve_list(self, path: str, environment: Mapping) -> ListValue:
        """
        Разрешает путь в список для цикла.

        Raises:
            MissingTagError: Путь не найден
            InvalidTagError: Путь указывает не на список
        """
        value = self.resolve(path, environment)
        if value is None:
            raise MissingTagError(f"Tag name '{path}' not found")
        if not isinstance(value, ListValue):
            raise InvalidTagError(
                f"Invalid tag name '{path}': name must reference a list, "
                f"got a {value_kind(value)}"
            )
        return value


__all__ = ["PathResolver"]
