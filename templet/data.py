"""
Построение значений для рендеринга.

Превращает обычные Python-объекты (строки, числа, списки, словари)
и файлы YAML/JSON в неизменяемые значения ScalarValue / ListValue / MapValue.
Гарантирует инварианты, на которые опирается резолвер:
списки сохраняют порядок, ключи отображений уникальны.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import DataLoadError
from .types import ListValue, MapValue, ScalarValue, Value

_yaml = YAML(typ="safe")


def make_data(obj: Any) -> Value:
    """
    Оборачивает Python-объект в значение шаблонизатора.

    Args:
        obj: Строка, число, bool, None, список/кортеж, отображение или готовое значение

    Returns:
        Соответствующее значение

    Raises:
        DataLoadError: Для неподдерживаемых типов и коллизий ключей
    """
    if isinstance(obj, (ScalarValue, ListValue, MapValue)):
        return obj
    if isinstance(obj, str):
        return ScalarValue(obj)
    # bool проверяем до int: bool является подклассом int
    if isinstance(obj, bool):
        return ScalarValue("true" if obj else "false")
    if isinstance(obj, (int, float)):
        return ScalarValue(str(obj))
    if obj is None:
        return ScalarValue("")
    # YAML-даты приходят как date/datetime
    if isinstance(obj, date):
        return ScalarValue(obj.isoformat())
    if isinstance(obj, (list, tuple)):
        return ListValue(tuple(make_data(item) for item in obj))
    if isinstance(obj, Mapping):
        return make_map(obj)

    raise DataLoadError(f"Unsupported data type: {type(obj).__name__}")


def make_map(obj: Mapping[Any, Any]) -> MapValue:
    """Строит MapValue, приводя ключи к строкам и проверяя их уникальность."""
    converted: Dict[str, Value] = {}
    for key, item in obj.items():
        name = str(key)
        if name in converted:
            raise DataLoadError(f"Duplicate key after conversion to string: '{name}'")
        converted[name] = make_data(item)
    return MapValue(converted)


def load_data(path: Path, encoding: str = "utf-8") -> MapValue:
    """
    Загрузить данные для рендеринга из YAML/JSON файла.

    • Корень документа обязан быть отображением.
    • Пустой файл — пустое окружение.
    """
    try:
        with path.open(encoding=encoding) as f:
            raw = _yaml.load(f)
    except YAMLError as e:
        raise DataLoadError(f"Failed to parse data file {path}: {e}") from e

    if raw is None:
        return MapValue({})
    if not isinstance(raw, Mapping):
        raise DataLoadError(
            f"Data file {path} must contain a mapping at the top level, "
            f"got {type(raw).__name__}"
        )
    return make_map(raw)


def merge_maps(*maps: MapValue) -> MapValue:
    """Объединяет отображения верхнего уровня; более поздние перекрывают ранние."""
    merged: Dict[str, Value] = {}
    for m in maps:
        merged.update(m.items)
    return MapValue(merged)


__all__ = ["make_data", "make_map", "load_data", "merge_maps"]
