from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigLoadError
from .types import RenderOptions

logger = logging.getLogger(__name__)

DEFAULT_CFG_FILE = "templet.yaml"

# --------------------------------------------------------------------------- #
# ДЕФОЛТЫ
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "strict": False,
    "encoding": "utf-8",
}

# Ожидаемый тип значения для каждого ключа
_KEY_TYPES: Dict[str, type] = {
    "strict": bool,
    "encoding": str,
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")

# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = _DEFAULT_CFG.copy()
    cfg.update(raw)
    return cfg


def _validate(raw: Dict[str, Any], path: Path) -> None:
    for key, value in raw.items():
        expected = _KEY_TYPES.get(key)
        if expected is None:
            allowed = ", ".join(sorted(_KEY_TYPES))
            raise ConfigLoadError(f"{path}: unknown key '{key}' (allowed: {allowed})")
        if not isinstance(value, expected):
            raise ConfigLoadError(
                f"{path}: key '{key}' expects {expected.__name__}, "
                f"got {type(value).__name__}"
            )


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path) -> RenderOptions:
    """
    Загрузить templet.yaml.

    • Если файла нет — вернуть дефолты.
    • Неизвестные ключи и значения неверного типа — ConfigLoadError.
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"Config {path} not found, using defaults")
        return RenderOptions(**_DEFAULT_CFG)

    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"{path}: failed to parse YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigLoadError(f"{path}: config must be a mapping, got {type(raw).__name__}")

    _validate(raw, path)
    cfg = _merge_defaults(raw)
    logger.debug(f"Loaded config {path}: {cfg}")
    return RenderOptions(**cfg)


def resolve_options(config_path: Optional[Path] = None, *, strict: Optional[bool] = None,
                    cwd: Optional[Path] = None) -> RenderOptions:
    """
    Итоговые настройки для запуска: файл конфигурации плюс переопределения.

    Args:
        config_path: Явный путь к конфигу; иначе templet.yaml в cwd
        strict: Переопределение strict (None — взять из конфига)
        cwd: Базовый каталог для поиска конфига по умолчанию
    """
    if config_path is None:
        config_path = (cwd or Path.cwd()) / DEFAULT_CFG_FILE
    elif not Path(config_path).exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    options = load_config(config_path)
    if strict is not None:
        options = RenderOptions(strict=strict, encoding=options.encoding)
    return options


__all__ = ["DEFAULT_CFG_FILE", "load_config", "resolve_options"]
