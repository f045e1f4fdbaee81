"""
Чтение шаблонов и запись результатов.

Ошибки файловой системы (OSError) пробрасываются как есть:
CLI превращает их в понятное сообщение, библиотека — нет.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def read_template(path: Path, encoding: str = "utf-8") -> str:
    """Читает текст шаблона целиком."""
    path = Path(path)
    text = path.read_text(encoding=encoding)
    logger.debug(f"Read template {path} ({len(text)} characters)")
    return text


def write_result(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Записывает результат рендеринга, перезаписывая файл.

    Недостающие родительские каталоги создаются.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=encoding)
    logger.debug(f"Wrote result to {path} ({len(text)} characters)")


__all__ = ["read_template", "write_result"]
