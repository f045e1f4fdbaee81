"""
Процессор шаблонов.

Публичный API, объединяющий лексер, парсер и вычислитель:
шаблон разбирается один раз, после чего AST вычисляется
с любым числом разных окружений.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from .evaluator import TemplateEvaluator
from .nodes import TemplateAST
from .parser import parse_template
from .resolver import PathResolver
from ..data import make_map
from ..io import read_template, write_result
from ..types import MapValue, RenderOptions

logger = logging.getLogger(__name__)

Environment = Union[MapValue, Mapping]


def as_environment(environment: Optional[Environment]) -> MapValue:
    """Приводит окружение к MapValue; None — пустое окружение."""
    if environment is None:
        return MapValue({})
    if isinstance(environment, MapValue):
        return environment
    return make_map(environment)


class Template:
    """
    Шаблон с кэшированным AST.

    Пример:
        tpl = Template("Hello, {$first_name} {$last_name}!")
        tpl.render({"first_name": "John", "last_name": "Doe"})  # "Hello, John Doe!"
    """

    def __init__(self, text: str = "", resolver: Optional[PathResolver] = None):
        self._text = text
        self._ast: Optional[TemplateAST] = None
        self._result = ""
        self._resolver = resolver or PathResolver()

    @classmethod
    def from_file(cls, path: Path, encoding: str = "utf-8") -> "Template":
        """Создаёт шаблон из файла."""
        return cls(read_template(path, encoding))

    @property
    def text(self) -> str:
        return self._text

    @property
    def ast(self) -> TemplateAST:
        """
        AST шаблона; разбирается при первом обращении.

        Raises:
            InvalidTagError, ExpressionSyntaxError: При ошибке разбора
        """
        if self._ast is None:
            self._ast = parse_template(self._text)
        return self._ast

    @property
    def result(self) -> str:
        """Результат последнего успешного рендеринга."""
        return self._result

    def set_template(self, text: str) -> None:
        """Заменяет текст шаблона и сбрасывает кэш AST и результат."""
        self._text = text
        self._ast = None
        self._result = ""

    def set_template_from_file(self, path: Path, encoding: str = "utf-8") -> None:
        """
        Заменяет текст шаблона содержимым файла.

        При ошибке чтения прежний шаблон и результат сохраняются.
        """
        text = read_template(path, encoding)
        self.set_template(text)

    def render(self, environment: Optional[Environment] = None, options: Optional[RenderOptions] = None) -> str:
        """
        Рендерит шаблон в окружении.

        Args:
            environment: MapValue или обычное отображение Python-значений
            options: Настройки рендеринга

        Returns:
            Полностью отрендеренный текст

        Raises:
            InvalidTagError, MissingTagError, ExpressionSyntaxError: Рендеринг прерывается целиком
        """
        self._result = ""
        evaluator = TemplateEvaluator(self._resolver, options)
        self._result = evaluator.evaluate(self.ast, as_environment(environment))
        logger.debug(f"Rendered template into {len(self._result)} characters")
        return self._result

    def save(self, path: Path, encoding: str = "utf-8") -> None:
        """Записывает результат последнего рендеринга в файл (с перезаписью)."""
        write_result(path, self._result, encoding)


def render(template_text: str, environment: Optional[Environment] = None, options: Optional[RenderOptions] = None) -> str:
    """
    Удобная функция: разобрать и отрендерить шаблон за один вызов.

    Args:
        template_text: Текст шаблона
        environment: Окружение (MapValue или отображение)
        options: Настройки рендеринга

    Returns:
        Отрендеренный текст
    """
    ast = parse_template(template_text)
    return TemplateEvaluator(options=options).evaluate(ast, as_environment(environment))


def render_file(path: Path, environment: Optional[Environment] = None, options: Optional[RenderOptions] = None) -> str:
    """Рендерит шаблон из файла с учётом кодировки из options."""
    opts = options or RenderOptions()
    return render(read_template(path, opts.encoding), environment, opts)


__all__ = ["Template", "render", "render_file", "as_environment", "Environment"]
