from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import resolve_options
from .data import load_data, make_data, merge_maps
from .errors import TempletError
from .template import Template, count_nodes, format_ast_tree
from .types import MapValue, Value
from .version import tool_version

DEBUG_ENV = "TEMPLET_DEBUG"


def _setup_logging_once(verbose: bool = False) -> None:
    """Один обработчик на логгере пакета; уровень — из --verbose или TEMPLET_DEBUG."""
    log = logging.getLogger("templet")
    level = logging.DEBUG if verbose or os.environ.get(DEBUG_ENV) else logging.WARNING
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="templet",
        description="Text template engine: {$value}, {% if %}, {% for %}",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон с данными")
    sp_render.add_argument("template", help="путь к файлу шаблона")
    sp_render.add_argument(
        "--data",
        action="append",
        metavar="FILE",
        help="YAML/JSON файл с данными (можно указать несколько; поздние перекрывают ранние)",
    )
    sp_render.add_argument(
        "--set",
        action="append",
        dest="assign",
        metavar="NAME=VALUE",
        help="скалярное значение верхнего уровня (применяется последним)",
    )
    sp_render.add_argument("-o", "--output", metavar="OUT", help="файл результата (по умолчанию stdout)")
    sp_render.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="отсутствующее значение в {$ … } — ошибка",
    )
    sp_render.add_argument("--config", metavar="FILE", help="файл конфигурации (по умолчанию ./templet.yaml)")
    sp_render.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")

    sp_check = sub.add_parser("check", help="Только разбор шаблона (JSON)")
    sp_check.add_argument("template", help="путь к файлу шаблона")
    sp_check.add_argument("--tree", action="store_true", help="вывести дерево AST вместо JSON")
    sp_check.add_argument("--config", metavar="FILE", help="файл конфигурации (по умолчанию ./templet.yaml)")
    sp_check.add_argument("--verbose", action="store_true", help="отладочный вывод в stderr")

    return p


def _parse_assignments(items: Optional[List[str]]) -> Dict[str, Value]:
    """Парсит список NAME=VALUE в словарь скаляров."""
    result: Dict[str, Value] = {}
    if not items:
        return result

    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid --set format '{item}'. Expected 'NAME=VALUE'")
        name, value = item.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid --set format '{item}': empty name")
        result[name] = make_data(value)

    return result


def _environment(ns: argparse.Namespace, encoding: str) -> MapValue:
    maps = [load_data(Path(f), encoding) for f in ns.data or []]
    maps.append(MapValue(_parse_assignments(ns.assign)))
    return merge_maps(*maps)


def _config_path(ns: argparse.Namespace) -> Optional[Path]:
    return Path(ns.config) if ns.config else None


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging_once(bool(getattr(ns, "verbose", False)))

    try:
        if ns.cmd == "render":
            options = resolve_options(_config_path(ns), strict=ns.strict)
            template = Template.from_file(Path(ns.template), options.encoding)
            environment = _environment(ns, options.encoding)
            text = template.render(environment, options)
            if ns.output:
                template.save(Path(ns.output), options.encoding)
            else:
                sys.stdout.write(text)
            return 0

        if ns.cmd == "check":
            options = resolve_options(_config_path(ns))
            template = Template.from_file(Path(ns.template), options.encoding)
            ast = template.ast
            if ns.tree:
                tree = format_ast_tree(ast)
                sys.stdout.write(tree + "\n" if tree else "")
            else:
                sys.stdout.write(json.dumps({"ok": True, "nodes": count_nodes(ast)}, ensure_ascii=False))
            return 0

    except (TempletError, ValueError, OSError) as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
