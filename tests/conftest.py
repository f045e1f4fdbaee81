import os
import subprocess
import sys
from pathlib import Path

import pytest

from templet.data import make_data

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи

    Returns:
        Путь к созданному файлу
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.pop("TEMPLET_DEBUG", None)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "templet.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


@pytest.fixture
def env():
    """Фабрика окружения: обычный dict Python превращается в MapValue."""
    def _make(**values):
        return make_data(values)
    return _make


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Минимальный проект: шаблон, два файла данных и конфиг."""
    root = tmp_path
    write(root / "hello.tpl", "Hello, {$first_name} {$last_name}!\n")
    write(
        root / "users.tpl",
        "{% for users as user %}- {$ user.name }{% if user.admin %} (admin){% endif %}\n{% endfor %}",
    )
    write(
        root / "base.yaml",
        "first_name: John\n"
        "last_name: Doe\n"
        "users:\n"
        "  - name: alice\n"
        "    admin: true\n"
        "  - name: bob\n",
    )
    write(root / "override.json", '{"last_name": "Roe"}\n')
    return root
