from pathlib import Path

import pytest

from templet.config import DEFAULT_CFG_FILE, load_config, resolve_options
from templet.errors import ConfigLoadError
from templet.types import RenderOptions

from tests.conftest import write


def test_load_config_missing(tmp_path: Path):
    """Отсутствие файла конфига — дефолтные настройки."""
    assert load_config(tmp_path / DEFAULT_CFG_FILE) == RenderOptions()


def test_load_config_values(tmp_path: Path):
    path = write(tmp_path / "templet.yaml", "strict: true\nencoding: latin-1\n")
    assert load_config(path) == RenderOptions(strict=True, encoding="latin-1")


def test_load_config_partial(tmp_path: Path):
    """Пользовательские ключи накладываются поверх дефолтов."""
    path = write(tmp_path / "templet.yaml", "strict: true\n")
    assert load_config(path) == RenderOptions(strict=True, encoding="utf-8")


def test_load_config_empty(tmp_path: Path):
    assert load_config(write(tmp_path / "templet.yaml", "")) == RenderOptions()


def test_unknown_key(tmp_path: Path):
    path = write(tmp_path / "templet.yaml", "strcit: true\n")
    with pytest.raises(ConfigLoadError, match="unknown key 'strcit'"):
        load_config(path)


def test_wrong_type(tmp_path: Path):
    path = write(tmp_path / "templet.yaml", "strict: 'yes please'\n")
    with pytest.raises(ConfigLoadError, match="expects bool"):
        load_config(path)


def test_not_a_mapping(tmp_path: Path):
    path = write(tmp_path / "templet.yaml", "- strict\n")
    with pytest.raises(ConfigLoadError, match="mapping"):
        load_config(path)


def test_config_error_is_value_error(tmp_path: Path):
    path = write(tmp_path / "templet.yaml", "encoding: 8\n")
    with pytest.raises(ValueError):
        load_config(path)


class TestResolveOptions:
    def test_default_file_in_cwd(self, tmp_path: Path):
        write(tmp_path / DEFAULT_CFG_FILE, "strict: true\n")
        assert resolve_options(cwd=tmp_path).strict is True

    def test_no_file(self, tmp_path: Path):
        assert resolve_options(cwd=tmp_path) == RenderOptions()

    def test_strict_override(self, tmp_path: Path):
        path = write(tmp_path / "custom.yaml", "strict: false\nencoding: utf-16\n")
        options = resolve_options(path, strict=True)

        assert options == RenderOptions(strict=True, encoding="utf-16")

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigLoadError, match="not found"):
            resolve_options(tmp_path / "nope.yaml")
