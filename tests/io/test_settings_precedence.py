from __future__ import annotations

from pathlib import Path

import pytest

from mmappet.core.errors import MmappetConfigError
from mmappet.io.config import MmappetSettings

_ENV_KEYS = [
    "MMAPPET_HEAD_ROWS",
    "MMAPPET_PLOT_ROWS",
    "MMAPPET_PLOT_WIDTH",
    "MMAPPET_FLOAT_PRECISION",
    "MMAPPET_LOG_LEVEL",
    "MMAPPET_LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_any_source(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = MmappetSettings.load()

    assert s == MmappetSettings()
    assert (s.head_rows, s.plot_rows, s.plot_width, s.float_precision) == (10, 30, 60, 6)


def test_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "mmappet.toml").write_text(
        """
        [cli]
        head_rows = 3
        plot_width = 20
        log_format = "json"
        """.strip()
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MMAPPET_HEAD_ROWS", "7")
    monkeypatch.setenv("MMAPPET_LOG_LEVEL", "debug")

    s = MmappetSettings.load()

    assert s.head_rows == 7  # env override
    assert s.plot_width == 20  # from TOML
    assert s.log_format == "json"
    assert s.log_level == "DEBUG"


def test_top_level_keys_in_mmappet_toml(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "mmappet.toml").write_text("float_precision = 2\n")
    monkeypatch.chdir(tmp_path)

    assert MmappetSettings.from_toml().float_precision == 2


def test_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.mmappet]\nplot_rows = 5\n")
    monkeypatch.chdir(tmp_path)

    assert MmappetSettings.load().plot_rows == 5


def test_explicit_path_wins_over_search(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "mmappet.toml").write_text("head_rows = 1\n")
    other = tmp_path / "other.toml"
    other.write_text("[cli]\nhead_rows = 4\n")
    monkeypatch.chdir(tmp_path)

    assert MmappetSettings.load(other).head_rows == 4


def test_invalid_loose_values_are_ignored(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MMAPPET_HEAD_ROWS", "many")
    monkeypatch.setenv("MMAPPET_PLOT_WIDTH", "0")
    monkeypatch.setenv("MMAPPET_LOG_LEVEL", "chatty")
    monkeypatch.setenv("MMAPPET_LOG_FORMAT", "xml")

    assert MmappetSettings.load() == MmappetSettings()


def test_unreadable_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "mmappet.toml").write_text("head_rows = = 3\n")
    monkeypatch.chdir(tmp_path)

    assert MmappetSettings.load() == MmappetSettings()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"head_rows": -1},
        {"plot_rows": -1},
        {"plot_width": 0},
        {"float_precision": -2},
        {"log_format": "xml"},
        {"log_level": "LOUD"},
    ],
)
def test_explicit_construction_validates(kwargs: dict) -> None:
    with pytest.raises(MmappetConfigError):
        MmappetSettings(**kwargs)


def test_explicit_missing_path_does_not_fall_back_to_search(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "mmappet.toml").write_text("head_rows = 2\n")
    monkeypatch.chdir(tmp_path)

    assert MmappetSettings.from_toml(tmp_path / "absent.toml") == MmappetSettings()
