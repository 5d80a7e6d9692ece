"""
Runtime settings for the mmappet CLI.

MmappetSettings holds the knobs of the presentation layer (row counts, plot width,
float precision) and of logging. Its defaults live in mmappet.core.constants.

Precedence
- environment (MMAPPET_*) > TOML (./mmappet.toml or [tool.mmappet] in ./pyproject.toml) > defaults.

Notes
- The on-disk dataset layout is fixed; nothing here changes how datasets are read.
- Explicit construction validates values (MmappetConfigError); the loose env/TOML loaders
  skip entries that do not parse and keep the previous value.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from mmappet.core.constants import FLOAT_PRECISION as CORE_FLOAT_PRECISION
from mmappet.core.constants import HEAD_ROWS as CORE_HEAD_ROWS
from mmappet.core.constants import LOG_FORMAT as CORE_LOG_FORMAT
from mmappet.core.constants import LOG_LEVEL as CORE_LOG_LEVEL
from mmappet.core.constants import PLOT_ROWS as CORE_PLOT_ROWS
from mmappet.core.constants import PLOT_WIDTH as CORE_PLOT_WIDTH
from mmappet.core.errors import MmappetConfigError
from mmappet.core.logging_config import resolve_level

LogFormat = Literal["console", "json"]

_INT_FIELDS = ("head_rows", "plot_rows", "plot_width", "float_precision")


@dataclass(frozen=True)
class MmappetSettings:
    """
    Runtime settings for mmappet.

    Attributes:
        head_rows (int): Default row count for ``mmappet head`` (>= 0).
        plot_rows (int): Default row count for ``mmappet plot`` (>= 0).
        plot_width (int): Bar width in characters for ``mmappet plot`` (>= 1).
        float_precision (int): Digits after the decimal point when printing floats (>= 0).
        log_level (str): Minimum structlog level ("DEBUG", "INFO", "WARNING", ...).
        log_format (Literal["console","json"]): structlog renderer.

    Examples:
        >>> from mmappet.io.config import MmappetSettings
        >>> MmappetSettings(head_rows=5).head_rows
        5
    """

    head_rows: int = CORE_HEAD_ROWS
    plot_rows: int = CORE_PLOT_ROWS
    plot_width: int = CORE_PLOT_WIDTH
    float_precision: int = CORE_FLOAT_PRECISION
    log_level: str = CORE_LOG_LEVEL
    log_format: LogFormat = CORE_LOG_FORMAT  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.head_rows < 0:
            raise MmappetConfigError("head_rows must be >= 0")
        if self.plot_rows < 0:
            raise MmappetConfigError("plot_rows must be >= 0")
        if self.plot_width < 1:
            raise MmappetConfigError("plot_width must be >= 1")
        if self.float_precision < 0:
            raise MmappetConfigError("float_precision must be >= 0")
        if self.log_format not in ("console", "json"):
            raise MmappetConfigError(f"log_format must be 'console' or 'json', got {self.log_format!r}")
        resolve_level(self.log_level)

    @classmethod
    def _apply_mapping(cls, base: MmappetSettings, cfg: dict[str, Any] | None) -> MmappetSettings:
        """Overlay recognised keys from ``cfg`` on ``base``; keys that fail validation keep base."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for name in _INT_FIELDS:
            if name not in cfg:
                continue
            try:
                s = replace(s, **{name: int(cfg[name])})
            except (TypeError, ValueError):
                pass

        if "log_level" in cfg and isinstance(cfg["log_level"], str):
            try:
                s = replace(s, log_level=cfg["log_level"].strip().upper())
            except MmappetConfigError:
                pass

        if "log_format" in cfg and isinstance(cfg["log_format"], str):
            fmt = cfg["log_format"].strip().lower()
            if fmt in ("console", "json"):
                s = replace(s, log_format=fmt)  # type: ignore[arg-type]

        return s

    @classmethod
    def from_env(
        cls, base: MmappetSettings | None = None, prefix: str = "MMAPPET_"
    ) -> MmappetSettings:
        """
        Read ``<prefix><FIELD>`` variables on top of ``base`` (defaults when omitted).

        Empty variables count as unset. With the default prefix the names are
        MMAPPET_HEAD_ROWS, MMAPPET_PLOT_ROWS, MMAPPET_PLOT_WIDTH, MMAPPET_FLOAT_PRECISION,
        MMAPPET_LOG_LEVEL and MMAPPET_LOG_FORMAT.
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name in (*_INT_FIELDS, "log_level", "log_format"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> MmappetSettings:
        """
        Read settings from TOML.

        An explicit ``path`` is the only file consulted. Otherwise the current directory
        is searched: ``mmappet.toml`` first (keys under ``[cli]`` or at the top level),
        then the ``[tool.mmappet]`` table of ``pyproject.toml``. The first file that
        yields a non-empty table wins; missing or malformed files are skipped.
        """
        if path is not None:
            candidates = [Path(path)]
        else:
            candidates = [Path.cwd() / "mmappet.toml", Path.cwd() / "pyproject.toml"]

        cfg: dict[str, Any] | None = None
        for candidate in candidates:
            data = _read_toml(candidate)
            if data is None:
                continue
            if candidate.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("mmappet") if isinstance(tool, dict) else None
            elif isinstance(data.get("cli"), dict):
                cfg = data["cli"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(cls(), cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> MmappetSettings:
        """
        Settings as the CLI sees them: TOML over defaults, then MMAPPET_* variables on top.

        Args:
            path: TOML file to use instead of searching the current directory.
        """
        return cls.from_env(base=cls.from_toml(path))


def _read_toml(path: Path) -> dict[str, Any] | None:
    if not path.is_file():
        return None
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError):
        return None
