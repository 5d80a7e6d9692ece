"""
mmappet command-line tool for inspecting datasets.

Subcommands
- info PATH [--json]                 schema and row count
- head PATH [-n N] [-c a,b]          first N rows, tab-separated
- stats PATH                         min/max/mean per numeric column
- plot PATH [-n N] [-c COL] [-w W]   ASCII bar plot of the first N values of one column

Every mmappet error is printed as ``error: <message>`` on stderr with exit status 1.
Defaults come from MmappetSettings.load() (env > TOML > defaults).
"""

from __future__ import annotations

import argparse
import math
import sys
from collections.abc import Callable
from typing import TextIO

import numpy as np

from mmappet.core.errors import MmappetError
from mmappet.core.logging_config import configure_logging, get_logger
from mmappet.io.column import TypedArrayView
from mmappet.io.config import MmappetSettings
from mmappet.io.dataset import Dataset

logger = get_logger(__name__)

_BAR = "█"
_SEP = "│"


def _cmd_info(args: argparse.Namespace, settings: MmappetSettings, out: TextIO) -> int:
    ds = Dataset.open(args.path)

    if args.json:
        out.write(ds.describe().model_dump_json(indent=2) + "\n")
        return 0

    print(f"Dataset: {args.path}", file=out)
    print(f"Rows: {len(ds)}", file=out)
    print(f"Columns: {ds.num_columns}", file=out)
    print(file=out)
    print("Schema:", file=out)
    for col_def in ds.schema:
        print(f"  {col_def.index:>2}. {col_def.name} ({col_def.dtype})", file=out)
    return 0


def _parse_columns(raw: str | None, ds: Dataset) -> list[str]:
    if raw is None:
        return ds.column_names()
    return [name.strip() for name in raw.split(",") if name.strip()]


def _cmd_head(args: argparse.Namespace, settings: MmappetSettings, out: TextIO) -> int:
    ds = Dataset.open(args.path)
    n = settings.head_rows if args.n is None else args.n
    names = _parse_columns(args.columns, ds)
    views = [ds[name].as_typed_array() for name in names]
    n = min(n, len(ds))

    print("\t".join(names), file=out)
    for row in range(n):
        cells = [v.format_value(row, settings.float_precision) for v in views]
        print("\t".join(cells), file=out)
    return 0


def _value_range(values: np.ndarray) -> tuple[float, float]:
    """Min and max skipping NaN; (nan, nan) when every value is NaN."""
    present = values[~np.isnan(values)]
    if present.size == 0:
        return float("nan"), float("nan")
    return float(present.min()), float(present.max())


def _format_stats(view: TypedArrayView, precision: int) -> str:
    if not (view.dtype.is_integer or view.dtype.is_float):
        return " (stats not available for this type)"
    if view.is_empty:
        return " (empty)"
    arr = view.array
    if view.dtype.is_integer:
        return f" min={int(arr.min())}, max={int(arr.max())}, mean={float(arr.mean()):.2f}"
    lo, hi = _value_range(arr)
    return (
        f" min={lo:.{precision}f}, max={hi:.{precision}f}, "
        f"mean={float(arr.mean(dtype=np.float64)):.{precision}f}"
    )


def _cmd_stats(args: argparse.Namespace, settings: MmappetSettings, out: TextIO) -> int:
    ds = Dataset.open(args.path)

    print(f"Dataset: {args.path}", file=out)
    print(f"Rows: {len(ds)}", file=out)
    print(file=out)

    for name, column in ds.items():
        line = _format_stats(column.as_typed_array(), settings.float_precision)
        print(f"{name} ({column.dtype}):{line}", file=out)
    return 0


def _bar_length(value: float, lo: float, hi: float, width: int) -> int:
    """
    Bar length for one value scaled onto [lo, hi].

    A zero or undefined span draws half-width bars. NaN draws nothing and the
    maximum (including +inf) draws a full bar; finite values inside an infinite
    span have no defined position and draw nothing.
    """
    span = hi - lo
    if not span > 0:
        return width // 2
    if math.isnan(value):
        return 0
    if value >= hi:
        return width
    ratio = (value - lo) / span
    if not math.isfinite(ratio):
        return 0
    return int(round(ratio * width))


def _cmd_plot(args: argparse.Namespace, settings: MmappetSettings, out: TextIO) -> int:
    ds = Dataset.open(args.path)

    if args.column is not None:
        name = args.column
    elif ds.num_columns:
        name = ds.column_names()[0]
    else:
        raise MmappetError("dataset has no columns")

    column = ds[name]
    n = min(settings.plot_rows if args.n is None else args.n, len(ds))
    width = settings.plot_width if args.width is None else args.width

    # Plotting works on a small float64 copy of the leading rows only.
    values = column.as_typed_array().array[:n].astype(np.float64)
    if values.size == 0:
        print("No data to plot", file=out)
        return 0

    lo, hi = _value_range(values)

    print(f"Column: {name} ({column.dtype})  Rows: 0..{n}", file=out)
    print(f"Range: [{lo:.4f}, {hi:.4f}]", file=out)
    print(file=out)

    idx_width = len(str(n - 1))
    for i, value in enumerate(values.tolist()):
        bar_len = _bar_length(value, lo, hi, width)
        print(f"{i:>{idx_width}} {_SEP} {value:>12.4f} {_SEP}{_BAR * bar_len}", file=out)
    return 0


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return value


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mmappet", description="Inspect mmappet datasets.")
    p.add_argument(
        "--config", default=None, help="TOML settings file (default: mmappet.toml / pyproject.toml)."
    )
    p.add_argument("--log-level", default=None, help="Override the configured log level.")
    sub = p.add_subparsers(dest="cmd", required=True)

    info = sub.add_parser("info", help="Show dataset info (schema, row count).")
    info.add_argument("path", help="Path to the mmappet dataset directory.")
    info.add_argument("--json", action="store_true", help="Emit a JSON summary.")
    info.set_defaults(func=_cmd_info)

    head = sub.add_parser("head", help="Print the first N rows of selected columns.")
    head.add_argument("path", help="Path to the mmappet dataset directory.")
    head.add_argument("-n", type=_non_negative_int, default=None, help="Number of rows to show.")
    head.add_argument("-c", "--columns", default=None, help="Comma-separated columns (default: all).")
    head.set_defaults(func=_cmd_head)

    stats = sub.add_parser("stats", help="Show statistics for numeric columns.")
    stats.add_argument("path", help="Path to the mmappet dataset directory.")
    stats.set_defaults(func=_cmd_stats)

    plot = sub.add_parser("plot", help="Plot column values as ASCII bars.")
    plot.add_argument("path", help="Path to the mmappet dataset directory.")
    plot.add_argument("-n", type=_non_negative_int, default=None, help="Number of rows to show.")
    plot.add_argument("-c", "--column", default=None, help="Column to plot (default: first column).")
    plot.add_argument("-w", "--width", type=_positive_int, default=None, help="Bar width in characters.")
    plot.set_defaults(func=_cmd_plot)
    return p


def main(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    """Console entrypoint; returns the process exit status."""
    args = build_argparser().parse_args(sys.argv[1:] if argv is None else argv)
    out = sys.stdout if out is None else out

    try:
        settings = MmappetSettings.load(args.config)
        configure_logging(args.log_level or settings.log_level, settings.log_format)
        handler: Callable[[argparse.Namespace, MmappetSettings, TextIO], int] = args.func
        return handler(args, settings, out)
    except MmappetError as exc:
        logger.debug("command_failed", cmd=args.cmd, error=type(exc).__name__)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
