"""Command line interface for the Scientific Calculator plugin."""

from __future__ import annotations

import argparse
import json
import math
from typing import Any

from .core import (
    CalculatorSession,
    CalculatorSettings,
    ExpressionError,
    SamplingError,
    count_segments,
    evaluate,
    format_result,
    sample_curve,
    to_bases,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def _settings(args: argparse.Namespace) -> CalculatorSettings:
    return CalculatorSettings(
        angle_unit=getattr(args, "angle_unit", "deg"),
        precision=getattr(args, "precision", 8),
        thousands_sep=not getattr(args, "no_separators", False),
    )


def _fail(exc: ExpressionError) -> None:
    _print({"error": exc.to_dict()})
    raise SystemExit(1)


def command_eval(args: argparse.Namespace) -> None:
    settings = _settings(args)
    try:
        result = evaluate(args.expression, settings)
    except ExpressionError as exc:
        _fail(exc)
    _print(
        {
            "expression": args.expression,
            "result": result if math.isfinite(result) else None,
            "formatted": format_result(result, settings),
        }
    )


def command_format(args: argparse.Namespace) -> None:
    _print({"formatted": format_result(args.value, _settings(args))})


def command_plot(args: argparse.Namespace) -> None:
    try:
        curve = sample_curve(args.expression, (args.x_min, args.x_max), args.samples, _settings(args))
    except SamplingError as exc:
        raise SystemExit(str(exc)) from exc
    points = list(curve)
    _print(
        {
            "expression": args.expression,
            "samples": len(points),
            "segments": count_segments(points),
            "series": [[point.x, point.y] for point in points],
        }
    )


def command_bases(args: argparse.Namespace) -> None:
    try:
        value = evaluate(args.expression, _settings(args))
    except ExpressionError as exc:
        _fail(exc)
    _print({"value": value if math.isfinite(value) else None, "bases": to_bases(value)})


def command_keys(args: argparse.Namespace) -> None:
    session = CalculatorSession(_settings(args))
    session.press_all(args.keys)
    _print(session.snapshot())


def _add_settings(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--angle-unit", dest="angle_unit", default="deg", choices=["deg", "rad"], help="Angle unit")
    parser.add_argument("--precision", type=int, default=8, help="Significant digits")
    parser.add_argument(
        "--no-separators",
        dest="no_separators",
        action="store_true",
        help="Disable thousands separators",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scientific Calculator CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    eval_parser = subparsers.add_parser("eval", help="Evaluate an expression")
    eval_parser.add_argument("expression", help="Expression, e.g. 'sin(30)+2^3'")
    _add_settings(eval_parser)
    eval_parser.set_defaults(func=command_eval)

    format_parser = subparsers.add_parser("format", help="Format a number for display")
    format_parser.add_argument("value", type=float, help="Number to format (nan/inf accepted)")
    _add_settings(format_parser)
    format_parser.set_defaults(func=command_format)

    plot_parser = subparsers.add_parser("plot", help="Sample an expression in x")
    plot_parser.add_argument("expression", help="Expression using x, e.g. 'sin(x)'")
    plot_parser.add_argument("--x-min", dest="x_min", type=float, default=-10.0, help="Domain start")
    plot_parser.add_argument("--x-max", dest="x_max", type=float, default=10.0, help="Domain end")
    plot_parser.add_argument("--samples", type=int, default=41, help="Number of samples")
    _add_settings(plot_parser)
    plot_parser.set_defaults(func=command_plot)

    bases_parser = subparsers.add_parser("bases", help="Show an expression's value in hex/dec/oct/bin")
    bases_parser.add_argument("expression", help="Expression to evaluate")
    _add_settings(bases_parser)
    bases_parser.set_defaults(func=command_bases)

    keys_parser = subparsers.add_parser("keys", help="Replay keypad presses and show the session state")
    keys_parser.add_argument("keys", nargs="+", help="Keys, e.g. 5 0 %% or 2 × 3 =")
    _add_settings(keys_parser)
    keys_parser.set_defaults(func=command_keys)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
