"""CLI entrypoints for the chaos game window, headless rendering, and diagnostics."""

from __future__ import annotations

import argparse
import json
import random
import sys
import time
from dataclasses import asdict
from pathlib import Path

from chaosgame_core import (
    ChaosGameConfig,
    ChaosGameLoop,
    ConfigError,
    ManualScheduler,
    PerformanceController,
    build_doctor_payload,
    config_to_dict,
    load_config,
    with_overrides,
)
from chaosgame_core.logging_setup import configure_logging, get_logger
from chaosgame_renderer import Color, ImageViewport


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _resolve_config(args: argparse.Namespace) -> ChaosGameConfig:
    cfg = load_config(Path(args.config).expanduser() if args.config else None)

    color: dict[str, int] = {}
    if args.color:
        try:
            parsed = Color.from_hex(args.color)
        except ValueError as exc:
            raise ConfigError(f"--color: {exc}") from exc
        color = {"red": parsed.red, "green": parsed.green, "blue": parsed.blue, "opacity": parsed.opacity}

    return with_overrides(
        cfg,
        render={"horizontal_resolution": args.resolution, "aspect_ratio": args.aspect_ratio},
        loop={"dots_per_tick": args.dots_per_tick, "tick_interval_ms": args.interval_ms},
        color=color,
    )


def _headless_game(
    cfg: ChaosGameConfig, width: int, height: int, seed: int | None = None
) -> tuple[ChaosGameLoop, ManualScheduler, ImageViewport]:
    scheduler = ManualScheduler()
    viewport = ImageViewport(cfg.render.aspect_ratio)
    scheduler.on_resize(viewport.resize)
    rng = random.Random(seed) if seed is not None else None
    game = ChaosGameLoop.from_config(cfg, scheduler, viewport, rng=rng)
    scheduler.resize(width, height)
    return game, scheduler, viewport


def cmd_run(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    from .app import run_gui

    return run_gui(cfg)


def cmd_render(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    width = args.width or cfg.display.initial_width
    height = args.height or cfg.display.initial_height
    game, scheduler, viewport = _headless_game(cfg, width, height, seed=args.seed)

    game.start()
    scheduler.fire(args.ticks)
    game.stop()

    if viewport.frame is None:
        raise ConfigError(f"Output size {width}x{height} leaves no room for a {viewport.aspect_ratio:.4f} frame")
    out = viewport.save(Path(args.out).expanduser())
    get_logger("cli").info("rendered %s", out, extra={"event": "render_saved"})

    _print_json(
        {
            "output": str(out),
            "frame_size": list(viewport.display_size),
            "buffer_size": list(game.buffer.size),
            "ticks": game.stats.ticks,
            "dots": game.stats.dots,
            "dropped_plots": game.buffer.dropped_plots,
        }
    )
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    game, scheduler, _viewport = _headless_game(cfg, cfg.display.initial_width, cfg.display.initial_height)
    perf = PerformanceController()

    game.start()
    start = time.perf_counter()
    deadline = start + args.seconds
    while time.perf_counter() < deadline:
        scheduler.fire()
    elapsed = max(time.perf_counter() - start, 1e-9)
    game.stop()

    stats = game.stats
    dots_per_second = stats.dots / elapsed
    budget = perf.sample(dots_per_second)
    _print_json(
        {
            "seconds": args.seconds,
            "ticks": stats.ticks,
            "dots": stats.dots,
            "ticks_per_second": stats.ticks / elapsed,
            "dots_per_second": dots_per_second,
            "dropped_plots": game.buffer.dropped_plots,
            "budget": asdict(budget),
        }
    )
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(_resolve_config(args)))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    _print_json(config_to_dict(_resolve_config(args)))
    return 0


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def _positive_seconds(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from None
    if not 0 < number < float("inf"):
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds, got {value}")
    return number


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to a JSON config file")
    common.add_argument("--resolution", type=int, default=None, help="Horizontal buffer resolution in pixels")
    common.add_argument("--aspect-ratio", type=float, default=None, help="Buffer width / height")
    common.add_argument("--dots-per-tick", type=int, default=None, help="Points plotted before each redraw")
    common.add_argument("--interval-ms", type=int, default=None, help="Minimum delay between ticks")
    common.add_argument("--color", default=None, help="Draw color as #RRGGBB or #RRGGBBAA")
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chaosgame", description="Sierpinski triangle via the chaos game")
    sub = parser.add_subparsers(dest="command", required=True)
    common = _common_options()

    run_cmd = sub.add_parser("run", parents=[common], help="Open the desktop window")
    run_cmd.set_defaults(func=cmd_run)

    render_cmd = sub.add_parser(
        "render",
        parents=[common],
        help="Render headlessly to a PNG (raise --dots-per-tick for denser images)",
    )
    render_cmd.add_argument("--ticks", type=_positive_int, default=200)
    render_cmd.add_argument("--out", default="chaos_game.png", help="Output PNG path")
    render_cmd.add_argument("--width", type=int, default=None, help="Available output width")
    render_cmd.add_argument("--height", type=int, default=None, help="Available output height")
    render_cmd.add_argument("--seed", type=int, default=None, help="Seed for repeatable corner choices")
    render_cmd.set_defaults(func=cmd_render)

    bench_cmd = sub.add_parser("benchmark", parents=[common], help="Measure headless plotting throughput")
    bench_cmd.add_argument("--seconds", type=_positive_seconds, default=5.0)
    bench_cmd.set_defaults(func=cmd_benchmark)

    doctor_cmd = sub.add_parser("doctor", parents=[common], help="Print environment and config diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    config_cmd = sub.add_parser("config", parents=[common], help="Print the resolved configuration")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except ConfigError as exc:
        get_logger("cli").error("configuration error: %s", exc, extra={"event": "config_error"})
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
