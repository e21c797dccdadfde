"""Voxel MapGen CLI entry point.

Generates a fully connected dungeon layout and writes the voxels of its
remaining walls to disk, or runs repeated generations to report layout
statistics. Accepts configuration via flags and environment variables, with
optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import random
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mapgen.dungeon import (
    Dungeon,
    DungeonSpecification,
    Generator,
    GeneratorConfig,
    MapGenError,
    is_connected,
)
from mapgen.logging_utils import get_logger
from mapgen.utils.map_export import write_binary_map, write_text_map

log = get_logger("mapgen.cli")

DEFAULT_OUTPUTS = {"text": "map.txt", "binary": "map.bin"}


def _color_enabled() -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _load_version() -> str:
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def _add_spec_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=15, help="Rooms along x (default: 15)")
    parser.add_argument("--depth", type=int, default=15, help="Rooms along z (default: 15)")
    parser.add_argument("--height", type=int, default=1, help="Rooms along y (default: 1)")
    parser.add_argument(
        "--bias",
        type=float,
        default=None,
        help="Probability of opening a component-separating wall (default: env MAPGEN_SEPARATING_WALL_BIAS or 0.10)",
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Voxel MapGen

    Build a dungeon as a grid of rooms, open walls at random until every room
    is reachable, then export the remaining walls as voxels. Configuration can
    be provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAPGEN_SEED                       Seed for the random source (default: random)
          MAPGEN_SEPARATING_WALL_BIAS       Separating wall probability (default: 0.10)
          MAPGEN_UNIQUE_VOXELS              Drop repeated voxels (default: 0)
          MAPGEN_ENABLE_GENERATION_METRICS  Collect generation metrics (default: 1)
          MAPGEN_LOG_LEVEL                  debug | info | warn | error (default: info)
          MAPGEN_LOG_JSON                   Emit JSON log lines (default: 0)

        Examples:
          # Generate the default 15x15x1 map as viewer text
          python run.py generate

          # Two storeys, fixed seed, binary output for the map loader
          python run.py generate --height 2 --seed 7 --format binary --output map.bin

          # Check 500 runs of a 3x3 grid for connectivity
          python run.py stats --width 3 --depth 3 --runs 500
        """
    )

    parser = argparse.ArgumentParser(
        prog="mapgen",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Voxel MapGen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a map and write its voxels",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one connected layout and write the wall voxels to a file",
    )
    _add_spec_arguments(gen_parser)
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed (default: env MAPGEN_SEED or random)")
    gen_parser.add_argument(
        "--unique",
        action="store_true",
        default=None,
        help="Drop voxels already emitted by a neighbouring face",
    )
    gen_parser.add_argument(
        "--format",
        choices=sorted(DEFAULT_OUTPUTS),
        default="text",
        help="text: 'X Z Y ffffffff' lines; binary: u32 count + u16 x/y/z records",
    )
    gen_parser.add_argument("--output", default=None, help="Output path (default: map.txt or map.bin)")
    gen_parser.set_defaults(command="generate")

    stats_parser = subparsers.add_parser(
        "stats",
        help="Run repeated generations and summarise them as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    _add_spec_arguments(stats_parser)
    stats_parser.add_argument("--runs", type=int, default=100, help="Number of generations (default: 100)")
    stats_parser.add_argument("--seed", type=int, default=1, help="First seed; runs use consecutive seeds")
    stats_parser.set_defaults(command="stats")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(list(argv) + ["generate"])
    return args


def _banner(args: argparse.Namespace, spec: DungeonSpecification) -> None:
    colored = _color_enabled()
    title = f"{Fore.CYAN}{Style.BRIGHT}Voxel MapGen{Style.RESET_ALL}" if colored else "Voxel MapGen"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if colored else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if colored else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if colored else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(args.command.upper())}",
        f"  {label('Rooms:'):12} {value(f'{spec.width}x{spec.depth}x{spec.height}')}",
        divider,
        "",
    ]
    print("\n".join(lines))


def _run_generate(args: argparse.Namespace, spec: DungeonSpecification) -> int:
    config = GeneratorConfig.from_env(
        seed=args.seed,
        separating_wall_bias=args.bias,
        unique_voxels=args.unique,
    )
    dungeon = Dungeon(spec, config)
    path = args.output or DEFAULT_OUTPUTS[args.format]
    if args.format == "binary":
        with open(path, "wb") as f:
            write_binary_map(dungeon.voxels, f)
    else:
        with open(path, "w", encoding="utf-8") as f:
            write_text_map(dungeon.voxels, f)
    print(f"Generated {len(dungeon.voxels)} voxels (seed {dungeon.seed}) -> {path}")
    log.info(event="map_written", path=path, format=args.format, voxels=len(dungeon.voxels), seed=dungeon.seed)
    return 0


def _run_stats(args: argparse.Namespace, spec: DungeonSpecification) -> int:
    if args.runs <= 0:
        print("[ERROR] --runs must be positive")
        return 1
    config = GeneratorConfig.from_env(separating_wall_bias=args.bias)
    opened, iterations, failures = [], [], []
    for seed in range(args.seed, args.seed + args.runs):
        gen = Generator(spec, rng=random.Random(seed), separating_wall_bias=config.separating_wall_bias)
        outputs = gen.run()
        opened.append(len(outputs.opened))
        iterations.append(outputs.iterations)
        if not is_connected(outputs.grid):
            failures.append(seed)
    summary = {
        "runs": args.runs,
        "rooms": spec.num_rooms,
        "adjacent_pairs": spec.num_adjacent_pairs,
        "bias": config.separating_wall_bias,
        "opened_min": min(opened),
        "opened_max": max(opened),
        "opened_mean": round(sum(opened) / len(opened), 3),
        "iterations_max": max(iterations),
        "disconnected_seeds": failures,
    }
    print(json.dumps(summary, indent=2))
    return 1 if failures else 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if _color_enabled():
        _color_init()
    # Load .env if requested, else the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = args.command
    try:
        spec = DungeonSpecification(width=args.width, depth=args.depth, height=args.height)
        _banner(args, spec)
        log.info(event="startup", mode=mode, width=spec.width, depth=spec.depth, height=spec.height)
        if mode == "stats":
            return _run_stats(args, spec)
        return _run_generate(args, spec)
    except (MapGenError, ValueError, OSError) as e:
        err_prefix = f"{Fore.RED}[ERROR]{Style.RESET_ALL}" if _color_enabled() else "[ERROR]"
        print(f"{err_prefix} {e}")
        log.error(event="generation_failed", mode=mode, error=str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
