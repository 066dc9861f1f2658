"""Command line entrypoint for Scansector.

`scansector SAVE` opens the viewer on a save; `--list` and `--export` work
without a window.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from scansector import __version__
from scansector.config import DEFAULT_EXPORT_SIZE, THEMES, Config

_logger = logging.getLogger("scansector.main")


def parse_size(text: str) -> Tuple[int, int]:
    try:
        w, h = text.lower().split("x", 1)
        size = (int(w), int(h))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    if size[0] < 200 or size[1] < 150:
        raise argparse.ArgumentTypeError("size must be at least 200x150")
    return size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scansector", description="Scan a Starsector save and plot its star systems")
    parser.add_argument("save", nargs="?", help="campaign.xml to open")
    parser.add_argument("--saves-dir", help="Starsector saves/ folder to list in the picker")
    parser.add_argument("--data-dir", help="where settings and screenshots are kept")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--list", action="store_true", help="print systems and objects, then exit")
    parser.add_argument("--export", metavar="PNG", help="render --system to a PNG, then exit")
    parser.add_argument("--system", help="system name for --export")
    parser.add_argument("--size", type=parse_size, default=DEFAULT_EXPORT_SIZE, help="export size, e.g. 1600x1200")
    parser.add_argument("--theme", choices=sorted(THEMES))
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    cfg = Config.from_env()
    if args.saves_dir:
        cfg = replace(cfg, saves_dir=Path(args.saves_dir))
    if args.data_dir:
        cfg = replace(cfg, data_dir=Path(args.data_dir))
    return replace(cfg, debug=args.debug, theme=args.theme)


def _run_headless(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    from scansector.systems.savefile import SaveFileError, find_system, load_save, summarize

    if not args.save:
        parser.error("--list and --export need a save file")
    if args.export and not args.system:
        parser.error("--export needs --system")
    try:
        systems = load_save(args.save)
    except SaveFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.list:
        print(summarize(systems))

    if args.export:
        system = find_system(systems, args.system)
        if system is None:
            print(f"Error: no system named {args.system!r}", file=sys.stderr)
            return 2
        from scansector.export import export_system_png

        out = export_system_png(system, args.export, args.size, args.theme or "dark")
        print(f"Wrote {out}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = _config_from_args(args)

    if args.list or args.export:
        from scansector.logger import configure_logging

        configure_logging(config.debug, config.log_level)
        return _run_headless(args, parser)

    from scansector.app import Application

    app = Application(config)
    try:
        app.run(Path(args.save) if args.save else None)
    except Exception as e:
        _logger.exception("Failed to run application: %s", e)
        return 1
    return 0



if __name__ == "__main__":
    sys.exit(main())
