# main.py
from __future__ import annotations

import argparse
import sys
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import List, TextIO

from config_reader import MachineConfig, load_config
from debug import Debug
from errors import EnigmaError
from utilities import process_stream

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Runtime switches that influence the output, not the cipher."""

    block: int = 5                  # display group size
    debug: List[str] = field(default_factory=list)   # components to log


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def positive_int(text: str) -> int:
    """argparse type: an integer of at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not an integer") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"block size must be at least 1, got {value}")
    return value


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", metavar="CONFIG", help="Machine description (text or .json).")
    p.add_argument("input", metavar="INPUT", nargs="?", help="Message file. Default: standard input.")
    p.add_argument("output", metavar="OUTPUT", nargs="?", help="Result file. Default: standard output.")
    p.add_argument("--block", type=positive_int, default=5, help="Output group size. Default: 5")
    p.add_argument(
        "--debug", metavar="COMPONENT", action="append", default=[],
        choices=sorted(debug.status()), help="Log one component (repeatable).",
    )
    return p.parse_args(argv)


def run(machine_cfg: MachineConfig, source: TextIO, sink: TextIO, cfg: Config) -> None:
    """Convert every message group in *source* and write it to *sink*."""
    for line in process_stream(machine_cfg, source, block=cfg.block):
        sink.write(line + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = Config(block=args.block, debug=args.debug)
    if cfg.debug:
        debug.enable(*cfg.debug)

    try:
        # validate the machine before the output file gets truncated
        machine_cfg = load_config(args.config)
    except (EnigmaError, OSError) as e:
        sys.exit(f"Error: {e}")

    with ExitStack() as stack:
        try:
            source = (stack.enter_context(open(args.input, encoding="utf-8"))
                      if args.input else sys.stdin)
            sink = (stack.enter_context(open(args.output, "w", encoding="utf-8"))
                    if args.output else sys.stdout)
        except OSError as e:
            sys.exit(f"Error: could not open {e.filename}")

        try:
            run(machine_cfg, source, sink, cfg)
        except UnicodeDecodeError as e:
            sys.exit(f"Error: input is not valid UTF-8 ({e.reason} at byte {e.start})")
        except (EnigmaError, OSError) as e:
            sys.exit(f"Error: {e}")


if __name__ == "__main__":
    main()
