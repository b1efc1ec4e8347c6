from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .app import run_gui, run_headless
from .core.settings import Settings
from .logging_config import configure_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pixelpond",
        description="Pixel Pond - catch fish, mint them on-chain",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--max-frames", type=int, default=600, help="Frames to simulate in headless mode")
    parser.add_argument("--auto-catch", type=int, default=0, help="Headless: click the oldest fish every N frames")
    parser.add_argument(
        "--rpc-url",
        default=os.getenv("PIXELPOND_RPC_URL"),
        help="JSON-RPC endpoint used as the wallet provider (env: PIXELPOND_RPC_URL)",
    )
    parser.add_argument("--settings", type=Path, default=None, help="YAML file overriding default settings")
    parser.add_argument("--seed", type=int, default=None, help="Seed for spawning and catch attributes")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    args = parser.parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    configure_logging(level)

    settings = Settings.load(args.settings)
    if args.headless:
        return run_headless(
            settings,
            args.rpc_url,
            max_frames=args.max_frames,
            auto_catch=args.auto_catch,
            seed=args.seed,
        )
    return run_gui(settings, args.rpc_url, seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
