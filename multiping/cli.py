"""
Munin plugin entry point.

    multiping config   print graph metadata
    multiping [fetch]  ping all hosts and print one value line per host

Settings come from the environment (see multiping.config). Values go to
stdout; diagnostics go to stderr via logging.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from multiping.config import get_settings
from multiping.errors import ConfigurationError
from multiping.services import ping_monitor
from multiping.services.reporter import format_config, format_values


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="multiping",
        description="Ping several hosts concurrently and report to Munin",
    )
    ap.add_argument(
        "mode",
        nargs="?",
        default="fetch",
        choices=["config", "fetch"],
        help="'config' prints graph metadata, 'fetch' (default) prints values",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return ap


def _print_lines(lines: List[str]) -> None:
    for line in lines:
        print(line)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    settings = get_settings()

    if args.mode == "config":
        _print_lines(
            format_config(
                settings.hosts,
                title=settings.graph_title,
                category=settings.graph_category,
                times=settings.ping_times,
            )
        )
        return 0

    try:
        run = asyncio.run(ping_monitor.collect_ping_run(settings))
    except ConfigurationError as exc:
        print(f"multiping: {exc}", file=sys.stderr)
        return 1

    _print_lines(format_values(run.order, run.results))
    sys.stdout.flush()
    ping_monitor.persist_run(run, settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
