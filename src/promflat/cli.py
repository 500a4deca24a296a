"""
Command-line consumer for promflat.

Commands:
    promflat <url>                    - Print the flattened mapping as JSON
    promflat <url> --metric NAME      - Print one flattened entry
    promflat <url> --families         - Print the mapped families as JSON
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Sequence

from rich.console import Console

from promflat import __version__
from promflat.config.settings import get_settings
from promflat.core.errors import ConfigurationError, ExitCode, main_with_error_handling
from promflat.exposition.models import families_to_json
from promflat.logging import bind_context, configure_logging
from promflat.parser import fetch_metric_families, parse

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promflat",
        description="Fetch a Prometheus metrics endpoint and flatten it",
    )
    parser.add_argument("url", nargs="?", help="Metrics URL (default: PROMFLAT_DEFAULT_URL)")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--metric", help="Print only the entry for this metric name")
    output.add_argument(
        "--families",
        action="store_true",
        help="Print mapped metric families instead of the flattened mapping",
    )
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", default=None, help="Log level (default: PROMFLAT_LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


@main_with_error_handling()
def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(args.log_level or settings.log_level, settings.log_format)

    url = args.url or settings.default_url
    if not url:
        raise ConfigurationError("no metrics URL given; pass one or set PROMFLAT_DEFAULT_URL")

    timeout = args.timeout if args.timeout is not None else settings.http_timeout
    log = bind_context(url=url)

    if args.families:
        families = fetch_metric_families(url, timeout=timeout, user_agent=settings.user_agent)
        console.print(families_to_json(families), markup=False)
        return ExitCode.SUCCESS

    result = parse(url, timeout=timeout, user_agent=settings.user_agent)
    log.info("scrape_complete", entries=len(result))

    if args.metric:
        if args.metric not in result:
            err_console.print(f"[yellow]metric {args.metric!r} not found in {url}[/yellow]")
            return ExitCode.WARNING
        console.print(json.dumps(result[args.metric]), markup=False)
        return ExitCode.SUCCESS

    console.print(json.dumps(result, indent=2), markup=False)
    return ExitCode.SUCCESS


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
