import argparse
import logging
import sys
from typing import Optional, Sequence

from sitecrawl import config
from sitecrawl.container import Container
from sitecrawl.domain.crawl_context import CrawlContext
from sitecrawl.exceptions import InvalidSeedError

USAGE = "Usage: sitecrawl <url> [max_depth] [max_visited]"


def _int_arg(raw: Optional[str], default: int, minimum: int) -> int:
    # Unparseable or out-of-range values fall back to the default.
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sitecrawl", description="Crawl a site, staying on the seed URL's host.")
    parser.add_argument("url", nargs="?", help="seed URL (http or https)")
    parser.add_argument("max_depth", nargs="?", help=f"levels to follow, seed is level 1 (default {config.DEFAULT_DEPTH})")
    parser.add_argument("max_visited", nargs="?", help=f"maximum unique URLs to visit (default {config.DEFAULT_MAX_VISITED})")
    return parser


def main(argv: Optional[Sequence[str]] = None, container: Optional[Container] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.url:
        print(USAGE)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level(), logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    max_depth = _int_arg(args.max_depth, config.DEFAULT_DEPTH, minimum=0)
    max_visited = _int_arg(args.max_visited, config.DEFAULT_MAX_VISITED, minimum=1)

    try:
        context = CrawlContext(args.url, max_depth=max_depth, max_visited=max_visited)
    except InvalidSeedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    container = container or Container()
    try:
        executor = container.crawl_executor()
    except Exception as e:
        print(f"Error: could not create crawler: {e}", file=sys.stderr)
        return 1

    run = executor.start(context)
    for url in run.results:
        print(url, flush=True)
    run.wait()

    errors = list(run.errors)
    if errors:
        print("\nAggregated Errors:", file=sys.stderr)
        for error in errors:
            print(error, file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
