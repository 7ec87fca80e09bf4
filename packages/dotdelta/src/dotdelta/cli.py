"""Command line entry point.

    dotdelta parse <source>
    dotdelta delta <source1> <source2>
    dotdelta watch <source> [--interval S] [--max-polls N]

A source is a file path, ``-`` for stdin, or an http(s) URL. Sources ending
in ``.json`` are read as canonical graph JSON rather than DOT.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from functools import partial
from typing import TextIO

from dotdelta.config import Settings, parse_log_level
from dotdelta.delta import GraphDelta, compute_delta
from dotdelta.errors import DotDeltaError
from dotdelta.interchange import delta_to_dict, dumps, graph_to_dict
from dotdelta.sources import graph_parser_for, load_graph, load_source
from dotdelta.watch import GraphWatcher

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotdelta",
        description="Parse DOT graphs into canonical JSON and diff two graphs.",
    )
    parser.add_argument("--log-level", help="logging level (default: DOTDELTA_LOG_LEVEL or WARNING)")
    parser.add_argument("--compact", action="store_true", help="emit single-line JSON")
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="print the canonical graph of a DOT source")
    parse_cmd.add_argument("source")

    delta_cmd = commands.add_parser("delta", help="print the delta between two graphs")
    delta_cmd.add_argument("before")
    delta_cmd.add_argument("after")

    watch_cmd = commands.add_parser("watch", help="poll a source and print a delta per change")
    watch_cmd.add_argument("source")
    watch_cmd.add_argument("--interval", type=_positive_seconds, help="seconds between polls")
    watch_cmd.add_argument("--max-polls", type=int, help="stop after this many polls")
    return parser


def _positive_seconds(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a number, got {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {raw!r}")
    return value


def main(argv: Sequence[str] | None = None, *, stdout: TextIO | None = None) -> int:
    out = stdout or sys.stdout
    args = build_arg_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        level = parse_log_level(args.log_level) if args.log_level else settings.log_level
    except DotDeltaError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    indent = None if args.compact else settings.json_indent

    try:
        if args.command == "parse":
            graph = load_graph(args.source, settings=settings)
            print(dumps(graph_to_dict(graph), indent=indent), file=out)
        elif args.command == "delta":
            before = load_graph(args.before, settings=settings)
            after = load_graph(args.after, settings=settings)
            print(dumps(delta_to_dict(compute_delta(before, after)), indent=indent), file=out)
        else:
            _watch(args, settings, out)
    except DotDeltaError as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def _watch(args: argparse.Namespace, settings: Settings, out: TextIO) -> None:
    watcher = GraphWatcher(
        args.source,
        loader=partial(load_source, settings=settings),
        interval=settings.poll_interval if args.interval is None else args.interval,
        parse=graph_parser_for(args.source),
    )

    def emit(delta: GraphDelta) -> None:
        print(dumps(delta_to_dict(delta), indent=None), file=out, flush=True)

    watcher.run(emit, max_polls=args.max_polls)


if __name__ == "__main__":
    sys.exit(main())
