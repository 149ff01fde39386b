"""CLI entrypoints for gitgrade commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .git.clone import is_remote_url
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
        "default": argparse.SUPPRESS if suppress_default else False,
    }
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .gitgrade.yml file (or a directory containing one).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log records to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitgrade",
        description="Grade a repository with heuristic security, structure and documentation checks.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a local repository or a git URL and print the report as JSON.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_config_option(analyze_parser)
    analyze_parser.add_argument(
        "target",
        nargs="?",
        default=".",
        help="Repository path or git URL (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Skip git history inspection.",
    )
    analyze_parser.add_argument(
        "--roadmap",
        action="store_true",
        help="Ask the configured LLM for an improvement roadmap.",
    )
    analyze_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Write the JSON report to this file instead of stdout.",
    )
    analyze_parser.add_argument(
        "--compact",
        action="store_true",
        help="Emit single-line JSON.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP analysis service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for gitgrade commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=Path(args.log_file) if args.log_file else None,
    )

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "analyze":
        orchestrator = Orchestrator(config)
        include_history = False if args.no_history else None
        try:
            if is_remote_url(args.target):
                report = orchestrator.analyze_remote(
                    args.target,
                    with_roadmap=args.roadmap,
                    include_history=include_history,
                )
            else:
                report = orchestrator.analyze(args.target, include_history=include_history)
                report = orchestrator.enrich(report, with_roadmap=args.roadmap)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (RuntimeError, OSError) as exc:
            parser.exit(1, f"gitgrade analyze failed: {exc}\nRun with --verbose for more details.\n")

        indent = None if args.compact else 2
        payload = json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload + "\n", encoding="utf-8")
            print(f"Report written to {args.output}")
        else:
            print(payload)
    elif args.command == "serve":
        from .service import run_service

        host = args.host or config.service.host
        port = args.port or config.service.port
        run_service(host, port, orchestrator_factory=lambda: Orchestrator(config))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
