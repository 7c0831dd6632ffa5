"""CLI entrypoints for codeingest commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .analyzer import analyze
from .config import CATEGORIES, IngestConfig, load_config_or_default
from .curriculum import extract_features, identify_gaps, load_documents
from .detector import detect_stack
from .errors import CodeIngestError
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the codebase root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codeingest",
        description="Extract routes, models, controllers, components and services from a codebase.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a codebase and print the extracted facts.")
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_path_argument(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=("json", "summary"),
        default="json",
        help="Print the full analysis as JSON or a short summary with samples.",
    )
    analyze_parser.add_argument(
        "--categories",
        nargs="+",
        choices=CATEGORIES,
        default=None,
        help="Limit extraction to these categories (overrides .codeingest.yml).",
    )

    detect_parser = subparsers.add_parser("detect", help="Print the detected language and framework.")
    _add_verbose_option(detect_parser, suppress_default=True)
    _add_path_argument(detect_parser)

    gaps_parser = subparsers.add_parser(
        "gaps", help="List code features with no matching documentation title."
    )
    _add_verbose_option(gaps_parser, suppress_default=True)
    _add_path_argument(gaps_parser)
    gaps_parser.add_argument(
        "--docs",
        type=Path,
        required=True,
        help="Directory of markdown or HTML documentation to compare against.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codeingest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.quiet, log_file=args.log_file)

    try:
        if args.command == "analyze":
            analysis = analyze(args.path, config=_config_for(args))
            payload = analysis.summary() if args.format == "summary" else analysis.to_dict()
            print(json.dumps(payload, indent=2))
        elif args.command == "detect":
            language, framework = detect_stack(args.path)
            print(f"{language} {framework or '-'}")
        elif args.command == "gaps":
            analysis = analyze(args.path)
            gaps = identify_gaps(extract_features(analysis), load_documents(args.docs))
            if not gaps:
                print("No documentation gaps found")
            for gap in gaps:
                print(f"[{gap.priority}] {gap.type}: {gap.feature}")
        elif args.command == "serve":  # pragma: no cover - starts a server
            from .service import run_service

            run_service(host=args.host, port=args.port)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except CodeIngestError as exc:
        parser.exit(1, f"codeingest {args.command} failed: {exc}\n")


def _config_for(args: argparse.Namespace) -> IngestConfig | None:
    if not args.categories:
        return None
    root = Path(args.path).expanduser()
    config = load_config_or_default(root)
    config.categories = [name for name in CATEGORIES if name in args.categories]
    return config


if __name__ == "__main__":
    main(sys.argv[1:])
