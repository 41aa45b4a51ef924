"""CLI entrypoints for repoinsight commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import load_config
from .errors import RepoInsightError
from .logging import configure_logging, get_logger
from .pipeline import RepositoryAnalyzer
from .sources import LocalRepositorySource


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_repository_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (defaults to <path>/.repoinsight.yml).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the result to this file instead of stdout.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repoinsight",
        description="Analyze a repository's dependencies, frameworks and architecture.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Run the full analysis and print the result.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_repository_arguments(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=("json", "summary"),
        default="json",
        help="Emit the full JSON result or only the prose summary.",
    )

    graph_parser = subparsers.add_parser(
        "graph",
        help="Print only the architecture graph as JSON.",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    _add_repository_arguments(graph_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repoinsight commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(args.config if args.config is not None else Path(args.path))
        source = LocalRepositorySource(args.path, exclude_paths=config.exclude_paths)
        result = RepositoryAnalyzer(config).run(source)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except RepoInsightError as exc:
        parser.exit(1, f"repoinsight {args.command} failed: {exc}\n")
    except Exception as exc:  # pragma: no cover
        logger.debug("Unexpected failure", exc_info=True)
        parser.exit(
            1,
            f"Analysis could not be completed: {exc}\nRun with --verbose for more details.\n",
        )

    if args.command == "graph":
        text = json.dumps(result.architecture.to_dict(), indent=2)
    elif args.format == "summary":
        text = result.summary
    else:
        text = json.dumps(result.to_dict(), indent=2)

    if args.output is not None:
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Result written to {_relativize(args.output)}")
    else:
        print(text)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
