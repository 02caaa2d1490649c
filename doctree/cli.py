"""CLI entrypoints for doctree commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .collector import Collector
from .config import ConfigError, DoctreeConfig, LoaderConfig, load_config
from .logging import configure_logging


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doctree",
        description="Collect a documentation tree from a project's loaded modules.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    collect_parser = subparsers.add_parser(
        "collect",
        help="Load a project and write its namespace documentation tree.",
    )
    _add_verbose_option(collect_parser, suppress_default=True)
    collect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root holding .doctree.yml (defaults to current directory).",
    )
    collect_parser.add_argument(
        "--namespaces",
        help="Colon-separated list of root namespaces to document.",
    )
    collect_parser.add_argument(
        "--trim-prefix",
        help="Prefix stripped from namespace names to form short names.",
    )
    collect_parser.add_argument(
        "-o",
        "--output",
        help="File the documentation tree is written to.",
    )
    collect_parser.add_argument(
        "--debug-output",
        help="Extra copy of the tree for debugging.",
    )
    collect_parser.add_argument(
        "--log-file",
        help="Diagnostic log that records debug detail even on quiet runs.",
    )
    collect_parser.add_argument(
        "--source-path",
        action="append",
        default=None,
        help="Directory (relative to the project root) to load modules from; repeatable.",
    )
    collect_parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        help="Module name that must not be loaded; repeatable.",
    )
    return parser


def _apply_overrides(config: DoctreeConfig, args: argparse.Namespace) -> DoctreeConfig:
    if args.namespaces:
        config.namespaces = [part for part in args.namespaces.split(":") if part]
    if args.trim_prefix is not None:
        config.trim_prefix = args.trim_prefix
    if args.output:
        config.output = Path(args.output)
    if args.debug_output:
        config.debug_output = Path(args.debug_output)
    if args.log_file:
        config.log_file = Path(args.log_file)
    if args.source_path is not None or args.exclude is not None:
        load = config.load or LoaderConfig(root=config.root)
        if args.source_path is not None:
            load.source_path = list(args.source_path)
        if args.exclude is not None:
            load.exclude = list(args.exclude)
        config.load = load
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for doctree commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "collect":
        try:
            config = _apply_overrides(load_config(Path(args.path)), args)
            configure_logging(verbose=bool(args.verbose), log_file=config.log_file)
            outcome = Collector().run(config)
        except (ConfigError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"doctree collect failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Documented {outcome.namespaces} namespaces in {_relativize(outcome.output)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
