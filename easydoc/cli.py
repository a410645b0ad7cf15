"""CLI entrypoints for easydoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from .config import ConfigError
from .logging import configure_logging
from .merge import StaticCommentHost, build_comparator_registry
from .models import MethodSignature
from .orchestrator import GenerateOutcome, Orchestrator


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


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Source file or directory (defaults to current directory).",
    )
    parser.add_argument(
        "--symbol",
        help="Only touch the class, method or field with this simple or qualified name.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the diff without writing files.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easydoc",
        description="Generate Javadoc comments and keep them in sync with signatures.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate comments, merging with existing ones.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_target_options(generate_parser)
    generate_parser.add_argument(
        "--ai",
        action="store_true",
        help="Ask the configured model to write the comment instead of the template.",
    )
    generate_parser.add_argument(
        "--no-overwrite",
        dest="overwrite",
        action="store_false",
        help="Leave symbols that already have a comment untouched.",
    )

    remove_parser = subparsers.add_parser(
        "remove",
        help="Remove documentation comments.",
    )
    _add_verbose_option(remove_parser, suppress_default=True)
    _add_target_options(remove_parser)

    merge_parser = subparsers.add_parser(
        "merge",
        help="Reconcile two comment files for a method signature and print the result.",
    )
    _add_verbose_option(merge_parser, suppress_default=True)
    merge_parser.add_argument("--existing", required=True, type=Path, help="File with the current comment.")
    merge_parser.add_argument("--generated", required=True, type=Path, help="File with the fresh comment.")
    merge_parser.add_argument(
        "--param", action="append", default=[], metavar="NAME", help="Parameter name (repeatable)."
    )
    merge_parser.add_argument(
        "--type-param", action="append", default=[], metavar="T", help="Generic type parameter (repeatable)."
    )
    merge_parser.add_argument(
        "--throws", action="append", default=[], metavar="EXCEPTION", help="Declared exception (repeatable)."
    )
    merge_parser.add_argument("--returns", action="store_true", help="The method returns a value.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for easydoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.command == "merge")
    comparators = build_comparator_registry()

    if args.command == "merge":
        try:
            existing = args.existing.read_text(encoding="utf-8")
            generated = args.generated.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        signature = MethodSignature(
            parameters=tuple(args.param),
            type_parameters=tuple(args.type_param),
            exceptions=tuple(args.throws),
            has_return=bool(args.returns),
        )
        host = StaticCommentHost(comment=existing, signature=signature)
        print(comparators["java"].merge_comments(host, generated))
        return

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    orchestrator = Orchestrator(comparators=comparators)
    dry_run = bool(getattr(args, "dry_run", False))
    try:
        if args.command == "generate":
            outcomes = orchestrator.run_generate(
                args.path,
                use_ai=bool(args.ai),
                overwrite=bool(args.overwrite),
                symbol=args.symbol,
                dry_run=dry_run,
            )
        elif args.command == "remove":
            outcomes = orchestrator.run_remove(args.path, symbol=args.symbol, dry_run=dry_run)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    except RuntimeError as exc:
        parser.exit(1, f"easydoc {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    _report(outcomes, dry_run=dry_run)


def _report(outcomes: List[GenerateOutcome], *, dry_run: bool) -> None:
    if not outcomes:
        message = "No comments changed"
        if dry_run:
            message += " (dry-run)"
        print(message)
        return
    for outcome in outcomes:
        if dry_run:
            print(outcome.diff or "(no diff)")
        else:
            print(f"{_relativize(outcome.path)}: {outcome.symbols_written} comment(s) updated")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
