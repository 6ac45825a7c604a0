"""CLI entrypoints for docbundle commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .archive import archive_filename, build_archive
from .bundle import calculate_bundle_size, format_file_size
from .config import ConfigError, load_config
from .errors import DocBundleError, RequestValidationError
from .generation.constants import AUDIENCES, DEFAULT_AUDIENCE, DEFAULT_TONE_STYLE, TONE_STYLES
from .inputs import GenerateRequest
from .logging import configure_logging
from .pipeline import DocumentationPipeline
from .sources import SourceFetcher


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .docbundle.yml or the directory containing it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docbundle",
        description="Generate a docsify documentation bundle from project text.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file (timestamps and logger names included).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate documentation and write it as a ZIP archive.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument("project_name", help="Project name shown in the documentation.")
    generate_parser.add_argument(
        "--code",
        required=True,
        help="File with source code or README text; use '-' to read from stdin.",
    )
    generate_parser.add_argument("--description", default="", help="Short project description.")
    generate_parser.add_argument(
        "--sources",
        default="",
        help="Comma or newline separated URLs to include as extra context.",
    )
    generate_parser.add_argument("--repo-url", default="", help="Repository URL linked from the site.")
    generate_parser.add_argument("--color", default="#D4AF37", help="Accent colour as #RRGGBB.")
    generate_parser.add_argument(
        "--no-sidebar",
        action="store_true",
        help="Use the layout without navigation sidebar.",
    )
    generate_parser.add_argument(
        "--full",
        action="store_true",
        help="Generate a full documentation package instead of a single README.",
    )
    generate_parser.add_argument("--audience", choices=AUDIENCES, default=DEFAULT_AUDIENCE)
    generate_parser.add_argument("--tone", choices=TONE_STYLES, default=DEFAULT_TONE_STYLE)
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Archive path or directory (defaults to <project>-docs-<date>.zip in the current directory).",
    )

    sources_parser = subparsers.add_parser(
        "sources",
        help="Preview which external sources would be fetched.",
    )
    _add_verbose_option(sources_parser, suppress_default=True)
    _add_config_option(sources_parser)
    sources_parser.add_argument("sources", help="Comma or newline separated URLs.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docbundle commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(
        verbose=bool(args.verbose),
        log_file=log_file,
        service=args.command == "serve",
    )

    if args.command == "generate":
        _run_generate(parser, args)
    elif args.command == "sources":
        _run_sources(parser, args)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        code_input = _read_code(args.code)
    except OSError as exc:
        parser.exit(1, f"Unable to read code input: {exc}\n")

    payload = {
        "projectName": args.project_name,
        "description": args.description,
        "codeInput": code_input,
        "sourcesInput": args.sources,
        "repoUrl": args.repo_url,
        "accentColor": args.color,
        "includeSidebar": not args.no_sidebar,
        "generateFullDocs": bool(args.full),
        "audience": args.audience,
        "toneStyle": args.tone,
    }
    try:
        request = GenerateRequest.from_payload(payload)
        pipeline = DocumentationPipeline.from_config_path(args.config)
        outcome = pipeline.run(request)
        archive = build_archive(outcome.bundle)
    except RequestValidationError as exc:
        parser.exit(2, f"Invalid input: {exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Configuration error: {exc}\n")
    except DocBundleError as exc:
        parser.exit(1, f"docbundle generate failed: {exc}\nRun with --verbose for more details.\n")

    target = _resolve_output(args.output, request.project_name)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(archive)

    bundle = outcome.bundle
    print(f"Documentation bundle written to {_relativize(target)}")
    print(f"  Files: {', '.join(item.name for item in bundle.markdown_files)}")
    print(f"  Size: {format_file_size(calculate_bundle_size(bundle))}")
    summary = outcome.source_summary
    if summary is not None:
        print(f"  Sources fetched: {len(summary.fetched)}")
        for failure in summary.failed:
            print(f"  Source failed: {failure['url']} ({failure['error']})")


def _run_sources(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"Configuration error: {exc}\n")
    result = SourceFetcher.from_config(config.sources).fetch_all(args.sources)
    for item in result.fetched:
        print(f"OK     {item.raw_url} -> {item.normalized_url} ({item.chars} chars)")
    for failure in result.failed:
        print(f"FAILED {failure.raw_url}: {failure.error_message}")
    print(f"Combined context: {len(result.combined_context)} chars")


def _read_code(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).expanduser().read_text(encoding="utf-8")


def _resolve_output(output: str | None, project_name: str) -> Path:
    filename = archive_filename(project_name)
    if output is None:
        return Path.cwd() / filename
    target = Path(output).expanduser()
    if target.is_dir():
        return target / filename
    return target


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
