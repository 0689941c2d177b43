"""CLI entry point: ``componentsmith extract|convert|screen|generate|serve``."""

from __future__ import annotations

# Phase 1: Singleton logging, before any transitive litellm imports
from componentsmith.logging_config import setup_logging

setup_logging("WARNING")

import argparse  # noqa: E402
import asyncio  # noqa: E402
import json  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

from componentsmith import __version__  # noqa: E402
from componentsmith.config import Settings  # noqa: E402
from componentsmith.errors import (  # noqa: E402
    GenerationError,
    ParseError,
    ProviderNotFoundError,
)
from componentsmith.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
)

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"componentsmith {__version__}")
        return

    if args.command == "extract":
        _run_extract(args)
    elif args.command == "convert":
        _run_convert(args)
    elif args.command == "screen":
        _run_screen(args)
    elif args.command == "generate":
        _run_generate(args)
    elif args.command == "serve":
        _run_serve(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="componentsmith",
        description=(
            "Turn prompts and XML into React components, and AI "
            "answers into typed code blocks."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    extract = sub.add_parser(
        "extract",
        help="Extract classified code blocks from a text file",
    )
    extract.add_argument(
        "path", help="Input file, or - for stdin"
    )
    extract.add_argument(
        "--highlight",
        action="store_true",
        help="Include HTML markup for each block",
    )
    extract.add_argument(
        "--files",
        action="store_true",
        help="Print the file tree derived from block filenames",
    )

    convert = sub.add_parser(
        "convert",
        help="Render an XML file as component markup (no provider)",
    )
    convert.add_argument(
        "path", help="Input file, or - for stdin"
    )
    convert.add_argument(
        "--back",
        action="store_true",
        help=(
            "Treat input as component markup and emit approximate "
            "XML instead"
        ),
    )
    convert.add_argument(
        "--tree",
        action="store_true",
        help="Print the parsed element tree as JSON",
    )

    screen = sub.add_parser(
        "screen",
        help="Screen a text file for unsafe patterns (exit 1 if found)",
    )
    screen.add_argument(
        "path", help="Input file, or - for stdin"
    )

    generate = sub.add_parser(
        "generate",
        help="Generate a component from a prompt",
    )
    generate.add_argument("prompt", help="Natural-language prompt")
    generate.add_argument(
        "--provider",
        "-p",
        default=None,
        help="Provider name (default: from settings)",
    )
    generate.add_argument(
        "--thinking",
        action="store_true",
        help="Also print the provider's thinking steps",
    )

    serve = sub.add_parser("serve", help="Start the HTTP API")
    serve.add_argument(
        "--host", default=None, help="Bind address (default: settings)"
    )
    serve.add_argument(
        "--port", type=int, default=None, help="Port (default: settings)"
    )

    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    file_path = Path(path)
    if not file_path.is_file():
        print(f"Error: {file_path} does not exist", file=sys.stderr)
        sys.exit(1)
    return file_path.read_text(encoding="utf-8")


def _run_extract(args: argparse.Namespace) -> None:
    """Print the classified blocks as JSON."""
    from componentsmith.extraction.pipeline import (
        extract_file_structure,
        parse_response,
    )

    parsed = parse_response(_read_input(args.path), highlight=args.highlight)
    payload: dict[str, object] = {
        "blocks": [b.model_dump(mode="json") for b in parsed.code_blocks],
        "components": parsed.components,
        "unsafe": parsed.unsafe,
    }
    if args.files:
        payload["files"] = [
            n.model_dump(mode="json")
            for n in extract_file_structure(parsed.code_blocks)
        ]
    print(json.dumps(payload, indent=2))


def _run_convert(args: argparse.Namespace) -> None:
    """Render XML as component markup, or markup back to XML."""
    from componentsmith.markup import (
        parse_xml,
        render_component_as_xml,
        render_element_as_component,
    )

    source = _read_input(args.path)
    if args.back:
        print(render_component_as_xml(source))
        return

    try:
        element = parse_xml(source)
    except ParseError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.tree:
        print(json.dumps(element.to_dict(), indent=2))
    else:
        print(render_element_as_component(element))


def _run_screen(args: argparse.Namespace) -> None:
    """Report unsafe patterns; exit status 1 when any are found."""
    from componentsmith.extraction.pipeline import parse_response
    from componentsmith.safety.screener import find_unsafe_patterns

    parsed = parse_response(_read_input(args.path))
    findings = find_unsafe_patterns(parsed.narrative, parsed.code_blocks)
    if not findings:
        print("No unsafe patterns found")
        return
    for finding in findings:
        print(f"  [{finding.location}] {finding.pattern}")
    sys.exit(1)


def _run_generate(args: argparse.Namespace) -> None:
    """Generate a component with the configured provider chain."""
    from componentsmith.generation.llm import build_generators
    from componentsmith.generation.schemas import GenerationOptions
    from componentsmith.repositories.memory import InMemoryVersionStore
    from componentsmith.services.component_service import (
        ComponentService,
    )

    settings = Settings()
    service = ComponentService(
        dict(build_generators(settings)),
        InMemoryVersionStore(),
        settings,
    )
    options = GenerationOptions(
        provider=args.provider, include_thinking=args.thinking
    )

    try:
        result = asyncio.run(service.generate_code(args.prompt, options))
    except (ValueError, ProviderNotFoundError, GenerationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for step in result.thinking:
        print(f"  {step}")
    if result.explanation:
        print(result.explanation)
        print()
    print(result.code)
    if result.unsafe:
        print(
            "\nWarning: generated code uses APIs on the unsafe list",
            file=sys.stderr,
        )


def _run_serve(args: argparse.Namespace) -> None:
    """Start the HTTP API under uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "componentsmith.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
