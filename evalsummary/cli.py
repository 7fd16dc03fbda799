"""Command line interface: run the API server or analyze a PDF through it."""

import argparse
from pathlib import Path

from evalsummary.client.api_client import ApiClient
from evalsummary.client.runner import MODES, AnalysisRunner
from evalsummary.config.settings import Settings
from evalsummary.logging.logger import Log
from evalsummary.main import serve
from evalsummary.pdf.pipeline import build_pipeline


def serve_command(args: argparse.Namespace, settings: Settings) -> int:
    serve(settings, host=args.host, port=args.port)
    return 0


def analyze_command(args: argparse.Namespace, settings: Settings) -> int:
    Log.configure(settings.log_level)
    api_client = ApiClient(
        args.server or settings.client_server_url,
        timeout_seconds=args.timeout or settings.client_timeout_seconds,
    )
    runner = AnalysisRunner(
        api_client,
        build_pipeline(settings),
        compression_threshold_bytes=settings.client_compression_threshold_bytes,
    )
    try:
        return runner.run(
            Path(args.file),
            args.api_key,
            mode=args.mode,
            assume_yes=args.yes,
            output_path=Path(args.output) if args.output else None,
        )
    finally:
        api_client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="evalsummary",
        description="Summarize student course evaluation PDFs with an AI provider.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.set_defaults(func=serve_command)

    analyze_parser = subparsers.add_parser("analyze", help="Summarize one evaluation PDF")
    analyze_parser.add_argument("file", help="Path to the evaluation PDF")
    analyze_parser.add_argument("--api-key", required=True, help="Your AI provider API key")
    analyze_parser.add_argument("--server", default=None, help="Base URL of the API server")
    analyze_parser.add_argument(
        "--mode",
        choices=MODES,
        default="text",
        help="text: extract locally, upload: extract on the server, direct: send the PDF to the AI",
    )
    analyze_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    analyze_parser.add_argument("--output", default=None, help="Where to save the summary")
    analyze_parser.add_argument(
        "--timeout", type=float, default=None, help="Request timeout in seconds"
    )
    analyze_parser.set_defaults(func=analyze_command)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args, Settings())


if __name__ == "__main__":
    raise SystemExit(main())
