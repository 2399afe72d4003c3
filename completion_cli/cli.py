"""
Command-line entry point.

Usage:
    completion-cli                      # defaults: temperature 0.3, 50 tokens, 1 choice
    completion-cli -t 0.9 -m 200 -n 3   # more creative, longer, three choices
    DEBUG=1 completion-cli -s "\\n"     # stop at newline, with debug logging
"""

import argparse
import asyncio
import logging

from pydantic import ValidationError

from completion_cli import __version__
from completion_cli.client import complete
from completion_cli.config import Settings, get_settings
from completion_cli.console import Console
from completion_cli.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_N,
    DEFAULT_TEMPERATURE,
    PROMPT_LABEL,
)
from completion_cli.exceptions import CompletionClientError
from completion_cli.models import CompletionRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="completion-cli",
        description="Send a prompt to the completions API and print the result",
    )
    parser.add_argument(
        "--temperature", "-t", type=float, default=DEFAULT_TEMPERATURE, help="Response temperature"
    )
    parser.add_argument(
        "--max-tokens", "-m", type=int, default=DEFAULT_MAX_TOKENS, help="Max tokens to use"
    )
    parser.add_argument(
        "-n", type=int, default=DEFAULT_N, help="How many responses to generate"
    )
    parser.add_argument("--stop", "-s", default=None, help="Stop string")
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(debug: bool) -> None:
    """Configure logging once for the whole process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.debug("Logging initialized")


async def run(template: CompletionRequest, settings: Settings, console: Console) -> int:
    """Read the prompt, send one request and print the response.

    Args:
        template: Request carrying the generation parameters from the command line.
        settings: Loaded settings.
        console: Terminal collaborator.

    Returns:
        Process exit code.
    """
    token = settings.require_token()

    logger.debug("Starting prompt")
    prompt = console.read_line(PROMPT_LABEL)
    if prompt is None:
        console.notice("Exiting")
        return 0

    request = template.model_copy(update={"prompt": prompt})

    console.show_progress()
    try:
        response = await complete(
            request,
            settings.completion_endpoint,
            token,
            timeout=settings.completion_timeout,
            debug=settings.debug,
        )
    finally:
        await console.hide_progress()

    console.render_response(response)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        template = CompletionRequest(
            temperature=args.temperature,
            max_tokens=args.max_tokens,
            n=args.n,
            stop=args.stop,
        )
    except ValidationError as e:
        parser.error(str(e))

    console = Console()
    try:
        settings = get_settings()
        configure_logging(settings.debug)
        return asyncio.run(run(template, settings, console))
    except CompletionClientError as e:
        logger.debug("Completion failed", exc_info=True)
        console.error(e.message)
        return 1
